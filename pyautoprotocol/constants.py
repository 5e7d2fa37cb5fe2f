"""
Constants for pyautoprotocol.

This module centralizes all default values to ensure consistency across modules.
"""

# ========================================================================
# PIPETTING LIMITS
# ========================================================================

# Maximum volume moved by a single atomic pipetting step (µL)
MAX_TIP_VOLUME_UL = 750.0

# Volumes are rounded to this many decimal places while apportioning
# a shared source pool, to bound floating point drift
VOLUME_DECIMAL_PLACES = 12

# ========================================================================
# MIXING DEFAULTS
# ========================================================================

# Used when neither a per-side nor a shared value is given to transfer().
# The default mix volume is half of the transferred volume.
DEFAULT_MIX_REPETITIONS = 10
DEFAULT_MIX_SPEED = "100:microliter/second"

# ========================================================================
# UNITS
# ========================================================================

MICROLITER = "microliter"
NANOLITER = "nanoliter"
MILLILITER = "milliliter"

NANOLITERS_PER_MICROLITER = 1000.0
MICROLITERS_PER_MILLILITER = 1000.0

# ========================================================================
# REFS AND INSTRUCTIONS
# ========================================================================

# Where a container may be stored once a run completes
VALID_STORAGE_CONDITIONS = (
    "ambient",
    "warm_30",
    "warm_37",
    "cold_4",
    "cold_20",
    "cold_80",
)

VALID_INCUBATION_TEMPERATURES = (
    "ambient",
    "warm_30",
    "warm_37",
    "cold_4",
    "cold_20",
    "cold_80",
)

VALID_LIDS = ("standard", "universal", "low_evaporation")
DEFAULT_LID = "standard"

# ========================================================================
# WELL PLATE LAYOUT
# ========================================================================

ROW_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Quadrant labels of a 384-well plate, in quadrant order
QUADRANT_LABELS = ("A1", "A2", "B1", "B2")
