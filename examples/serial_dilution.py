"""
Serial Dilution Example

Builds a protocol that serially dilutes a sample 1:2 across row A of a
96-well plate, incubates it and reads luminescence, then prints the
resulting Autoprotocol JSON.
"""

import logging

from pyautoprotocol import Protocol


def main():
    """Build and print a serial dilution protocol."""
    logging.basicConfig(level=logging.INFO)

    p = Protocol()
    p.set_tip_type("filtered")

    # Containers
    plate = p.ref("dilution_plate", cont_type="96-flat", storage="cold_4")
    reservoir = p.ref("buffer", cont_type="micro-2.0", discard=True)
    reservoir.well(0).set_volume("1.5:milliliter")

    # 1. Buffer into columns 2-12 of row A
    row_a = plate.wells_from("A1", 12)
    p.transfer(reservoir.well(0), row_a[1:], "50:microliter", one_tip=True)

    # 2. Sample into A1
    row_a[0].set_volume("100:microliter").set_name("sample")

    # 3. Dilute down the row, mixing after each step
    p.transfer(row_a[:-1], row_a[1:], "50:microliter", mix_after=True, repetitions=5,
               new_group=True)

    # 4. Incubate and read
    p.cover(plate)
    p.incubate(plate, "warm_37", "30:minute")
    p.uncover(plate)
    p.luminescence(plate, row_a, "dilution_series")

    p.print_summary()
    print()
    print(p.as_json(indent=2))


if __name__ == "__main__":
    main()
