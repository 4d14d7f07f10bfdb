#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from c8vm import main
from c8vm.config import DEFAULT_PROFILE, PROFILES
from c8vm.constants import DEFAULT_KEYMAP, CPU_QUIRKS


def parse_args():
    parser = ArgumentParser()
    parser.add_argument("filename", help="program to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-p", "--profile", choices=list(PROFILES.keys()), default=DEFAULT_PROFILE,
        help="set CPU quirks automatically for CHIP-8, CHIP-48, or Super-CHIP programs"
    )
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="override the CPU speed in operations/second (default 700, 0 = uncapped)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering, input, and audio systems (pygame by default)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1], default=0,
        help="mute the emulated audio"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 PyGame keyscan codes.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours in comma-separated hex, e.g. 000000,FFFFFF"
    )

    for cpu_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(cpu_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(cpu_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    return parser.parse_args()  # Can call sys.exit(2) if args are incorrect


if __name__ == "__main__":
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling this with a dictionary
    main(args)
