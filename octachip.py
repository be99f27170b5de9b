#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from ochip import main
from ochip.constants import DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, ETI_660_LOAD_OFFSET, QUIRK_CHOICES


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-o", "--load_offset", type=lambda value: int(value, 0),
        help="address the program is loaded and started at (default 0x200, 0x{:03x} for ETI 660 programs)".format(
            ETI_660_LOAD_OFFSET
        )
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 000000,33FF66"
    )

    for quirk, choices in QUIRK_CHOICES.items():
        parser.add_argument(
            "--{}_quirks".format(quirk), type=type(choices[0]), choices=choices,
            help="select {} quirks (default {})".format(quirk.replace("_", " "), choices[0])
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="log every instruction executed.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli(argv=None):
    # It is possible to start the emulator from a GUI by calling main() with a dictionary
    main(vars(parse_args(argv)))


if __name__ == "__main__":
    cli()
