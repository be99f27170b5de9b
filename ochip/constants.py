#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "OctaChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000         # 4K of addressable RAM
RESERVED_TOP = 0x1FF      # Interpreter and font area
DEFAULT_LOAD_OFFSET = 0x200
ETI_660_LOAD_OFFSET = 0x600
FONT_LOCATION = 0x50
FONT_GLYPH_SIZE = 5

# CPU
NUM_REGISTERS = 0x10
STACK_DEPTH = 16
NUM_KEYS = 0x10

# Display
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Host timing
TIMER_FREQ = 60.0         # Delay and sound timers always count down at 60Hz
DISPLAY_FREQ = 60.0
DEFAULT_CLOCK_SPEED = 700  # Instructions per second

# Built-in hexadecimal font, 0 to F, one 4x5 glyph per digit
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Quirk options, and the values each one accepts.  The first value listed is the default.
QUIRK_CHOICES = {
    "shift": ("vx", "vy"),
    "store_load_increment": (0, 1),
    "draw_wrap": ("wrap", "clip"),
    "add_i_overflow": (0, 1),
    "jump": ("v0", "vx")
}
