#!/usr/bin/env python3

"""
Hexadecimal Keypad

Holds the up/down state of the 16 keys (0-F).  Only the host input plugin
writes to it, through 'set_key', and only the key instructions read it.

The key-wait instruction needs a fresh press rather than a key that happened to
be held already, so a released-to-pressed transition is latched as the last
keypress.  'setup_keypress' clears the latch before waiting starts.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def set_key(self, key, pressed):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} does not exist on the keypad".format(key))

        pressed = bool(pressed)

        if pressed and not self.key_down[key]:
            self.last_keypress = key

        self.key_down[key] = pressed

    def is_key_down(self, key):
        # Only the low nibble of a register selects a key
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def release_all(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False

        self.last_keypress = None
