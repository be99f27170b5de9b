#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the SDL event queue for real key 'press' and 'release' events, so keys
are held for exactly as long as they are held on the host keyboard.  The queue
should only be drained at 60Hz, as checking it is time consuming.

Closing the window or pressing ESC quits.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import NUM_KEYS


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.key_down = [False] * NUM_KEYS

        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, renderer)

    def process_messages(self):
        quit_program = False

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method and pygame_method(event):
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def _pygame_quit(self, _):
        return True

    def _pygame_keydown(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        self._set_key(event.key, True)
        return False

    def _pygame_keyup(self, event):
        self._set_key(event.key, False)
        return False

    def _set_key(self, keyscan, pressed):
        hex_key = self.keymap_dict.get(keyscan)

        if hex_key is not None:
            self.key_down[hex_key] = pressed

    def is_key_down(self, key):
        return self.key_down[key]
