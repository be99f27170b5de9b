#!/usr/bin/env python3

"""
Curses Audio Plugin

Rings the terminal bell (CTRL+G, character 7 - BEL) when the buzzer is
switched on.  Bells can't be held or stopped, so switching off does nothing.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def enable_buzzer(self, enabled):
        if enabled and not self.buzzer_enabled:
            curses.beep()

        super().enable_buzzer(enabled)
