#!/usr/bin/env python3

"""
Delay and Sound Timers

Both counters tick down towards zero at 60Hz, whatever speed the CPU is being
clocked at.  The host loop is responsible for calling 'tick' at that rate.

The buzzer sounds for as long as the sound timer is above zero.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class TimerUnit:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    def sound_active(self):
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
