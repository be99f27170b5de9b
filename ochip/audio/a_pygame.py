#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a looping square wave through PyGame / SDL while the buzzer is enabled.
The original hardware only had a buzzer with an 'on' or 'off' status, so one
fixed tone is all that's needed.  The wave is built once, as unsigned 8-bit
mono samples.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


def square_wave(tone_frequency, playback_frequency=PLAYBACK_FREQUENCY):
    # One full cycle: high for the first half, low for the second
    period = max(2, int(round(playback_frequency / tone_frequency)))
    half_period = period // 2
    return bytes([0xFF] * half_period + [0x00] * (period - half_period))


class Audio(AudioBase):
    def __init__(self, tone_frequency=TONE_FREQUENCY):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=square_wave(tone_frequency))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # Only start or stop playback when the state actually changes, so the wave isn't restarted every frame
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
