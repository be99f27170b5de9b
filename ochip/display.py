#!/usr/bin/env python3

"""
Display Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering plugin) at 60Hz.  Each changed pixel is pushed to the renderer as it
changes, so the renderer never has to scan the whole grid to find out what
moved.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using XOR.  A sprite is 1 to 15 bytes, one
byte per row, most significant bit on the left.

A collision is reported if any pixel was set, but was unset by the XOR.

The sprite's starting position always wraps round the screen.  Whether the rest
of a sprite that runs past the right or bottom edge wraps round to the opposite
side, or is clipped off, is a quirk.  All position handling goes through
'_locate' so drawing and reading can't disagree.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from .renderers.r_null import Renderer as NullRenderer


class DisplayError(Exception):
    pass


class Display:
    def __init__(self, renderer=None, width=DISPLAY_WIDTH, height=DISPLAY_HEIGHT, allow_wrapping=True):
        if width <= 0 or height <= 0:
            raise DisplayError("Display dimensions must be positive")

        self.renderer = NullRenderer() if renderer is None else renderer
        self.allow_wrapping = allow_wrapping
        self.vid_width = width
        self.vid_height = height
        self.vid_size = width * height
        self.vram = memoryview(bytearray(self.vid_size))
        self.content_changed = False
        self.renderer.set_resolution(width, height)

    def _locate(self, x, y):
        # Returns the VRAM offset of a pixel, or None if it falls off the screen and wrapping is disabled

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        return y * self.vid_width + x

    def clear(self):
        self.vram[:] = bytes(self.vid_size)

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, 0)

        self.content_changed = True

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel was clipped
        vram_loc = self._locate(x, y)

        if vram_loc is None:
            return None

        pixel = self.vram[vram_loc]
        self.vram[vram_loc] = pixel ^ 1
        self.renderer.set_pixel(vram_loc % self.vid_width, vram_loc // self.vid_width, pixel ^ 1)
        self.content_changed = True

        return pixel != 0

    def draw(self, x, y, sprite):
        x %= self.vid_width
        y %= self.vid_height
        collided = False

        for row, spr_data in enumerate(sprite):
            for col in range(8):
                if spr_data & (0x80 >> col):
                    if self.xor_pixel(x + col, y + row):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        return collided

    def get_pixel(self, x, y):
        vram_loc = self._locate(x, y)
        return vram_loc is not None and self.vram[vram_loc] != 0

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def view(self):
        # Row-major, one byte per pixel (0 or 1).  Read only, so renderers can't corrupt collision state.
        return self.vram.toreadonly()

    def refresh_display(self):
        self.renderer.refresh_display(self.content_changed)
        self.content_changed = False
