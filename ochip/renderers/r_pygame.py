#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the display onto an SDL window via PyGame.  Pixels are kept in an
offscreen RGB buffer at the emulated resolution, and only blitted (stretched
with 'Nearest Neighbour' scaling to the window size) when the display is
refreshed and something has actually changed.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = "222222,DDDDDD"  # Background, foreground


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width

        pygame.display.init()
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_map = self._parse_palette(DEFAULT_PALETTE if pygame_palette is None else pygame_palette)
        super().__init__(scale)
        self.set_title(APP_NAME)

    @staticmethod
    def _parse_palette(palette):
        colours = palette.split(",")

        if len(colours) != 2:
            raise RendererError("Palette must define exactly 2 colours: background and foreground.")

        rgb_map = []

        for colour in colours:
            if len(colour) != 6:
                raise RendererError("Palette colours must all be 6 hex digits long.")

            try:
                rgb_map.append(bytes.fromhex(colour))
            except ValueError:
                raise RendererError("Invalid palette colour defined.") from None

        return rgb_map

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(self.rgb_map[0] * total_pixels))  # 24-bit, background filled
        super().set_resolution(width, height)

        # Force a refresh now, in case nothing else is drawn afterwards
        self.refresh_display(True)

    def set_pixel(self, x, y, lit):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[1 if lit else 0]

    def refresh_display(self, content_changed=False):
        if content_changed and self.width and self.height:
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            self.display_surface.blit(pygame.transform.scale(render_surface, self.scaled_size), (0, 0))
            pygame.display.flip()

        super().refresh_display(content_changed)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        pygame.display.quit()
        super().shutdown()
