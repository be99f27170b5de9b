#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

Used on its own, nothing is drawn anywhere, which suits tests and headless
runs.  The pixel grid itself always lives in the Display, so the interpreter
behaves the same whichever renderer is attached.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = ""
        self.refresh_count = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, lit):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, content_changed=False):  # pylint: disable=unused-argument
        self.refresh_count += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
