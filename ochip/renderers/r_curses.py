#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the display in a terminal (a Linux-style TTY, the Windows Command
Prompt, or PowerShell) as inverted spaces, one pair of characters per pixel so
the aspect ratio looks about right.

The top line of the pad holds the title, so the picture starts one line down.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch

        self.pixel_char = " " * scale
        self.pad = None
        self.refresh_needed = False
        self.last_screen_size = None
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()

        try:
            curses.curs_set(self.cursor_mode)
        except curses.error:
            # Not every terminal can hide the cursor
            pass

        super().__init__(scale)

    def set_resolution(self, width, height):
        # One extra line for the title, and one extra column so the bottom-right pixel can be written
        self.pad = curses.newpad(height + 1, width * self.scale + 1)
        super().set_resolution(width, height)

    def set_pixel(self, x, y, lit):
        self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if lit else curses.A_NORMAL)
        self.refresh_needed = True

    def refresh_display(self, content_changed=False):
        screen_size = self.screen.getmaxyx()

        if screen_size != self.last_screen_size:
            # Terminal resized, so redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(*screen_size)

            self.screen.refresh()
            self.last_screen_size = screen_size
            self.refresh_needed = True

        if self.refresh_needed:
            screen_height, screen_width = screen_size
            self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
            self.refresh_needed = False

        super().refresh_display(content_changed)

    def set_title(self, title):
        if self.pad and self.width:
            line_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:line_width].ljust(line_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def get_curses_screen(self):
        # Curses-specific, for the matching input plugin
        return self.screen

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        try:
            curses.curs_set(1)
        except curses.error:
            pass

        curses.endwin()
        super().shutdown()
