#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap terminal input and hands it to the host loop.  Terminals
only deliver characters; they never say when a key is 'pressed' or
'released'.  So a key is treated as held for a short time after its character
is seen, and keyboard auto-repeat keeps it held while the real key stays down.

ESC (char 27) or CTRL+C (char 3) quits.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import perf_counter
from .i_null import Inputs as InputsBase
from ..constants import NUM_KEYS

# Terminals don't have separate key press/release, so we have to pause after a character is seen
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2
QUIT_CHARS = (27, 3)


def input_thread(thread_quitter_queue, input_queue, keymap_dict, curses_screen):
    # Queues only, so nothing is shared with the main thread
    while thread_quitter_queue.empty():
        # Blocks until something is typed.  As a daemon thread, this is abandoned when the main thread shuts down.
        char = curses_screen.getch()

        if char < 0:
            continue

        if char in QUIT_CHARS:
            input_queue.put(None, block=True)
            break

        keymap_char = keymap_dict.get(ord(chr(char).lower()))

        if keymap_char is not None:
            try:
                input_queue.put(keymap_char, block=False)
            except queue.Full:
                pass


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.key_timers = [0.0] * NUM_KEYS
        super().__init__(keymap, renderer, force_lowercase=True)

        self.thread_quitter_queue = queue.Queue(1)
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(self.thread_quitter_queue, self.input_queue, self.keymap_dict, renderer.get_curses_screen()),
            daemon=True
        )
        self.thread.start()

    def process_messages(self):
        target_time = perf_counter() + KEYBOARD_FAKE_KEYDOWN_TIME

        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                key_pressed = self.input_queue.get(block=False)
            except queue.Empty:
                return False

            if key_pressed is None:
                return True

            self.key_timers[key_pressed] = target_time

    def is_key_down(self, key):
        return self.key_timers[key] > perf_counter()

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already asked the thread to quit
            pass
