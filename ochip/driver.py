#!/usr/bin/env python3

"""
Host Driver Loop

Runs an Interpreter in real time.  Instructions are stepped at the chosen
clock speed, while the delay and sound timers are ticked at a fixed 60Hz
whatever the clock speed is.  Most programs assume somewhere between 500 and
1000 instructions a second.

Inputs are polled, the keypad updated, and the display refreshed at 60Hz too,
since doing any of those on every instruction would slow the CPU right down.

Timing uses the performance counter and busy-waits, as sleeping is nowhere
near precise enough at these intervals.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, DISPLAY_FREQ, NUM_KEYS, TIMER_FREQ

logger = logging.getLogger(__name__)

TIMER_INTERVAL = 1.0 / TIMER_FREQ
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class Driver:
    def __init__(self, interpreter, inputs, audio, clock_speed=DEFAULT_CLOCK_SPEED):
        self.interpreter = interpreter
        self.display = interpreter.display
        self.inputs = inputs
        self.audio = audio

        # A clock speed of 0 (or less) runs uncapped
        self.core_interval = None if clock_speed is None or clock_speed <= 0 else 1.0 / clock_speed
        self.buzzer_on = False

        self.next_timer_tick_time = 0
        self.next_display_update_time = 0
        self.next_perf_report_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0

    def report_perf(self, fps=0, ops=0):
        self.display.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))

    def sync_keys(self):
        inputs = self.inputs

        for key in range(NUM_KEYS):
            self.interpreter.set_key(key, inputs.is_key_down(key))

    def sync_buzzer(self):
        sound_active = self.interpreter.sound_active()

        if sound_active != self.buzzer_on:
            self.audio.enable_buzzer(sound_active)
            self.buzzer_on = sound_active

    def run(self, max_cycles=None):
        # Returns the number of instructions executed.  Stops when the inputs ask to quit, or after 'max_cycles'.
        interpreter = self.interpreter
        core_interval = self.core_interval
        cycles = 0
        self.next_timer_tick_time = perf_counter() + TIMER_INTERVAL
        self.next_display_update_time = 0
        self.report_perf()

        try:
            while max_cycles is None or cycles < max_cycles:
                this_time = perf_counter()  # Do this first for maximum precision

                # Performance counters
                if this_time >= self.next_perf_report_time:
                    self.next_perf_report_time = int(this_time) + 1.0
                    self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                    self.perf_counter_fps = 0
                    self.perf_counter_ops = 0

                # Process inputs and redraw at 60Hz, rather than on every instruction
                if this_time >= self.next_display_update_time:
                    if self.inputs.process_messages():
                        logger.info("Quit requested after %d instructions", cycles)
                        break

                    self.sync_keys()
                    self.next_display_update_time = this_time + DISPLAY_INTERVAL
                    self.display.refresh_display()
                    self.perf_counter_fps += 1

                # Catch up on any timer ticks missed while the CPU was busy
                while this_time >= self.next_timer_tick_time:
                    interpreter.tick_timers()
                    self.next_timer_tick_time += TIMER_INTERVAL

                interpreter.step()
                self.sync_buzzer()
                cycles += 1
                self.perf_counter_ops += 1

                if core_interval is not None:
                    # Wait for next CPU instruction.  Do this last, so time spent on this instruction is accounted for.
                    next_time = this_time + core_interval

                    while perf_counter() < next_time:
                        pass
        finally:
            # Show the last frame, whether quitting or halted by a fault
            self.display.refresh_display()

            if self.buzzer_on:
                self.audio.enable_buzzer(False)
                self.buzzer_on = False

        return cycles
