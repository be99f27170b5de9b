#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ochip.audio.a_null import Audio
from ochip.constants import APP_NAME, DEFAULT_KEYMAP
from ochip.driver import Driver
from ochip.inputs.i_null import Inputs
from ochip.interpreter import Interpreter, MachineFault
from ochip.renderers.r_null import Renderer


class HeldKeyInputs(Inputs):
    def __init__(self, keymap, renderer, held=()):
        super().__init__(keymap, renderer)
        self.held = set(held)

    def is_key_down(self, key):
        return key in self.held


class QuittingInputs(Inputs):
    def __init__(self, keymap, renderer):
        super().__init__(keymap, renderer)
        self.polls = 0

    def process_messages(self):
        self.polls += 1
        return True


class RecordingAudio(Audio):
    def __init__(self):
        super().__init__()
        self.changes = []

    def enable_buzzer(self, enabled):
        super().enable_buzzer(enabled)
        self.changes.append(enabled)


class TestDriver(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()
        self.interpreter = Interpreter(renderer=self.renderer)
        self.audio = RecordingAudio()

    def _driver(self, inputs=None):
        inputs = inputs or Inputs(DEFAULT_KEYMAP, self.renderer)
        return Driver(self.interpreter, inputs, self.audio, clock_speed=0)

    def test_driver_runs_cycles(self):
        self.interpreter.load_program(bytes([0x60, 0x05, 0x61, 0x03, 0x12, 0x04]))  # Ends in a tight loop
        cycles = self._driver().run(max_cycles=10)
        self.assertEqual(10, cycles)
        self.assertEqual(5, self.interpreter.v[0])
        self.assertEqual(3, self.interpreter.v[1])
        self.assertEqual(0x204, self.interpreter.registers.pc)

    def test_driver_refreshes_display(self):
        self.interpreter.load_program(b"\x12\x00")
        self._driver().run(max_cycles=3)
        self.assertGreaterEqual(self.renderer.refresh_count, 2)
        self.assertTrue(self.renderer.title.startswith(APP_NAME))

    def test_driver_forwards_keys(self):
        # SKP V0 skips the jump to 0x300 when key 0x5 is down
        self.interpreter.load_program(bytes([0x60, 0x05, 0xE0, 0x9E, 0x13, 0x00, 0x61, 0x01]))
        inputs = HeldKeyInputs(DEFAULT_KEYMAP, self.renderer, held=[0x5])
        self._driver(inputs).run(max_cycles=3)
        self.assertEqual(1, self.interpreter.v[1])

    def test_driver_quit(self):
        self.interpreter.load_program(b"\x12\x00")
        inputs = QuittingInputs(DEFAULT_KEYMAP, self.renderer)
        self.assertEqual(0, self._driver(inputs).run())
        self.assertEqual(1, inputs.polls)

    def test_driver_buzzer(self):
        # LD V0, 0xFF / LD ST, V0 / JP 0x204
        self.interpreter.load_program(bytes([0x60, 0xFF, 0xF0, 0x18, 0x12, 0x04]))
        driver = self._driver()
        driver.run(max_cycles=3)
        # Turned on by the program, then off again when the driver stops
        self.assertEqual([True, False], self.audio.changes)
        self.assertFalse(driver.buzzer_on)

    def test_driver_fault_propagates(self):
        self.interpreter.load_program(b"\x00\xEE")  # RET with nothing to return to
        driver = self._driver()
        self.assertRaises(MachineFault, driver.run)
        self.assertIsNotNone(self.interpreter.fault)
