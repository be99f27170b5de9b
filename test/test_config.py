#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ochip.config import Config, ConfigError


class TestConfig(unittest.TestCase):
    def test_config_defaults(self):
        config = Config()
        self.assertEqual(0x200, config.load_offset)
        self.assertFalse(config.shift_uses_vy)
        self.assertFalse(config.store_load_increment_quirk)
        self.assertTrue(config.draw_wraps)
        self.assertFalse(config.add_i_overflow_quirk)
        self.assertFalse(config.jump_uses_vx)

    def test_config_load_offset(self):
        self.assertEqual(0x600, Config(load_offset=0x600).load_offset)
        self.assertRaises(ConfigError, Config, load_offset=0x1FF)
        self.assertRaises(ConfigError, Config, load_offset=0x1000)
        self.assertRaises(ConfigError, Config, load_offset="0x200")

    def test_config_invalid_choice(self):
        self.assertRaises(ConfigError, Config, shift_quirk="vz")
        self.assertRaises(ConfigError, Config, draw_wrap_quirk="bounce")
        self.assertRaises(ConfigError, Config, jump_quirk="v1")

        for value in "off", "0", "no", 2, "vy", None:
            with self.subTest(value=value):
                self.assertRaises(ConfigError, Config, store_load_increment_quirk=value)
                self.assertRaises(ConfigError, Config, add_i_overflow_quirk=value)

    def test_config_on_off_choices(self):
        for value, enabled in (0, False), (1, True), (False, False), (True, True):
            with self.subTest(value=value):
                self.assertIs(enabled, Config(store_load_increment_quirk=value).store_load_increment_quirk)
                self.assertIs(enabled, Config(add_i_overflow_quirk=value).add_i_overflow_quirk)

    def test_config_from_args(self):
        config = Config.from_args({
            "load_offset": 0x600,
            "shift_quirks": "vy",
            "store_load_increment_quirks": 1,
            "draw_wrap_quirks": "clip",
            "add_i_overflow_quirks": 1,
            "jump_quirks": "vx"
        })
        self.assertEqual(0x600, config.load_offset)
        self.assertTrue(config.shift_uses_vy)
        self.assertTrue(config.store_load_increment_quirk)
        self.assertFalse(config.draw_wraps)
        self.assertTrue(config.add_i_overflow_quirk)
        self.assertTrue(config.jump_uses_vx)

    def test_config_from_args_missing(self):
        config = Config.from_args({"filename": "game.ch8", "load_offset": None, "shift_quirks": None})
        self.assertEqual(Config().as_dict(), config.as_dict())

    def test_config_repr(self):
        self.assertIn("jump_quirk='v0'", repr(Config()))
