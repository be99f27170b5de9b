#!/usr/bin/env python3

"""
Interpreter Configuration

Historical CHIP-8 interpreters disagree on a handful of instructions, and
programs were written against whichever one the author had.  There is no
single correct behaviour, so each disagreement is a quirk that can be toggled
here, and the whole set is handed to the Interpreter when it is built.

Quirks
------

- Shift quirks               : "vx" shifts Vx in place (CHIP-48 and later).
                               "vy" shifts Vy into Vx (original COSMAC VIP).
- Store/load increment quirks: Enabled, Fx55/Fx65 leave I pointing past the
                               last register transferred (COSMAC VIP).
- Draw wrap quirks           : "wrap" wraps sprites round the screen edges.
                               "clip" trims them at the right and bottom.
- Add I overflow quirks      : Enabled, Fx1E sets VF if I goes past 0xFFF
                               (Amiga interpreter).  Disabled by default.
- Jump quirks                : "v0" jumps to nnn + V0 (COSMAC VIP).  "vx"
                               jumps to xnn + Vx (CHIP-48 and Super-CHIP).

The load offset is where the program image starts: 0x200 normally, or 0x600
for the ETI 660.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DEFAULT_LOAD_OFFSET, MEM_SIZE, RESERVED_TOP, QUIRK_CHOICES


class ConfigError(Exception):
    pass


class Config:
    def __init__(self, load_offset=DEFAULT_LOAD_OFFSET, shift_quirk="vx", store_load_increment_quirk=False,
                 draw_wrap_quirk="wrap", add_i_overflow_quirk=False, jump_quirk="v0"):

        if not isinstance(load_offset, int) or not RESERVED_TOP < load_offset < MEM_SIZE:
            raise ConfigError(
                "Load offset must be between 0x{:03x} and 0x{:03x}".format(RESERVED_TOP + 1, MEM_SIZE - 1)
            )

        self.load_offset = load_offset
        self.shift_quirk = self._check_choice("shift", shift_quirk)
        self.store_load_increment_quirk = bool(self._check_choice("store_load_increment", store_load_increment_quirk))
        self.draw_wrap_quirk = self._check_choice("draw_wrap", draw_wrap_quirk)
        self.add_i_overflow_quirk = bool(self._check_choice("add_i_overflow", add_i_overflow_quirk))
        self.jump_quirk = self._check_choice("jump", jump_quirk)

    @staticmethod
    def _check_choice(quirk, value):
        choices = QUIRK_CHOICES[quirk]

        if value not in choices:
            raise ConfigError(
                "Invalid {} quirk '{}', expected one of: {}".format(
                    quirk.replace("_", " "), value, ", ".join(str(choice) for choice in choices)
                )
            )

        return value

    @property
    def shift_uses_vy(self):
        return self.shift_quirk == "vy"

    @property
    def draw_wraps(self):
        return self.draw_wrap_quirk == "wrap"

    @property
    def jump_uses_vx(self):
        return self.jump_quirk == "vx"

    @classmethod
    def from_args(cls, args):
        # Build from a command line dictionary.  Missing or 'None' entries take the defaults.
        settings = {}

        if args.get("load_offset") is not None:
            settings["load_offset"] = args["load_offset"]

        for quirk in QUIRK_CHOICES:
            quirk_label = "{}_quirks".format(quirk)
            quirk_setting = args.get(quirk_label)

            if quirk_setting is not None:
                settings["{}_quirk".format(quirk)] = quirk_setting

        return cls(**settings)

    def as_dict(self):
        return {
            "load_offset": self.load_offset,
            "shift_quirk": self.shift_quirk,
            "store_load_increment_quirk": self.store_load_increment_quirk,
            "draw_wrap_quirk": self.draw_wrap_quirk,
            "add_i_overflow_quirk": self.add_i_overflow_quirk,
            "jump_quirk": self.jump_quirk
        }

    def __repr__(self):
        return "Config({})".format(", ".join("{}={!r}".format(key, val) for key, val in self.as_dict().items()))
