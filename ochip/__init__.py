#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

Any option may be left out, or given as 'None', to use its default.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .config import Config, ConfigError
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from .driver import Driver
from .hostio import Loader
from .interpreter import Interpreter, InterpreterError, MachineFault, ProgramError, check_program


class StartupError(Exception):
    pass


def _select_plugins(opt_renderer, mute_audio):
    # Returns (Inputs, Renderer, Audio) classes.  If necessary, try PyGame first, then Curses.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel
        try:
            import pygame
        except ImportError:
            if not auto_select_renderer:
                raise StartupError("PyGame does not appear to be installed.") from None

            opt_renderer = "curses"
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Inputs, Renderer, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                ) from None

            raise StartupError("Curses (or Windows-Curses) does not appear to be installed.") from None

        from .inputs.i_curses import Inputs
        from .renderers.r_curses import Renderer

        # Terminals can handle fixed-length beeps, but not sampled sound
        if mute_audio or mute_audio is None:
            from .audio.a_null import Audio
        else:
            from .audio.a_curses import Audio

        return Inputs, Renderer, Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

        return Inputs, Renderer, Audio

    raise StartupError("Unknown renderer '{}'.".format(opt_renderer))


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    logging.basicConfig(
        level=logging.DEBUG if args.get("debug") else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s"
    )

    try:
        config = Config.from_args(args)
    except ConfigError as err:
        raise StartupError(str(err)) from None

    # Read the ROM and check it fits before any host windows or terminals are taken over
    program = check_program(Loader().load_binary(args["filename"]), config.load_offset)
    Inputs, Renderer, Audio = _select_plugins(args.get("renderer"), args.get("mute"))

    renderer = Renderer(
        scale=args.get("scale"),
        pygame_palette=args.get("pygame_palette"),
        curses_cursor_mode=args.get("curses_cursor_mode") or 0
    )

    try:
        inputs = Inputs(args.get("keymap") or DEFAULT_KEYMAP, renderer)
    except Exception:
        renderer.shutdown()
        raise

    audio = Audio()
    interpreter = Interpreter(config, renderer)
    clock_speed = args.get("clock_speed")

    try:
        interpreter.load_program(program)
        driver = Driver(interpreter, inputs, audio, DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed)
        driver.run()
    finally:
        # The interpreter has quit or halted, so shut down the host plugins.  __del__ cannot be relied upon.
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()


__all__ = [
    "main", "StartupError", "Config", "ConfigError", "Interpreter", "InterpreterError", "MachineFault", "ProgramError"
]
