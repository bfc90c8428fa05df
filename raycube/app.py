"""Command entry point: load a level and run the game window."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from .errors import CubError, get_time
from .game import SCREEN_HEIGHT, SCREEN_WIDTH, Game, Key
from .parser import load_map
from .render import Frame, render_frame
from .textures import DOOR_FIRST, load_textures
from .xpm import Texture

WINDOW_TITLE = "Ray Casting"


def _level_path(args: Sequence[str]) -> str:
    if not args:
        raise CubError("argc", "none argument")
    if len(args) != 1:
        raise CubError("argc", "to much arguments")
    return args[0]


def _run(game: Game, textures: Sequence[Texture]) -> None:
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    import pygame

    keymap = {
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_SPACE: Key.SPACE,
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.key.set_repeat(150, 30)
        frame = Frame()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in keymap:
                    if not game.handle_key(keymap[event.key], get_time()):
                        running = False
                elif event.type == pygame.MOUSEMOTION:
                    game.handle_mouse(*event.pos)
            if not running:
                break
            render_frame(game, textures, get_time(), frame)
            pygame.surfarray.blit_array(screen, frame.to_rgb().swapaxes(0, 1))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the level named on the command line and play it; return the exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        info = load_map(_level_path(args))
        textures = load_textures(info)
    except CubError as err:
        print(f"Error\n{err}", file=sys.stderr)
        return 1
    game = Game.from_map(info, textures[DOOR_FIRST].width)
    _run(game, textures)
    return 0