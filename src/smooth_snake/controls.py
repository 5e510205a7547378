"""Mapping of raw input to engine calls."""

from __future__ import annotations

import enum

from smooth_snake.engine import GameEngine
from smooth_snake.snake import Direction


class InputAction(str, enum.Enum):
    """Discrete actions a player can trigger."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    START = "start"
    RESET = "reset"
    TOGGLE_AUTOPLAY = "toggle_autoplay"
    POINTER = "pointer"


# Keyboard keys (DOM ``KeyboardEvent.key`` names) to actions.
KEY_BINDINGS: dict[str, InputAction] = {
    "ArrowUp": InputAction.UP,
    "ArrowDown": InputAction.DOWN,
    "ArrowLeft": InputAction.LEFT,
    "ArrowRight": InputAction.RIGHT,
    " ": InputAction.START,
    "r": InputAction.RESET,
    "a": InputAction.TOGGLE_AUTOPLAY,
}

_TURNS: dict[InputAction, Direction] = {
    InputAction.UP: Direction.UP,
    InputAction.DOWN: Direction.DOWN,
    InputAction.LEFT: Direction.LEFT,
    InputAction.RIGHT: Direction.RIGHT,
}


def action_for_key(key: str) -> InputAction | None:
    """Return the action bound to *key*, ignoring letter case."""
    action = KEY_BINDINGS.get(key)
    if action is None and len(key) == 1:
        action = KEY_BINDINGS.get(key.lower())
    return action


def dispatch(engine: GameEngine, action: InputAction) -> bool:
    """Apply *action* to *engine*.

    Returns ``True`` when the engine has just started running and the caller
    must begin requesting frames.
    """
    if action in _TURNS:
        if engine.autoplay:
            return False
        started = engine.start()
        engine.push_turn(_TURNS[action])
        return started
    if action is InputAction.START:
        return engine.start()
    if action is InputAction.RESET:
        engine.reset()
        return False
    # Autoplay toggles, from the keyboard or a pointer press.
    engine.toggle_autoplay()
    return engine.start()
