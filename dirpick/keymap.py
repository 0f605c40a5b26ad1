"""Key-token to navigation-action bindings."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from .file_model import Action

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    action: Action


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("j", "DOWN", "MOUSE_WHEEL_DOWN"), Action.MOVE_DOWN),
    KeyBinding(("k", "UP", "MOUSE_WHEEL_UP"), Action.MOVE_UP),
    KeyBinding(("g", "HOME"), Action.JUMP_TOP),
    KeyBinding(("G", "END"), Action.JUMP_BOTTOM),
    KeyBinding(("l", "RIGHT"), Action.DESCEND),
    KeyBinding(("h", "LEFT", "BACKSPACE"), Action.ASCEND),
    KeyBinding(("ENTER",), Action.OPEN),
    KeyBinding(("q", "ESC", "CTRL_C"), Action.CANCEL),
)


def strip_mouse_coordinates(key: str) -> str:
    """Drop ``:col:row`` suffixes so mouse tokens bind by event kind."""
    if key.startswith("MOUSE_"):
        return key.split(":", 1)[0]
    return key


def parse_action(name: object) -> Action | None:
    """Return the action named ``name`` (``"move_down"``, ``"confirm"`` ...)."""
    if not isinstance(name, str):
        return None
    candidate = name.strip().lower().replace("-", "_")
    try:
        return Action(candidate)
    except ValueError:
        return None


class Keymap:
    """Key dispatch table with a token normalizer."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else strip_mouse_coordinates
        self._actions: dict[str, Action] = {}

    @classmethod
    def default(cls) -> Keymap:
        return cls().bind_all(DEFAULT_BINDINGS)

    def bind(self, binding: KeyBinding) -> Keymap:
        """Register one binding, overwriting existing actions for same combos."""
        for combo in binding.combos:
            self._actions[self._normalize(combo)] = binding.action
        return self

    def bind_all(self, bindings: Iterable[KeyBinding]) -> Keymap:
        for binding in bindings:
            self.bind(binding)
        return self

    def unbind(self, key: str) -> Keymap:
        self._actions.pop(self._normalize(key), None)
        return self

    def apply_overrides(self, overrides: Mapping[str, object]) -> Keymap:
        """Apply user ``{key: action-name}`` overrides.

        Empty or ``None`` action names unbind the key; unknown action names are
        skipped.
        """
        for key, name in overrides.items():
            if not isinstance(key, str) or not key:
                continue
            if name is None or name == "":
                self.unbind(key)
                continue
            action = parse_action(name)
            if action is None:
                logger.debug("ignoring unknown action %r for key %r", name, key)
                continue
            self.bind(KeyBinding((key,), action))
        return self

    def lookup(self, key: str) -> Action | None:
        return self._actions.get(self._normalize(key))

    def keys_for(self, action: Action) -> tuple[str, ...]:
        return tuple(key for key, bound in self._actions.items() if bound is action)


__all__ = [
    "KeyBinding",
    "DEFAULT_BINDINGS",
    "Keymap",
    "parse_action",
    "strip_mouse_coordinates",
]
