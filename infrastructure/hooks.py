"""In-process action/filter hook registry.

Callbacks run in ascending priority, and in registration order within the
same priority.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

DEFAULT_PRIORITY = 10


@dataclass
class _Hook:
    callback: Callable[..., Any]
    priority: int
    accepted_args: int
    seq: int


class HookRegistry:
    """Registry of named actions and filters."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[_Hook]] = defaultdict(list)
        self._seq = 0

    def _add(
        self, name: str, callback: Callable[..., Any], priority: int, accepted_args: int
    ) -> None:
        self._seq += 1
        hooks = self._hooks[name]
        hooks.append(_Hook(callback, priority, accepted_args, self._seq))
        hooks.sort(key=lambda h: (h.priority, h.seq))

    def add_action(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register `callback` to run when action `name` fires."""
        self._add(name, callback, priority, accepted_args)

    def add_filter(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register `callback` to transform the value of filter `name`."""
        self._add(name, callback, priority, accepted_args)

    def do_action(self, name: str, *args: Any) -> None:
        """Run every callback registered for action `name`."""
        for hook in list(self._hooks.get(name, [])):
            callback_name = getattr(hook.callback, "__name__", hook.callback)
            logger.debug("do_action {} -> {}", name, callback_name)
            hook.callback(*args[: hook.accepted_args])

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass `value` through every callback registered for filter `name`."""
        for hook in list(self._hooks.get(name, [])):
            call_args = (value, *args)[: hook.accepted_args]
            value = hook.callback(*call_args)
        return value
