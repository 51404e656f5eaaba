# tagstate/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tagstate.core.machine import Machine


@runtime_checkable
class HookProtocol(Protocol):
    """
    Observer for machine lifecycle events. Both methods are optional; the
    manager only calls the ones a hook defines.
    """

    def on_transition(self, machine: "Machine", source: Any, action: str, target: Any) -> None:
        ...

    def on_error(self, error: Exception) -> None:
        ...


class Hook:
    """
    A no-op hook. Subclass it and override the methods you care about.
    """

    def on_transition(self, machine: "Machine", source: Any, action: str, target: Any) -> None:
        pass

    def on_error(self, error: Exception) -> None:
        pass


class HookManager:
    """
    Manages the registration and execution of hooks that listen to machine
    events (on_transition, on_error). Users can attach logging, tracing or
    custom side effects without altering core logic.
    """

    def __init__(self, hooks: Optional[List[Any]] = None) -> None:
        """
        Initialize with an optional list of hook objects.
        """
        self._hooks: List[Any] = list(hooks) if hooks else []

    def register_hook(self, hook: Any) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing some or all of HookProtocol.
        """
        self._hooks.append(hook)

    def unregister_hook(self, hook: Any) -> None:
        """Remove a previously registered hook. Unknown hooks are ignored."""
        if hook in self._hooks:
            self._hooks.remove(hook)

    @property
    def hooks(self) -> List[Any]:
        return list(self._hooks)

    def execute_on_transition(self, machine: "Machine", source: Any, action: str, target: Any) -> None:
        """
        Run all hooks' on_transition logic after a transition has been applied.
        """
        for hook in self._hooks:
            if hasattr(hook, "on_transition"):
                hook.on_transition(machine, source, action, target)

    def execute_on_error(self, error: Exception) -> None:
        """
        Run all hooks' on_error logic when dispatch fails.
        """
        for hook in self._hooks:
            if hasattr(hook, "on_error"):
                hook.on_error(error)
