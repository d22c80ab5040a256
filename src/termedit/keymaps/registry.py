"""Registry of actions and the key bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence

from termedit.runtime.telemetry import span

from .models import ActionRef, Binding

_Slot = tuple[str, str]


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Another binding already owns these keys in the same mode and context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]) -> None:
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(repr(other.id) for other in self.conflicts)
        super().__init__(f"Binding '{binding.id}' collides with {taken}")


def _slot(binding: Binding) -> _Slot:
    return (binding.mode, binding.key_signature)


def _collides(left: Binding, right: Binding) -> bool:
    """Same keys clash unless the ``when`` conditions tell them apart."""

    return dict(left.when_map) == dict(right.when_map)


class KeymapRegistry:
    """Actions by id, bindings by id, and a (mode, keys) index for conflicts.

    ``revision`` increases on every binding change so resolvers know when to
    rebuild their lookup tables.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[_Slot, set[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            if replace:
                evicted = self.detect_conflicts(binding)
                previous = self._bindings.get(binding.id)
                if previous is not None:
                    evicted.append(previous)
                for other in evicted:
                    self._forget(other)
                handle.add_metadata("evicted", len(evicted))
            else:
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                conflicts = self.detect_conflicts(binding)
                if conflicts:
                    raise KeymapConflictError(binding, conflicts)

            self._bindings[binding.id] = binding
            self._slots.setdefault(_slot(binding), set()).add(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._forget(binding)
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        """Bindings in registration order, optionally limited to one mode."""

        for binding in list(self._bindings.values()):
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        modes = {binding.mode for binding in self._bindings.values()}
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(modes)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        skip = {binding.id, *(ignore or ())}
        return [
            self._bindings[other_id]
            for other_id in sorted(self._slots.get(_slot(binding), ()))
            if other_id not in skip and _collides(binding, self._bindings[other_id])
        ]

    def _forget(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = _slot(binding)
        ids = self._slots.get(slot)
        if ids is None:
            return
        ids.discard(binding.id)
        if not ids:
            del self._slots[slot]


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
