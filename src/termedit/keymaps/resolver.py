"""Turn the keys typed so far into a binding, a pending prefix, or a miss."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Mapping, Optional, Sequence

from termedit.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

Status = Literal["match", "pending", "miss"]


@dataclass(slots=True)
class _Node:
    binding_ids: list[str] = field(default_factory=list)
    children: Dict[str, "_Node"] = field(default_factory=dict)


@dataclass(slots=True)
class _ModeTrie:
    revision: int
    root: _Node

    @classmethod
    def build(cls, revision: int, bindings: Iterable[Binding]) -> "_ModeTrie":
        root = _Node()
        for binding in bindings:
            node = root
            for token in binding.sequence.tokens:
                node = node.children.setdefault(token, _Node())
            node.binding_ids.append(binding.id)
        return cls(revision, root)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``consumed`` counts the tokens found in the trie before stopping."""

    status: Status
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Resolves token sequences against one trie per mode.

    Tries are rebuilt lazily whenever the registry's revision moves on.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, _ModeTrie] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "tokens": " ".join(keys)},
        ) as handle:
            result = self._walk(self._trie(mode).root, keys, context or {})
            handle.add_metadata("status", result.status)
            if result.match:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def _trie(self, mode: str) -> _ModeTrie:
        revision = self._registry.revision()
        trie = self._tries.get(mode)
        if trie is None or trie.revision != revision:
            trie = _ModeTrie.build(revision, self._registry.iter_bindings(mode))
            self._tries[mode] = trie
        return trie

    def _walk(
        self, node: _Node, keys: tuple[str, ...], context: Mapping[str, bool]
    ) -> ResolutionResult:
        for depth, key in enumerate(keys):
            next_node = node.children.get(key)
            if next_node is None:
                return ResolutionResult(status="miss", consumed=depth)
            node = next_node

        match = self._best_match(node.binding_ids, context)
        if match is not None:
            return ResolutionResult(status="match", match=match, consumed=len(keys))
        if node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(keys),
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=len(keys))

    def _best_match(
        self, binding_ids: Iterable[str], context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        """Highest priority wins; ties go to the lowest binding id."""

        allowed = [
            binding
            for binding in map(self._registry.get_binding, binding_ids)
            if binding.allows(context)
        ]
        if not allowed:
            return None
        best = min(allowed, key=lambda binding: (-binding.priority, binding.id))
        return ResolutionMatch(best, self._registry.get_action(best.action_id))


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
