"""Value types for keys, conditions, actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift")


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    """Lower-case and de-duplicate; known modifiers come first as ``ctrl+alt+shift``."""

    names = {name.strip().lower() for name in modifiers} - {""}
    rank = {name: index for index, name in enumerate(MODIFIER_ORDER)}
    return tuple(sorted(names, key=lambda name: (rank.get(name, len(rank)), name)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key plus its modifiers; ``token`` spells it ``ctrl+s``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """The last ``+``-separated part is the key; a trailing ``+`` is the plus key."""

        if text.endswith("+"):
            head, key = text[:-1].rstrip("+"), "+"
        else:
            head, _, key = text.rpartition("+")
        return cls(key, tuple(head.split("+")) if head else ())


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Holds when ``flag`` equals ``expected``; unset flags count as false."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        """``"search_active"``, or ``"!search_active"`` for the negation."""

        text = expression.strip()
        negated = text.startswith("!")
        return cls(text[1:].strip() if negated else text, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named handler, invoked as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' is not callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """``sequence`` typed in ``mode`` runs ``action_id`` while every ``when`` holds."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        clauses = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return {clause.flag: clause.expected for clause in self.when}

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "normalize_modifiers",
]
