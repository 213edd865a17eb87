"""
reckon - Environment
Name-to-value bindings for one interactive session.
"""

from typing import Dict, Iterator, Optional, Tuple
from .values import Value, Integer, Float


class Environment:
    """
    Variable table threaded through successive evaluations.

    Bindings are only ever added or overwritten, never removed, and only
    hold numeric values. One instance belongs to one session; callers
    sharing it across threads must serialize access themselves.
    """

    def __init__(self):
        self._bindings: Dict[str, Value] = {}

    def lookup(self, name: str) -> Optional[Value]:
        return self._bindings.get(name)

    def assign(self, name: str, value: Value) -> None:
        if not isinstance(value, (Integer, Float)):
            raise TypeError(f"Cannot bind {name!r} to non-numeric value {value!r}")
        self._bindings[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Tuple[str, Value]]:
        return iter(sorted(self._bindings.items()))

    def __repr__(self):
        inner = ", ".join(f"{k}={v}" for k, v in self)
        return f"Environment({inner})"
