"""A scoped map from names to values."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, List, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Environment(Generic[K, V]):
    """A stack of scopes binding names to values, over a permanent base scope."""

    def __init__(self) -> None:
        self._scopes: List[Dict[K, V]] = [{}]

    def push(self) -> None:
        """Opens a new scope."""
        self._scopes.append({})

    def pop(self) -> bool:
        """Drops the newest scope; returns False if only the base scope is left."""
        if len(self._scopes) == 1:
            return False
        self._scopes.pop()
        return True

    def bind(self, name: K, value: V) -> Optional[V]:
        """Binds ``name`` in the top scope, returning the value it replaced."""
        scope = self._scopes[-1]
        previous = scope.get(name)
        scope[name] = value
        return previous

    def bind_base(self, name: K, value: V) -> Optional[V]:
        """Binds ``name`` in the base scope, returning the value it replaced."""
        scope = self._scopes[0]
        previous = scope.get(name)
        scope[name] = value
        return previous

    def find(self, name: K) -> Optional[V]:
        """The value bound to ``name`` in the innermost scope that binds it."""
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None