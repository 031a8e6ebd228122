from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from ._errors import CyclicDependencyError


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()

# bindings currently being resolved, per thread
_resolving = threading.local()


class Lifetime(Enum):
    SINGLETON = "singleton"
    PROVIDER = "provider"


class Binding(Generic[T]):
    """A factory evaluated under a lifetime policy.

    - SINGLETON: the factory runs at most once, even when several threads race
      on the first resolution. Its result is returned from then on. If the
      factory raises, nothing is cached and the next resolution tries again.
    - PROVIDER: the factory runs on every resolution.

    A thread that re-enters a binding it is still resolving gets
    `CyclicDependencyError`. The guard tracks bindings, not depth, so a provider
    whose factory resolves itself again raises even when the recursion would
    have ended on its own.
    """

    def __init__(self, key: str, factory: Callable[[], T], lifetime: Lifetime = Lifetime.SINGLETON) -> None:
        if not callable(factory):
            msg = f"Factory for {key} must be callable, got {factory!r}"
            raise TypeError(msg)

        self.key = key
        self.lifetime = lifetime
        self._factory = factory
        self._value: object = _UNSET
        self._lock = threading.RLock()

    @property
    def is_resolved(self) -> bool:
        return self._value is not _UNSET

    def resolve(self) -> T:
        if self.lifetime is Lifetime.PROVIDER:
            with _entered(self):
                return self._factory()

        value = self._value
        if value is _UNSET:
            with self._lock:
                if self._value is _UNSET:
                    with _entered(self):
                        created = self._factory()
                    self._value = created
                    logger.debug("Created singleton for %s", self.key)
                value = self._value

        return value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Binding({self.key}, {self.lifetime.value})"


@contextmanager
def _entered(binding: Binding[object]) -> Iterator[None]:
    stack: list[Binding[object]] | None = getattr(_resolving, "stack", None)
    if stack is None:
        stack = _resolving.stack = []

    for i, pending in enumerate(stack):
        if pending is binding:
            chain = [b.key for b in stack[i:]]
            chain.append(binding.key)
            raise CyclicDependencyError(chain)

    stack.append(binding)
    try:
        yield
    finally:
        stack.pop()
