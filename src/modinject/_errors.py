from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class ResolutionError(RuntimeError):
    pass


class NoBindingError(ResolutionError, LookupError):
    """No binding for the requested key anywhere in the module chain."""

    def __init__(self, key: str, module: str) -> None:
        super().__init__(f"No binding for: {key} in {module}")
        self.key = key
        self.module = module


class CyclicDependencyError(ResolutionError):
    """A binding was re-entered while it was still being resolved on the same thread."""

    def __init__(self, chain: Sequence[str]) -> None:
        super().__init__(f"Cyclic dependency: {' -> '.join(chain)}")
        self.chain = tuple(chain)
