"""The process-wide default module and the consumer-side `Injectable` facade."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, overload

from ._module import Module


logger = logging.getLogger(__name__)

T = TypeVar("T")

_EMPTY = Module(name="empty")
_default: Module | None = None


def set_default(module: Module) -> None:
    """Replace the default module. The previous one is dropped, not merged."""
    global _default  # noqa: PLW0603

    if not isinstance(module, Module):
        msg = f"Default must be a Module, got {type(module).__name__}"
        raise TypeError(msg)

    _default = module
    logger.debug("Default module set to %r", module)


def reset_default() -> None:
    """Go back to the empty default module."""
    global _default  # noqa: PLW0603

    _default = None


def default_module() -> Module:
    """Return the current default module, or an empty module if none was set."""
    module = _default
    return _EMPTY if module is None else module


@overload
def inject(token: type[T]) -> T: ...


@overload
def inject(token: object) -> Any: ...


def inject(token: object) -> Any:
    """Resolve `token` against the current default module."""
    return default_module().resolve(token)


class Injectable:
    """Gives a consumer an `inject` method.

    With an explicit module, that module is used for the consumer's whole
    lifetime. Without one, every `inject` call reads the current default, so
    `set_default` after construction is seen by the consumer.

    Use as a mixin or on its own:

      class Bar(Injectable):
          def __init__(self) -> None:
              super().__init__()

      injector = Injectable(module)
      foo = injector.inject(Foo)

    A consumer whose `__init__` never reaches `Injectable.__init__`, such as a
    dataclass, uses the current default.
    """

    _module: Module | None = None

    def __init__(self, module: Module | None = None) -> None:
        if module is not None and not isinstance(module, Module):
            msg = f"Expected a Module, got {type(module).__name__}"
            raise TypeError(msg)

        self._module = module

    @property
    def module(self) -> Module:
        """The module `inject` uses right now."""
        return default_module() if self._module is None else self._module

    @overload
    def inject(self, token: type[T]) -> T: ...

    @overload
    def inject(self, token: object) -> Any: ...

    def inject(self, token: object) -> Any:
        return self.module.resolve(token)
