from __future__ import annotations

import functools
import logging
import threading
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from ._binding import Binding, Lifetime
from ._errors import NoBindingError
from ._typekey import type_key


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Module:
    """A set of bindings from type keys to factories, with an optional parent.

    - declare singletons (factory runs once) or providers (factory runs per resolve)
    - resolve locally first, then through the parent chain
    - compose with `join` / `|`, the right-hand module winning on collisions.

    Declare bindings in `configure()` or right after construction, before the
    module is shared with other threads.
    """

    def __init__(self, parent: Module | None = None, *, name: str | None = None) -> None:
        if parent is not None and not isinstance(parent, Module):
            msg = f"Parent must be a Module, got {type(parent).__name__}"
            raise TypeError(msg)

        self._bindings: dict[str, Binding[Any]] = {}
        self._parent = parent
        self._name = name
        self._lock = threading.RLock()
        self.configure()

    @property
    def parent(self) -> Module | None:
        return self._parent

    @property
    def name(self) -> str | None:
        return self._name

    def configure(self) -> None:
        """Declare bindings. Called once from `__init__`; override in subclasses.

        Example:
          class AppModule(Module):
              def configure(self) -> None:
                  self.bind(Db).to(lambda: Db("sqlite://"))
                  self.bind(Request).to_provider(Request)

        """

    def declare(self, token: object, factory: Callable[[], Any], lifetime: Lifetime = Lifetime.SINGLETON) -> None:
        """Bind `token` to `factory` in this module, replacing any binding for the same key here.

        Bindings in parent modules are never touched.
        """
        key = type_key(token)
        binding = Binding(key, factory, lifetime)

        with self._lock:
            if key in self._bindings:
                logger.warning("Overwriting binding for %s in %r", key, self)
            self._bindings[key] = binding

        logger.debug("Declared %s binding for %s", lifetime.value, key)

    def declare_singleton(self, token: type[T] | object, factory: Callable[[], T]) -> None:
        self.declare(token, factory, Lifetime.SINGLETON)

    def declare_provider(self, token: type[T] | object, factory: Callable[[], T]) -> None:
        self.declare(token, factory, Lifetime.PROVIDER)

    def bind(self, token: type[T] | object) -> Binder[T]:
        return Binder(self, token)

    def singleton(self, token: type[T] | object) -> Callable[[Callable[[], T]], Callable[[], T]]:
        """Decorator registering a zero-argument function as a singleton factory.

        Example:
          @module.singleton(Config)
          def make_config() -> Config:
              return Config.load()

        """

        def decorator(factory: Callable[[], T]) -> Callable[[], T]:
            self.declare_singleton(token, factory)
            return factory

        return decorator

    def provider(self, token: type[T] | object) -> Callable[[Callable[[], T]], Callable[[], T]]:
        """Decorator registering a zero-argument function as a provider factory."""

        def decorator(factory: Callable[[], T]) -> Callable[[], T]:
            self.declare_provider(token, factory)
            return factory

        return decorator

    @overload
    def resolve(self, token: type[T]) -> T: ...

    @overload
    def resolve(self, token: object) -> Any: ...

    def resolve(self, token: object) -> Any:
        """Resolve `token` to an instance.

        - If this module binds the token's key: use that binding.
        - Otherwise ask the parent chain.
        - Raise `NoBindingError` when nothing in the chain binds it.
        """
        key = type_key(token)
        binding = self._lookup(key)
        if binding is None:
            raise NoBindingError(key, repr(self))

        return binding.resolve()

    def binding(self, token: object) -> Binding[Any] | None:
        """Return the binding `resolve` would use for `token`, if any."""
        return self._lookup(type_key(token))

    def is_bound(self, token: object) -> bool:
        return self.binding(token) is not None

    def __contains__(self, token: object) -> bool:
        return self.is_bound(token)

    def keys(self) -> list[str]:
        """Keys declared locally, in declaration order."""
        with self._lock:
            return list(self._bindings)

    def join(self, other: Module) -> Module:
        """Compose with `other`; bindings of `other` take precedence over bindings of `self`.

        Neither module is modified. `a.join(b).join(c)` and `a.join(b.join(c))`
        both consult `c`, then `b`, then `a`.
        """
        if not isinstance(other, Module):
            msg = f"Can only join a Module, got {type(other).__name__}"
            raise TypeError(msg)

        return JoinedModule(self, other)

    def __or__(self, other: object) -> Module:
        if not isinstance(other, Module):
            return NotImplemented
        return self.join(other)

    def _local(self, key: str) -> Binding[Any] | None:
        with self._lock:
            return self._bindings.get(key)

    def _fallbacks(self) -> Iterable[Module]:
        return () if self._parent is None else (self._parent,)

    def _lookup(self, key: str) -> Binding[Any] | None:
        binding = self._local(key)
        if binding is not None:
            return binding

        for fallback in self._fallbacks():
            binding = fallback._lookup(key)  # noqa: SLF001
            if binding is not None:
                return binding

        return None

    def _describe(self) -> str:
        label = f"{self._name}, " if self._name else ""
        return f"{label}bindings: {', '.join(self.keys())}"

    def __repr__(self) -> str:
        return f"Module({self._describe()}, parent: {self._parent!r})"


class JoinedModule(Module):
    """Result of `left.join(right)`: looks in its own bindings, then `right`, then `left`."""

    def __init__(self, left: Module, right: Module, *, name: str | None = None) -> None:
        self._left = left
        self._right = right
        super().__init__(name=name)

    @property
    def layers(self) -> tuple[Module, Module]:
        """The joined modules, highest precedence first."""
        return (self._right, self._left)

    def _fallbacks(self) -> Iterable[Module]:
        return self.layers

    def __repr__(self) -> str:
        return f"Module({self._left!r} | {self._right!r}, {self._describe()})"


class Binder(Generic[T]):
    """Fluent declaration: `module.bind(Foo).to(make_foo)`."""

    def __init__(self, module: Module, token: type[T] | object) -> None:
        self._module = module
        self._token = token

    def to(self, factory: Callable[[], T]) -> None:
        self._module.declare_singleton(self._token, factory)

    def to_provider(self, factory: Callable[[], T]) -> None:
        self._module.declare_provider(self._token, factory)

    def to_instance(self, instance: T) -> None:
        self._module.declare_singleton(self._token, lambda: instance)


def join(*modules: Module) -> Module:
    """Join modules left to right; later modules take precedence."""
    if not modules:
        msg = "join() needs at least one module"
        raise TypeError(msg)

    return functools.reduce(Module.join, modules)
