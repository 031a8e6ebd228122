"""Minimal dependency injection through modules of bindings.

A `Module` maps type keys to factories, either as singletons (factory runs
once, result is reused) or providers (factory runs on every resolution).
Modules fall back to a parent module and can be joined, the right-hand module
winning on collisions.

Exports:
- `Module`: Bindings plus an optional parent; `declare`, `bind`, `resolve`, `join`.
- `Lifetime`: Enum for the binding policy (singleton or provider).
- `Injectable`: Consumer mixin/facade resolving from a fixed module or the current default.
- `set_default` / `default_module` / `inject`: The process-wide default module.
- `type_key`: Canonical string key of a type expression.
- `NoBindingError`: Raised when no module in the chain binds the requested type.
"""

from ._binding import Binding, Lifetime
from ._errors import CyclicDependencyError, NoBindingError, ResolutionError
from ._inject import Injectable, default_module, inject, reset_default, set_default
from ._module import Binder, JoinedModule, Module, join
from ._typekey import type_key


__all__ = [
    "Binder",
    "Binding",
    "CyclicDependencyError",
    "Injectable",
    "JoinedModule",
    "Lifetime",
    "Module",
    "NoBindingError",
    "ResolutionError",
    "default_module",
    "inject",
    "join",
    "reset_default",
    "set_default",
    "type_key",
]
