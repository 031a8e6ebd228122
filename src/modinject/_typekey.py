"""Canonical string keys for Python type expressions.

Two type expressions that mean the same thing get the same key, so
``list[int]`` and ``typing.List[int]`` find the same binding, and so do
``int | None`` and ``Optional[int]``. Union members and ``Literal``
values are sorted, so the order they are written in does not matter.

Plain strings are taken as manual keys, and so are forward references:
``list["Foo"]`` is keyed ``builtins.list[Foo]``, not by the class ``Foo``
would name once defined.
"""

from __future__ import annotations

import types
import typing
from typing import Annotated, Any, ForwardRef, Literal, TypeVar, Union, get_args, get_origin


_UNION_ORIGINS = {Union, getattr(types, "UnionType", Union)}


def type_key(token: object) -> str:
    """Return the canonical key for `token`.

    Keys are computed from the token alone, never from earlier calls.

    Example:
      type_key(int) == "builtins.int"
      type_key(dict[str, list[int]]) == "builtins.dict[builtins.str, builtins.list[builtins.int]]"
      type_key(str | int) == type_key(int | str) == "typing.Union[builtins.int, builtins.str]"
      type_key("db") == "db"

    """
    if isinstance(token, str):
        return token

    return _render(token)


def _render(tp: object) -> str:  # noqa: C901, PLR0911
    if tp is None or tp is type(None):
        return "builtins.NoneType"
    if tp is Ellipsis:
        return "..."
    if tp is Any:
        return "typing.Any"
    if isinstance(tp, str):
        return tp
    if isinstance(tp, ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, TypeVar):
        return f"~{tp.__name__}"
    if isinstance(tp, (list, tuple)):
        # Callable parameter lists
        return f"[{_join(tp)}]"

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)

        if origin is Annotated:
            metadata = ", ".join(_literal(m) for m in args[1:])
            return f"typing.Annotated[{_render(args[0])}, {metadata}]"

        if origin in _UNION_ORIGINS:
            members = sorted({_render(a) for a in args})
            return f"typing.Union[{', '.join(members)}]"

        if origin is Literal:
            values = sorted({(_render(type(a)), repr(a)) for a in args})
            return f"typing.Literal[{', '.join(r for _, r in values)}]"

        if not args:
            return _render(origin)

        return f"{_render(origin)}[{_join(args)}]"

    if isinstance(tp, (type, typing.NewType)):
        return f"{tp.__module__}.{tp.__qualname__}"

    msg = f"Cannot derive a type key from {tp!r}"
    raise TypeError(msg)


def _literal(value: object) -> str:
    # True == 1, so the type is part of the key
    if isinstance(value, (bool, int, float, complex)):
        return f"{type(value).__name__}({value!r})"
    return repr(value)


def _join(args: typing.Iterable[object]) -> str:
    return ", ".join(_render(a) for a in args)
