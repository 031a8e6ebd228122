import dataclasses
import unittest

import pytest

from modinject import (
    Injectable,
    Module,
    NoBindingError,
    default_module,
    inject,
    reset_default,
    set_default,
)


class Foo:
    def __init__(self, s: str):
        self.s = s

    def __eq__(self, other):
        return isinstance(other, Foo) and other.s == self.s

    __hash__ = None


class Baz: ...


class TestDefaultModule(unittest.TestCase):
    def setUp(self):
        reset_default()

    def tearDown(self):
        reset_default()

    def test_default_starts_empty(self):
        module = default_module()

        assert module.keys() == []
        assert module.parent is None
        assert default_module() is module

    def test_set_default_replaces_previous(self):
        first = Module()
        first.bind("only-first").to(lambda: 1)
        second = Module()

        set_default(first)
        set_default(second)

        assert default_module() is second
        with pytest.raises(NoBindingError):
            inject("only-first")

    def test_inject_uses_default(self):
        set_default(Module())
        default_module().bind(str).to(lambda: "foo")

        class WithDefault:
            def __init__(self, s: str | None = None):
                self.s = inject(str) if s is None else s

        assert WithDefault().s == "foo"

    def test_set_default_rejects_non_module(self):
        with pytest.raises(TypeError):
            set_default("module")  # type: ignore[arg-type]


class TestInjectable(unittest.TestCase):
    def setUp(self):
        reset_default()

    def tearDown(self):
        reset_default()

    def test_mixin_with_explicit_module(self):
        module = Module()
        module.bind(Foo).to(lambda: Foo("foo"))

        class Bar(Injectable):
            def __init__(self):
                super().__init__(module)

            def text(self):
                return self.inject(Foo).s

        assert Bar().text() == "foo"

    def test_explicit_module_ignores_default(self):
        fixed = Module()
        fixed.bind("k").to(lambda: "fixed")
        other = Module()
        other.bind("k").to(lambda: "default")
        set_default(other)

        facade = Injectable(fixed)

        assert facade.inject("k") == "fixed"
        assert facade.module is fixed

    def test_facade_without_module_sees_default_swap(self):
        d1 = Module()
        d2 = Module()
        d2.bind("k").to(lambda: "v")
        set_default(d1)

        facade = Injectable()
        with pytest.raises(NoBindingError):
            facade.inject("k")

        set_default(d2)

        assert facade.inject("k") == "v"
        assert facade.module is d2

    def test_end_to_end(self):
        m = Module()
        m.bind(Foo).to(lambda: Foo("foo"))
        set_default(m)

        class Bar(Injectable):
            pass

        bar = Bar()

        assert bar.inject(Foo) == Foo("foo")
        with pytest.raises(NoBindingError) as ctx:
            bar.inject(Baz)
        assert ctx.value.key.endswith("test_inject.Baz")
        assert "Baz" in str(ctx.value)

    def test_dataclass_consumer_uses_default(self):
        @dataclasses.dataclass
        class Consumer(Injectable):
            name: str

        module = Module()
        module.bind("k").to(lambda: "v")
        set_default(module)

        consumer = Consumer("x")

        assert consumer.inject("k") == "v"
        assert consumer.module is module

    def test_consumer_skipping_super_init_uses_default(self):
        class Consumer(Injectable):
            def __init__(self):
                self.name = "x"

        consumer = Consumer()
        with pytest.raises(NoBindingError):
            consumer.inject("k")

        module = Module()
        module.bind("k").to(lambda: "v")
        set_default(module)

        assert consumer.inject("k") == "v"

    def test_facade_rejects_non_module(self):
        with pytest.raises(TypeError):
            Injectable("module")  # type: ignore[arg-type]
