"""Object model and execution context for the Mython interpreter."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, TextIO, TypeVar

T = TypeVar("T")

Closure = dict
"""A symbol table mapping names to Mython values (``None`` stands for None)."""


class MythonRuntimeError(RuntimeError):
    """Raised when a Mython program fails while it runs."""


class Context:
    """Execution context; ``print`` statements write to ``output``."""

    output: TextIO


class DummyContext(Context):
    """A context that collects all output in memory."""

    def __init__(self) -> None:
        self.output = io.StringIO()


class SimpleContext(Context):
    """A context that writes output to the stream it was given."""

    def __init__(self, output: TextIO) -> None:
        self.output = output


class Object(ABC):
    """Base class of every Mython value."""

    @abstractmethod
    def print_to(self, stream: TextIO, context: Context) -> None:
        """Write the textual form of the object to ``stream``."""


class Executable(ABC):
    """Something that can be run against a closure and a context."""

    @abstractmethod
    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        """Run and return the resulting value, or ``None``."""


@dataclass(frozen=True)
class ValueObject(Object, Generic[T]):
    """An immutable object wrapping a plain value."""

    value: T

    def print_to(self, stream: TextIO, context: Context) -> None:
        stream.write(str(self.value))


class String(ValueObject[str]):
    """A Mython string."""


class Number(ValueObject[int]):
    """A Mython integer."""


class Bool(ValueObject[bool]):
    """A Mython boolean."""

    def print_to(self, stream: TextIO, context: Context) -> None:
        stream.write("True" if self.value else "False")


@dataclass
class Method:
    """A method of a Mython class."""

    name: str
    formal_params: list[str] = field(default_factory=list)
    body: Optional[Executable] = None


class Class(Object):
    """A Mython class, optionally derived from a parent class."""

    def __init__(self, name: str, methods: list[Method] | None = None,
                 parent: Optional[Class] = None) -> None:
        self.name = name
        self.methods = list(methods or [])
        self.parent = parent

    def get_method(self, name: str) -> Optional[Method]:
        """Return the method called ``name``, searching parents, or ``None``."""
        cls: Optional[Class] = self
        while cls is not None:
            for method in cls.methods:
                if method.name == name:
                    return method
            cls = cls.parent
        return None

    def print_to(self, stream: TextIO, context: Context) -> None:
        stream.write(f"Class {self.name}")

    def __repr__(self) -> str:
        return f"Class({self.name!r})"


class ClassInstance(Object):
    """An instance of a Mython class holding its own fields."""

    def __init__(self, cls: Class) -> None:
        self.cls = cls
        self.fields: dict = {}

    def print_to(self, stream: TextIO, context: Context) -> None:
        if not self.has_method("__str__", 0):
            stream.write(f"<{self.cls.name} object at {id(self):#x}>")
            return
        result = self.call("__str__", [], context)
        if result is None:
            stream.write("None")
        else:
            result.print_to(stream, context)

    def has_method(self, method: str, argument_count: int) -> bool:
        """Tell whether the instance has ``method`` taking ``argument_count`` arguments."""
        found = self.cls.get_method(method)
        return found is not None and len(found.formal_params) == argument_count

    def call(self, method: str, actual_args: list, context: Context) -> Optional[Object]:
        """Invoke ``method`` with ``actual_args`` and return its result."""
        if not self.has_method(method, len(actual_args)):
            raise MythonRuntimeError(f"No such method in class: {method}")
        found = self.cls.get_method(method)
        closure: dict = {"self": self}
        closure.update(zip(found.formal_params, actual_args))
        if found.body is None:
            return None
        return found.body.execute(closure, context)


def is_true(obj: Optional[Object]) -> bool:
    """Non-zero numbers, True and non-empty strings are true; all else is false."""
    if isinstance(obj, (String, Number, Bool)):
        return bool(obj.value)
    return False


def _call_dunder(lhs: Optional[Object], name: str, rhs: Optional[Object],
                 context: Context) -> Optional[bool]:
    if isinstance(lhs, ClassInstance) and lhs.has_method(name, 1):
        result = lhs.call(name, [rhs], context)
        if not isinstance(result, Bool):
            raise MythonRuntimeError(f"{name} must return a Bool")
        return result.value
    return None


def _compare_values(lhs: Optional[Object], rhs: Optional[Object],
                    predicate: Callable[[object, object], bool]) -> Optional[bool]:
    for kind in (String, Number, Bool):
        if isinstance(lhs, kind) and isinstance(rhs, kind):
            return predicate(lhs.value, rhs.value)
    return None


def equal(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    """Compare two values for equality, using ``__eq__`` on class instances."""
    result = _call_dunder(lhs, "__eq__", rhs, context)
    if result is not None:
        return result
    if lhs is None and rhs is None:
        return True
    result = _compare_values(lhs, rhs, lambda a, b: a == b)
    if result is not None:
        return result
    raise MythonRuntimeError("Cannot compare objects for equality")


def less(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    """Compare two values with ``<``, using ``__lt__`` on class instances."""
    result = _call_dunder(lhs, "__lt__", rhs, context)
    if result is not None:
        return result
    result = _compare_values(lhs, rhs, lambda a, b: a < b)
    if result is not None:
        return result
    raise MythonRuntimeError("Cannot compare objects for less")


def not_equal(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    return not equal(lhs, rhs, context)


def greater(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    return not less(lhs, rhs, context) and not equal(lhs, rhs, context)


def less_or_equal(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    return less(lhs, rhs, context) or equal(lhs, rhs, context)


def greater_or_equal(lhs: Optional[Object], rhs: Optional[Object], context: Context) -> bool:
    return not less(lhs, rhs, context)