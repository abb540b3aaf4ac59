"""Statement and expression nodes of the Mython abstract syntax tree."""

from __future__ import annotations

import io
from typing import Callable, Iterable, Optional, Sequence, Union

from mythonkit.runtime import (
    Bool,
    Class,
    ClassInstance,
    Context,
    Executable,
    MythonRuntimeError,
    Number,
    Object,
    String,
    is_true,
)

Statement = Executable

ADD_METHOD = "__add__"
INIT_METHOD = "__init__"

Comparator = Callable[[Optional[Object], Optional[Object], Context], bool]


class _ReturnSignal(Exception):
    """Carries the value of a ``return`` statement up to the enclosing method body."""

    def __init__(self, value: Optional[Object]) -> None:
        super().__init__("return outside of a method")
        self.value = value


class ValueStatement(Statement):
    """An expression that always yields the same value object."""

    _kind: type = Object

    def __init__(self, value) -> None:
        if not isinstance(value, self._kind):
            value = self._kind(value)
        self.value = value

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        return self.value


class NumericConst(ValueStatement):
    """A numeric literal."""

    _kind = Number


class StringConst(ValueStatement):
    """A string literal."""

    _kind = String


class BoolConst(ValueStatement):
    """A boolean literal."""

    _kind = Bool


class VariableValue(Statement):
    """Reads a variable or a chain of fields such as ``circle.center.x``."""

    def __init__(self, names: Union[str, Sequence[str]]) -> None:
        self.names = [names] if isinstance(names, str) else list(names)
        if not self.names:
            raise ValueError("a variable needs at least one name")

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        first, *rest = self.names
        if first not in closure:
            raise MythonRuntimeError(f"There is no such name in closure: {first}")
        obj = closure[first]
        for name in rest:
            if not isinstance(obj, ClassInstance):
                raise MythonRuntimeError(f"Cannot read field {name} of a non-object")
            if name not in obj.fields:
                raise MythonRuntimeError(f"There is no such name in closure: {name}")
            obj = obj.fields[name]
        return obj


class Assignment(Statement):
    """Binds the value of ``rv`` to the variable ``var``."""

    def __init__(self, var: str, rv: Statement) -> None:
        self.var = var
        self.rv = rv

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        value = self.rv.execute(closure, context)
        closure[self.var] = value
        return value


class FieldAssignment(Statement):
    """Assigns the value of ``rv`` to ``object.field_name``."""

    def __init__(self, obj: VariableValue, field_name: str, rv: Statement) -> None:
        self.obj = obj
        self.field_name = field_name
        self.rv = rv

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        instance = self.obj.execute(closure, context)
        if not isinstance(instance, ClassInstance):
            raise MythonRuntimeError(f"Cannot assign field {self.field_name} of a non-object")
        value = self.rv.execute(closure, context)
        instance.fields[self.field_name] = value
        return value


class NoneConst(Statement):
    """The ``None`` literal."""

    def __init__(self) -> None:
        self.value: Optional[Object] = None

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        return self.value


class Print(Statement):
    """The ``print`` statement: values separated by spaces, then a newline."""

    def __init__(self, args: Union[Statement, Iterable[Statement]] = ()) -> None:
        if isinstance(args, Executable):
            self.args = [args]
        else:
            self.args = list(args)

    @classmethod
    def variable(cls, name: str) -> Print:
        """A print statement that outputs the variable ``name``."""
        return cls(VariableValue(name))

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        stream = context.output
        for index, arg in enumerate(self.args):
            if index:
                stream.write(" ")
            value = arg.execute(closure, context)
            if value is None:
                stream.write("None")
            else:
                value.print_to(stream, context)
        stream.write("\n")
        return None


class MethodCall(Statement):
    """Calls ``object.method(args...)``."""

    def __init__(self, obj: Statement, method: str, args: Iterable[Statement] = ()) -> None:
        self.obj = obj
        self.method = method
        self.args = list(args)

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        instance = self.obj.execute(closure, context)
        if not isinstance(instance, ClassInstance):
            raise MythonRuntimeError(f"Cannot call method {self.method} of a non-object")
        actual_args = [arg.execute(closure, context) for arg in self.args]
        return instance.call(self.method, actual_args, context)


class NewInstance(Statement):
    """Creates an instance of a class, calling ``__init__`` if one fits the arguments."""

    def __init__(self, cls: Class, args: Iterable[Statement] = ()) -> None:
        self.cls = cls
        self.args = list(args)

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        instance = ClassInstance(self.cls)
        if instance.has_method(INIT_METHOD, len(self.args)):
            init_args = [arg.execute(closure, context) for arg in self.args]
            instance.call(INIT_METHOD, init_args, context)
        return instance


class UnaryOperation(Statement):
    """Base class of operations with one argument."""

    def __init__(self, arg: Statement) -> None:
        self.arg = arg


class Stringify(UnaryOperation):
    """``str(x)``: the printed form of the argument as a String."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        value = self.arg.execute(closure, context)
        buffer = io.StringIO()
        if value is None:
            buffer.write("None")
        else:
            value.print_to(buffer, context)
        return String(buffer.getvalue())


class BinaryOperation(Statement):
    """Base class of operations with two arguments."""

    def __init__(self, lhs: Statement, rhs: Statement) -> None:
        self.lhs = lhs
        self.rhs = rhs

    def _operands(self, closure: dict, context: Context):
        return self.lhs.execute(closure, context), self.rhs.execute(closure, context)


class Add(BinaryOperation):
    """Adds numbers, concatenates strings, or calls ``__add__`` on an object."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        lhs, rhs = self._operands(closure, context)
        if isinstance(lhs, ClassInstance):
            return lhs.call(ADD_METHOD, [rhs], context)
        if isinstance(lhs, Number) and isinstance(rhs, Number):
            return Number(lhs.value + rhs.value)
        if isinstance(lhs, String) and isinstance(rhs, String):
            return String(lhs.value + rhs.value)
        raise MythonRuntimeError("Bad addition operands' type")


def _numbers(lhs: Optional[Object], rhs: Optional[Object], what: str) -> tuple[int, int]:
    if isinstance(lhs, Number) and isinstance(rhs, Number):
        return lhs.value, rhs.value
    raise MythonRuntimeError(f"Bad {what} operands' type")


class Sub(BinaryOperation):
    """Subtracts two numbers."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        a, b = _numbers(*self._operands(closure, context), "subtraction")
        return Number(a - b)


class Mult(BinaryOperation):
    """Multiplies two numbers."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        a, b = _numbers(*self._operands(closure, context), "multiplication")
        return Number(a * b)


class Div(BinaryOperation):
    """Divides two numbers, truncating toward zero."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        a, b = _numbers(*self._operands(closure, context), "division")
        if b == 0:
            raise MythonRuntimeError("Division by zero")
        quotient = abs(a) // abs(b)
        return Number(quotient if (a < 0) == (b < 0) else -quotient)


class Or(BinaryOperation):
    """Logical or; ``rhs`` is evaluated only when ``lhs`` is false."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        if is_true(self.lhs.execute(closure, context)):
            return Bool(True)
        return Bool(is_true(self.rhs.execute(closure, context)))


class And(BinaryOperation):
    """Logical and; ``rhs`` is evaluated only when ``lhs`` is true."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        if not is_true(self.lhs.execute(closure, context)):
            return Bool(False)
        return Bool(is_true(self.rhs.execute(closure, context)))


class Not(UnaryOperation):
    """Logical negation."""

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        return Bool(not is_true(self.arg.execute(closure, context)))


class Compound(Statement):
    """A sequence of statements, such as a method body or an if branch."""

    def __init__(self, *statements: Statement) -> None:
        self.statements = list(statements)

    def add_statement(self, statement: Statement) -> None:
        self.statements.append(statement)

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        for statement in self.statements:
            statement.execute(closure, context)
        return None


class Return(Statement):
    """Leaves the enclosing method with the value of ``statement``."""

    def __init__(self, statement: Statement) -> None:
        self.statement = statement

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        raise _ReturnSignal(self.statement.execute(closure, context))


class MethodBody(Statement):
    """Runs a method body and yields what ``return`` gave, or None."""

    def __init__(self, body: Statement) -> None:
        self.body = body

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        try:
            self.body.execute(closure, context)
        except _ReturnSignal as signal:
            return signal.value
        return None


class ClassDefinition(Statement):
    """Binds a class to its name in the closure."""

    def __init__(self, cls: Class) -> None:
        self.cls = cls

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        closure[self.cls.name] = self.cls
        return self.cls


class IfElse(Statement):
    """``if condition: if_body else: else_body``; ``else_body`` may be None."""

    def __init__(self, condition: Statement, if_body: Statement,
                 else_body: Optional[Statement] = None) -> None:
        self.condition = condition
        self.if_body = if_body
        self.else_body = else_body

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        if is_true(self.condition.execute(closure, context)):
            return self.if_body.execute(closure, context)
        if self.else_body is not None:
            return self.else_body.execute(closure, context)
        return None


class Comparison(BinaryOperation):
    """Compares two values with ``comparator`` and yields a Bool."""

    def __init__(self, comparator: Comparator, lhs: Statement, rhs: Statement) -> None:
        super().__init__(lhs, rhs)
        self.comparator = comparator

    def execute(self, closure: dict, context: Context) -> Optional[Object]:
        lhs, rhs = self._operands(closure, context)
        return Bool(self.comparator(lhs, rhs, context))