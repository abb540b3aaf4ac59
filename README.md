# mythonkit

Building blocks for running programs in Mython, a small language with
Python-like syntax: integers, strings, booleans, `None`, classes with
methods and single inheritance, `if`/`else`, `print` and `str()`.

The package has three modules:

- `mythonkit.runtime`: the values a program works with (`Number`, `String`,
  `Bool`, `Class`, `ClassInstance`, `Method`), the execution contexts
  (`SimpleContext`, which writes to a stream you give it, and `DummyContext`,
  which collects output in an in-memory `output` buffer), truthiness
  (`is_true`) and the comparison functions (`equal`, `not_equal`, `less`,
  `greater`, `less_or_equal`, `greater_or_equal`). Errors raised while a
  program runs are `MythonRuntimeError`.
- `mythonkit.statements`: the nodes of an executable syntax tree:
  constants (`NumericConst`, `StringConst`, `BoolConst`, `NoneConst`),
  `VariableValue`, `Assignment`, `FieldAssignment`, `Print`, `Stringify`,
  arithmetic (`Add`, `Sub`, `Mult`, `Div`), logic (`And`, `Or`, `Not`),
  `Comparison`, `IfElse`, `MethodCall`, `NewInstance`, `Return`,
  `MethodBody`, `ClassDefinition` and `Compound`.
- `mythonkit.linked_list`: a `SinglyLinkedList` with `Cursor` positions, for
  insertion and removal after a given position.

## Installation

```
pip install .
```

## Running a tree

A closure is a plain `dict` that maps names to values; Mython's `None` is
Python's `None`. Every node has an `execute(closure, context)` method, and
`Print` writes to the context's `output` stream.

```python
from mythonkit.runtime import DummyContext
from mythonkit.statements import Add, Assignment, Compound, NumericConst, Print

program = Compound(
    Assignment("x", NumericConst(40)),
    Assignment("y", Add(NumericConst(1), NumericConst(1))),
    Print.variable("x"),
)
context = DummyContext()
closure = {}
program.execute(closure, context)
print(context.output.getvalue())  # "40\n"
```

`Div` truncates toward zero and raises `MythonRuntimeError` on division by
zero. `Add` adds numbers, concatenates strings, or calls `__add__` on a
class instance; other operand types raise `MythonRuntimeError`.

## Classes and methods

A `Method` has a name, a list of parameter names and a body. Inside a call,
`self` and the parameters are bound in a fresh closure. Wrap a body in
`MethodBody` so that a `Return` inside it ends the call with its value.

```python
from mythonkit.runtime import Class, ClassInstance, DummyContext, Method, Number
from mythonkit.statements import Add, MethodBody, NumericConst, Return, VariableValue

counter = Class("Counter", [
    Method("inc", ["x"], MethodBody(Return(Add(VariableValue("x"), NumericConst(1))))),
])
instance = ClassInstance(counter)
result = instance.call("inc", [Number(41)], DummyContext())
result.value  # 42
```

Methods are looked up in the class and then its parents. Calling a method
that does not exist, or with the wrong number of arguments, raises
`MythonRuntimeError`. An instance with a `__str__` method taking no
arguments prints what that method returns; otherwise it prints
`<Name object at 0x...>`. `NewInstance` calls `__init__` only when the class
has one taking the given number of arguments.

`equal` and `less` call `__eq__` and `__lt__` on class instances; for
numbers, strings and booleans they compare values of the same type, and
`equal(None, None, ...)` is true. Any other pair raises
`MythonRuntimeError`.

## Linked list

```python
from mythonkit.linked_list import SinglyLinkedList

numbers = SinglyLinkedList([1, 2, 3])
numbers.insert_after(numbers.before_begin(), 0)
numbers.erase_after(numbers.begin())
list(numbers)  # [0, 2, 3]
```

A cursor past the last element is falsy, and reading its `value` raises
`IndexError`. Passing a cursor from another list raises `ValueError`;
`erase_after` on the last position raises `IndexError`. Lists support
`len`, iteration, `copy`, `swap` and lexicographic comparison.

## What is not included

There is no lexer or parser for Mython source text and no command to run a
program file: syntax trees are built in Python from the node classes above.

## Tests

```
pip install ".[test]"
pytest
```