import io

import pytest

from mythonkit.runtime import (
    Bool,
    Class,
    ClassInstance,
    DummyContext,
    Method,
    MythonRuntimeError,
    Number,
    String,
    equal,
    greater,
    less,
)
from mythonkit.statements import (
    Add,
    And,
    Assignment,
    BoolConst,
    ClassDefinition,
    Comparison,
    Compound,
    Div,
    FieldAssignment,
    IfElse,
    MethodBody,
    MethodCall,
    Mult,
    NewInstance,
    NoneConst,
    Not,
    NumericConst,
    Or,
    Print,
    Return,
    Stringify,
    StringConst,
    Sub,
    VariableValue,
)


def printed(obj):
    buffer = io.StringIO()
    obj.print_to(buffer, DummyContext())
    return buffer.getvalue()


def test_numeric_const():
    context = DummyContext()
    closure = {}
    result = NumericConst(Number(57)).execute(closure, context)
    assert printed(result) == "57"
    assert closure == {}
    assert context.output.getvalue() == ""


def test_string_const():
    context = DummyContext()
    closure = {}
    result = StringConst(String("Hello!")).execute(closure, context)
    assert printed(result) == "Hello!"
    assert closure == {}
    assert context.output.getvalue() == ""


def test_variable():
    context = DummyContext()
    num = Number(42)
    word = String("Hello")
    closure = {"x": num, "w": word}
    assert VariableValue("x").execute(closure, context) is num
    assert VariableValue("w").execute(closure, context) is word
    with pytest.raises(MythonRuntimeError):
        VariableValue("unknown").execute(closure, context)
    assert context.output.getvalue() == ""


def test_assignment():
    context = DummyContext()
    assign_x = Assignment("x", NumericConst(Number(57)))
    assign_y = Assignment("y", StringConst(String("Hello")))
    closure = {"y": Number(42)}

    assert printed(assign_x.execute(closure, context)) == "57"
    assert printed(closure["x"]) == "57"

    assert printed(assign_y.execute(closure, context)) == "Hello"
    assert printed(closure["y"]) == "Hello"
    assert context.output.getvalue() == ""


def test_field_assignment():
    context = DummyContext()
    empty = Class("Empty", [], None)
    obj = ClassInstance(empty)

    assign_x = FieldAssignment(VariableValue("self"), "x", NumericConst(Number(57)))
    assign_y = FieldAssignment(VariableValue("self"), "y", NewInstance(empty))
    closure = {"self": obj}

    assert printed(assign_x.execute(closure, context)) == "57"
    assert printed(obj.fields["x"]) == "57"

    assign_y.execute(closure, context)
    text = "Hello, world! Hooray! Yes-yes!!!"
    assign_yz = FieldAssignment(VariableValue(["self", "y"]), "z", StringConst(String(text)))
    assert printed(assign_yz.execute(closure, context)) == text

    subobject = obj.fields["y"]
    assert isinstance(subobject, ClassInstance)
    assert printed(subobject.fields["z"]) == text
    assert context.output.getvalue() == ""


def test_field_assignment_on_non_object_raises():
    closure = {"n": Number(1)}
    statement = FieldAssignment(VariableValue("n"), "x", NumericConst(1))
    with pytest.raises(MythonRuntimeError):
        statement.execute(closure, DummyContext())


def test_print_variable():
    context = DummyContext()
    closure = {"y": Number(42)}
    Print.variable("y").execute(closure, context)
    assert context.output.getvalue() == "42\n"


def test_print_multiple_statements():
    context = DummyContext()
    closure = {"word": String("hello"), "empty": None}
    args = [VariableValue("word"), NumericConst(57), StringConst("Python"), VariableValue("empty")]
    Print(args).execute(closure, context)
    assert context.output.getvalue() == "hello 57 Python None\n"


def test_print_without_arguments_writes_newline():
    context = DummyContext()
    Print([]).execute({}, context)
    assert context.output.getvalue() == "\n"


def test_stringify():
    context = DummyContext()
    empty = {}

    result = Stringify(NumericConst(57)).execute(empty, context)
    assert isinstance(result, String)
    assert result.value == "57"

    result = Stringify(StringConst("Wazzup!")).execute(empty, context)
    assert isinstance(result, String)
    assert result.value == "Wazzup!"

    cls = Class("BoxedValue", [Method("__str__", [], NumericConst(842))], None)
    result = Stringify(NewInstance(cls)).execute(empty, context)
    assert isinstance(result, String)
    assert result.value == "842"

    plain = Class("BoxedValue", [], None)
    closure = {"x": ClassInstance(plain)}
    expected = printed(closure["x"])
    assert Stringify(VariableValue("x")).execute(closure, context).value == expected

    assert Stringify(NoneConst()).execute(empty, context).value == "None"
    assert context.output.getvalue() == ""


def test_numbers_addition():
    context = DummyContext()
    assert printed(Add(NumericConst(23), NumericConst(34)).execute({}, context)) == "57"
    assert context.output.getvalue() == ""


def test_strings_addition():
    context = DummyContext()
    assert printed(Add(StringConst("23"), StringConst("34")).execute({}, context)) == "2334"
    assert context.output.getvalue() == ""


@pytest.mark.parametrize(
    "lhs, rhs",
    [
        (NumericConst(42), StringConst("4")),
        (StringConst("4"), NumericConst(42)),
        (NoneConst(), StringConst("4")),
        (NoneConst(), NoneConst()),
    ],
)
def test_bad_addition(lhs, rhs):
    context = DummyContext()
    with pytest.raises(MythonRuntimeError):
        Add(lhs, rhs).execute({}, context)
    assert context.output.getvalue() == ""


def test_successful_class_instance_add():
    context = DummyContext()
    body = Add(StringConst("hello, "), VariableValue("value_"))
    cls = Class("BoxedValue", [Method("__add__", ["value_"], body)], None)
    result = Add(NewInstance(cls), StringConst("world")).execute({}, context)
    assert printed(result) == "hello, world"
    assert context.output.getvalue() == ""


def test_class_instance_add_without_method():
    context = DummyContext()
    cls = Class("BoxedValue", [], None)
    with pytest.raises(MythonRuntimeError):
        Add(NewInstance(cls), StringConst("world")).execute({}, context)
    assert context.output.getvalue() == ""


def test_sub_mult_div():
    context = DummyContext()
    assert Sub(NumericConst(10), NumericConst(3)).execute({}, context).value == 7
    assert Mult(NumericConst(6), NumericConst(7)).execute({}, context).value == 42
    assert Div(NumericConst(36), NumericConst(4)).execute({}, context).value == 9


def test_div_truncates_toward_zero():
    assert Div(NumericConst(-7), NumericConst(2)).execute({}, DummyContext()).value == -3


def test_div_by_zero():
    with pytest.raises(MythonRuntimeError):
        Div(NumericConst(1), NumericConst(0)).execute({}, DummyContext())


@pytest.mark.parametrize("op", [Sub, Mult, Div])
def test_arithmetic_rejects_strings(op):
    with pytest.raises(MythonRuntimeError):
        op(StringConst("a"), NumericConst(1)).execute({}, DummyContext())


def test_compound():
    context = DummyContext()
    compound = Compound(
        Assignment("x", StringConst("one")),
        Assignment("y", NumericConst(2)),
        Assignment("z", VariableValue("x")),
    )
    closure = {}
    result = compound.execute(closure, context)
    assert printed(closure["x"]) == "one"
    assert printed(closure["y"]) == "2"
    assert printed(closure["z"]) == "one"
    assert result is None
    assert context.output.getvalue() == ""


def test_fields():
    context = DummyContext()
    methods = [
        Method("__init__", [], FieldAssignment(VariableValue("self"), "value", NumericConst(0))),
        Method("value", [], VariableValue(["self", "value"])),
        Method(
            "add",
            ["x"],
            FieldAssignment(
                VariableValue("self"),
                "value",
                Add(VariableValue(["self", "value"]), VariableValue("x")),
            ),
        ),
    ]
    cls = Class("BoxedValue", methods, None)
    inst = ClassInstance(cls)
    inst.call("__init__", [], context)

    expected = 0
    for i in range(1, 10):
        value = inst.call("value", [], context)
        assert isinstance(value, Number)
        assert value.value == expected
        inst.call("add", [Number(i)], context)
        expected += i
    assert context.output.getvalue() == ""


def test_base_class():
    methods = [
        Method("GetValue", [], VariableValue(["self", "value"])),
        Method("SetValue", ["x"], FieldAssignment(VariableValue("self"), "value", VariableValue("x"))),
    ]
    cls = Class("BoxedValue", methods, None)
    assert cls.name == "BoxedValue"
    get_value = cls.get_method("GetValue")
    assert get_value.name == "GetValue"
    assert get_value.formal_params == []
    set_value = cls.get_method("SetValue")
    assert set_value.name == "SetValue"
    assert len(set_value.formal_params) == 1
    assert cls.get_method("AsString") is None


def test_inheritance():
    base = Class(
        "BoxedValue",
        [
            Method("GetValue", [], VariableValue(["self", "value"])),
            Method("SetValue", ["x"], FieldAssignment(VariableValue("self"), "value", VariableValue("x"))),
        ],
        None,
    )
    cls = Class(
        "StringableValue",
        [
            Method("GetValue", ["z"], VariableValue("z")),
            Method("AsString", [], StringConst("value")),
        ],
        base,
    )
    assert cls.name == "StringableValue"
    assert len(cls.get_method("GetValue").formal_params) == 1
    assert cls.get_method("SetValue").name == "SetValue"
    assert len(cls.get_method("SetValue").formal_params) == 1
    assert cls.get_method("AsString").formal_params == []
    assert cls.get_method("AsStringValue") is None


@pytest.mark.parametrize("lhs", [True, False])
@pytest.mark.parametrize("rhs", [True, False])
def test_or(lhs, rhs):
    context = DummyContext()
    result = Or(BoolConst(lhs), BoolConst(rhs)).execute({}, context)
    assert equal(result, Bool(True), context) == (lhs or rhs)


@pytest.mark.parametrize("lhs", [True, False])
@pytest.mark.parametrize("rhs", [True, False])
def test_and(lhs, rhs):
    context = DummyContext()
    result = And(BoolConst(lhs), BoolConst(rhs)).execute({}, context)
    assert equal(result, Bool(True), context) == (lhs and rhs)


@pytest.mark.parametrize("arg", [True, False])
def test_not(arg):
    context = DummyContext()
    result = Not(BoolConst(arg)).execute({}, context)
    assert equal(result, Bool(True), context) == (not arg)


def test_or_and_short_circuit():
    context = DummyContext()
    missing = VariableValue("missing")
    assert Or(BoolConst(True), missing).execute({}, context).value is True
    assert And(BoolConst(False), missing).execute({}, context).value is False


def test_method_body_returns_value_of_return():
    body = MethodBody(Compound(Return(NumericConst(5)), Assignment("after", NumericConst(1))))
    closure = {}
    result = body.execute(closure, DummyContext())
    assert result.value == 5
    assert "after" not in closure


def test_method_body_without_return_yields_none():
    assert MethodBody(Compound(Assignment("x", NumericConst(1)))).execute({}, DummyContext()) is None


def test_if_else():
    context = DummyContext()
    statement = IfElse(VariableValue("c"), StringConst("yes"), StringConst("no"))
    assert statement.execute({"c": Number(1)}, context).value == "yes"
    assert statement.execute({"c": Number(0)}, context).value == "no"
    assert IfElse(BoolConst(False), StringConst("yes")).execute({}, context) is None


def test_comparison():
    context = DummyContext()
    assert Comparison(less, NumericConst(1), NumericConst(2)).execute({}, context).value is True
    assert Comparison(greater, NumericConst(1), NumericConst(2)).execute({}, context).value is False
    with pytest.raises(MythonRuntimeError):
        Comparison(less, NumericConst(1), StringConst("2")).execute({}, context)


def test_class_definition_binds_name():
    cls = Class("Point", [], None)
    closure = {}
    assert ClassDefinition(cls).execute(closure, DummyContext()) is cls
    assert closure["Point"] is cls


def test_method_call_and_new_instance_with_init():
    context = DummyContext()
    cls = Class(
        "Counter",
        [
            Method("__init__", ["start"], FieldAssignment(VariableValue("self"), "value", VariableValue("start"))),
            Method("get", [], MethodBody(Return(VariableValue(["self", "value"])))),
        ],
        None,
    )
    closure = {}
    Assignment("c", NewInstance(cls, [NumericConst(7)])).execute(closure, context)
    assert MethodCall(VariableValue("c"), "get").execute(closure, context).value == 7
    with pytest.raises(MythonRuntimeError):
        MethodCall(VariableValue("c"), "missing").execute(closure, context)


def test_variables_are_references():
    context = DummyContext()
    cls = Class("Box", [], None)
    closure = {}
    Compound(
        Assignment("x", NewInstance(cls)),
        Assignment("y", VariableValue("x")),
        FieldAssignment(VariableValue("y"), "v", NumericConst(3)),
    ).execute(closure, context)
    assert VariableValue(["x", "v"]).execute(closure, context).value == 3