import pytest

from actionlint_core.expr import (
    BinaryOp,
    BinOp,
    Boolean,
    Call,
    Context,
    ExprSyntaxError,
    Identifier,
    Index,
    Null,
    Number,
    Star,
    String,
    UnaryOp,
    UnOp,
    parse,
)


@pytest.mark.parametrize(
    ("case", "expected"),
    [
        ("''", ""),
        ("' '", " "),
        ("''''", "'"),
        ("'test'", "test"),
        ("'spaces are ok'", "spaces are ok"),
        ("'escaping '' works'", "escaping ' works"),
    ],
)
def test_parse_string(case, expected):
    assert parse(case) == String(expected)


@pytest.mark.parametrize(
    "case",
    [
        "foo.bar",
        "github.action_path",
        "inputs.foo-bar",
        "inputs.also--valid",
        "inputs.this__too",
        "secrets.GH_TOKEN",
        "foo.*.bar",
        "github.event.issue.labels.*.name",
    ],
)
def test_parse_context(case):
    expr = parse(case)
    assert isinstance(expr, Context)
    assert expr.raw == case
    assert expr.contexts() == [case]


@pytest.mark.parametrize(
    ("case", "func", "nargs"),
    [
        ("foo()", "foo", 0),
        ("foo(bar)", "foo", 1),
        ("foo(bar())", "foo", 1),
        ("foo(1.23)", "foo", 1),
        ("foo(1,2)", "foo", 2),
        ("foo(1, 2)", "foo", 2),
        ("foo(1, 2, secret.GH_TOKEN)", "foo", 3),
        ("foo(   )", "foo", 0),
        ("fromJSON(inputs.free-threading)", "fromJSON", 1),
    ],
)
def test_parse_call(case, func, nargs):
    expr = parse(case)
    assert isinstance(expr, Call)
    assert expr.func == func
    assert len(expr.args) == nargs


def _shape(expr):
    if isinstance(expr, BinaryOp):
        return expr.op
    return type(expr).__name__


@pytest.mark.parametrize(
    ("case", "shape"),
    [
        ("fromJSON(inputs.free-threading) && '--disable-gil' || ''", BinOp.OR),
        ("foo || bar || baz", BinOp.OR),
        ("foo || bar && baz || foo && 1 && 2 && 3 || 4", BinOp.OR),
        (
            "(github.actor != 'github-actions[bot]' && github.actor) || 'BrewTestBot'",
            BinOp.OR,
        ),
        ("(true || false) == true", BinOp.EQ),
        ("!(!true || false)", "UnaryOp"),
        ("!(!true || false) == true", BinOp.EQ),
        ("(true == false) == true", BinOp.EQ),
        ("(true == (false || true && (true || false))) == true", BinOp.EQ),
        (
            "(github.actor != 'github-actions[bot]' && github.actor) == 'BrewTestBot'",
            BinOp.EQ,
        ),
        ("foo()[0]", "Context"),
        ("fromJson(steps.runs.outputs.data).workflow_runs[0].id", "Context"),
    ],
)
def test_parse_expression_shapes(case, shape):
    assert _shape(parse(case)) == shape


@pytest.mark.parametrize(
    ("case", "expected"),
    [
        (
            "!true || false || true",
            BinaryOp(
                BinaryOp(UnaryOp(UnOp.NOT, Boolean(True)), BinOp.OR, Boolean(False)),
                BinOp.OR,
                Boolean(True),
            ),
        ),
        ("'foo '' bar'", String("foo ' bar")),
        ("('foo '' bar')", String("foo ' bar")),
        ("((('foo '' bar')))", String("foo ' bar")),
        ("foo(1, 2, 3)", Call("foo", (Number(1.0), Number(2.0), Number(3.0)))),
        (
            "foo.bar.baz",
            Context(
                "foo.bar.baz",
                (Identifier("foo"), Identifier("bar"), Identifier("baz")),
            ),
        ),
        (
            "foo.bar.baz[1][2]",
            Context(
                "foo.bar.baz[1][2]",
                (
                    Identifier("foo"),
                    Identifier("bar"),
                    Identifier("baz"),
                    Index(Number(1.0)),
                    Index(Number(2.0)),
                ),
            ),
        ),
        (
            "foo.bar.baz[*]",
            Context(
                "foo.bar.baz[*]",
                (Identifier("foo"), Identifier("bar"), Identifier("baz"), Index(Star())),
            ),
        ),
        (
            "vegetables.*.ediblePortions",
            Context(
                "vegetables.*.ediblePortions",
                (Identifier("vegetables"), Star(), Identifier("ediblePortions")),
            ),
        ),
        (
            "github.ref == 'refs/heads/main' && 'value_for_main_branch' || 'value_for_other_branches'",
            BinaryOp(
                BinaryOp(
                    BinaryOp(
                        Context("github.ref", (Identifier("github"), Identifier("ref"))),
                        BinOp.EQ,
                        String("refs/heads/main"),
                    ),
                    BinOp.AND,
                    String("value_for_main_branch"),
                ),
                BinOp.OR,
                String("value_for_other_branches"),
            ),
        ),
        (
            "(true || false) == true",
            BinaryOp(
                BinaryOp(Boolean(True), BinOp.OR, Boolean(False)),
                BinOp.EQ,
                Boolean(True),
            ),
        ),
        (
            "!(!true || false)",
            UnaryOp(
                UnOp.NOT,
                BinaryOp(UnaryOp(UnOp.NOT, Boolean(True)), BinOp.OR, Boolean(False)),
            ),
        ),
    ],
)
def test_parse(case, expected):
    assert parse(case) == expected


def test_parse_literals_and_comparisons():
    assert parse("null") == Null()
    assert parse("  false  ") == Boolean(False)
    assert parse("1 < 2") == BinaryOp(Number(1.0), BinOp.LT, Number(2.0))
    assert parse("a >= 3") == BinaryOp(
        Context("a", (Identifier("a"),)), BinOp.GE, Number(3.0)
    )
    assert parse("foo()[0]") == Context(
        "foo()[0]", (Call("foo"), Index(Number(0.0)))
    )


def test_expr_contexts():
    expr = parse(
        "foo.bar && abc && d.e.f && andThis(should.work).except.this && but().not.this"
    )
    assert expr.contexts() == ["foo.bar", "abc", "d.e.f", "should.work"]

    expr = parse("fromJson(steps.runs.outputs.data).workflow_runs[0].id")
    assert expr.contexts() == ["steps.runs.outputs.data"]


def test_literal_has_no_contexts():
    assert parse("'github.actor'").contexts() == []


@pytest.mark.parametrize(
    "case",
    ["", "foo ||", "'unterminated", "foo bar", "(true", "foo(1,", "foo[1", "!!true"],
)
def test_parse_errors(case):
    with pytest.raises(ExprSyntaxError):
        parse(case)


def test_error_is_value_error_with_position():
    with pytest.raises(ValueError) as info:
        parse("true true")
    assert info.value.position == 5