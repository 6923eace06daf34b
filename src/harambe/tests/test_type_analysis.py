"""Tests for type analysis: operators, assignment, calls, returns, I/O."""

from src.harambe.analyzer import Analyzer
from src.harambe.errors import ErrorKind, ErrorSink
from src.harambe.static_types import SUCCESS
from src.harambe.tests.builders import (
    assign, assign_stmt, binop, bool_t, call, call_stmt, dec, dot, false, fn,
    formal, ident, if_, if_else, inc, int_t, neg, not_, num, program, read,
    ret, string, struct, struct_t, true, var, void_t, while_, write,
)


def check(*decls):
    """Analyze a program whose names all resolve; return its type diagnostics."""
    result = Analyzer(ErrorSink()).analyze(program(*decls))
    assert result.names_ok, result.errors
    return result


def kinds(result):
    return [d.kind for d in result.diagnostics]


def body(*stmts, decls=()):
    """A void ``main`` over globals x:int, b:bool."""
    return (
        var(int_t(), "x"),
        var(bool_t(), "b"),
        fn(void_t(), "main", decls=decls, stmts=stmts),
    )


class TestOperators:
    def test_clean_arithmetic(self):
        result = check(*body(assign_stmt(ident("x"), binop("+", num(1), neg(ident("x"))))))
        assert result.ok
        assert result.result_type == SUCCESS

    def test_arithmetic_on_bool(self):
        result = check(*body(write(binop("*", true(2, 9), num(3)))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]
        assert (result.diagnostics[0].line, result.diagnostics[0].col) == (2, 9)

    def test_each_bad_operand_reported(self):
        result = check(*body(write(binop("-", true(1, 1), false(1, 8)))))
        assert [(d.line, d.col) for d in result.diagnostics] == [(1, 1), (1, 8)]

    def test_error_operand_is_absorbed(self):
        # (true + 1) + 2: only the innermost failure is reported
        inner = binop("+", true(), num(1))
        result = check(*body(write(binop("+", inner, num(2)))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]

    def test_error_absorbed_through_many_layers(self):
        bad = binop("+", true(), num(1))
        expr = not_(binop("<", neg(bad), num(4)))
        result = check(*body(if_(binop("&&", expr, ident("b")))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]

    def test_unary_minus_on_bool(self):
        result = check(*body(write(neg(ident("b", 3, 12)))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]
        assert result.diagnostics[0].line == 3

    def test_not_on_int(self):
        result = check(*body(write(not_(num(5)))))
        assert kinds(result) == [ErrorKind.LOGICAL]

    def test_logical_on_int(self):
        result = check(*body(write(binop("||", ident("b"), num(1, 4, 20)))))
        assert kinds(result) == [ErrorKind.LOGICAL]
        assert result.diagnostics[0].col == 20

    def test_relational_on_bool(self):
        result = check(*body(write(binop(">=", ident("b"), num(1)))))
        assert kinds(result) == [ErrorKind.RELATIONAL]

    def test_relational_yields_bool(self):
        result = check(*body(assign_stmt(ident("b"), binop("<", num(1), num(2)))))
        assert result.ok

    def test_arithmetic_on_string(self):
        result = check(*body(write(binop("+", string("hi"), num(1)))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]


class TestEquality:
    def test_same_types(self):
        result = check(*body(assign_stmt(ident("b"), binop("==", ident("x"), num(1)))))
        assert result.ok

    def test_mismatch(self):
        result = check(*body(write(binop("!=", ident("x", 2, 5), true()))))
        assert kinds(result) == [ErrorKind.EQUALITY_MISMATCH]
        assert str(result.diagnostics[0]) == "2:5 ***ERROR*** Type mismatch"

    def test_functions_banned(self):
        result = check(*body(write(binop("==", ident("main", 3, 11), ident("main")))))
        assert kinds(result) == [ErrorKind.EQUALITY_OPERAND_BANNED]
        assert result.diagnostics[0].message == "Equality operator applied to functions"

    def test_void_calls_banned(self):
        result = check(*body(write(binop("==", call("main"), call("main")))))
        assert kinds(result) == [ErrorKind.EQUALITY_OPERAND_BANNED]
        assert result.diagnostics[0].message == "Equality operator applied to void functions"

    def test_struct_names_banned(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            fn(void_t(), "main", stmts=[write(binop("==", ident("P"), ident("P")))]),
        )
        assert kinds(result) == [ErrorKind.EQUALITY_OPERAND_BANNED]
        assert result.diagnostics[0].message == "Equality operator applied to struct names"

    def test_struct_vars_of_same_struct(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            var(struct_t("P"), "p"),
            var(struct_t("P"), "q"),
            fn(void_t(), "main", stmts=[if_(binop("==", ident("p"), ident("q")))]),
        )
        assert result.ok

    def test_struct_vars_of_different_structs(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            struct("Q", [var(int_t(), "a")]),
            var(struct_t("P"), "p"),
            var(struct_t("Q"), "q"),
            fn(void_t(), "main", stmts=[write(binop("==", ident("p"), ident("q")))]),
        )
        assert kinds(result) == [ErrorKind.EQUALITY_MISMATCH]


class TestAssignment:
    def test_mismatch_reported_at_target(self):
        result = check(*body(assign_stmt(ident("x", 7, 3), true())))
        assert kinds(result) == [ErrorKind.ASSIGNMENT_MISMATCH]
        assert (result.diagnostics[0].line, result.diagnostics[0].col) == (7, 3)

    def test_assignment_expression_has_target_type(self):
        # x = (x = 1) is fine; b = (x = 1) is not
        ok = check(*body(assign_stmt(ident("x"), assign(ident("x"), num(1)))))
        assert ok.ok
        bad = check(*body(assign_stmt(ident("b"), assign(ident("x"), num(1)))))
        assert kinds(bad) == [ErrorKind.ASSIGNMENT_MISMATCH]

    def test_function_target(self):
        result = check(*body(assign_stmt(ident("main"), ident("main"))))
        assert kinds(result) == [ErrorKind.INVALID_ASSIGNMENT_TARGET]
        assert result.diagnostics[0].message == "Function assignment"

    def test_struct_name_target(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            fn(void_t(), "main", stmts=[assign_stmt(ident("P"), ident("P"))]),
        )
        assert kinds(result) == [ErrorKind.INVALID_ASSIGNMENT_TARGET]
        assert result.diagnostics[0].message == "Struct name assignment"

    def test_struct_variable_assignment(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            var(struct_t("P"), "p"),
            var(struct_t("P"), "q"),
            fn(void_t(), "main", stmts=[assign_stmt(ident("p"), ident("q"))]),
        )
        assert result.ok

    def test_field_assignment(self):
        result = check(
            struct("P", [var(int_t(), "a"), var(bool_t(), "flag")]),
            var(struct_t("P"), "p"),
            fn(void_t(), "main", stmts=[
                assign_stmt(dot(ident("p"), "a"), num(4)),
                assign_stmt(dot(ident("p", 3, 3), "flag"), num(4)),
            ]),
        )
        assert kinds(result) == [ErrorKind.ASSIGNMENT_MISMATCH]
        assert result.diagnostics[0].line == 3

    def test_error_value_absorbed(self):
        result = check(*body(assign_stmt(ident("x"), binop("+", true(), num(1)))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]


class TestCalls:
    def add(self):
        return fn(int_t(), "add", [formal(int_t(), "a"), formal(int_t(), "b")],
                  stmts=[ret(binop("+", ident("a"), ident("b")))])

    def test_clean_call(self):
        result = check(self.add(), *body(assign_stmt(ident("x"), call("add", num(1), num(2)))))
        assert result.ok

    def test_argument_mismatch_reports_once_and_keeps_return_type(self):
        result = check(self.add(), *body(
            assign_stmt(ident("x"), call("add", true(5, 13), num(3))),
        ))
        assert kinds(result) == [ErrorKind.ARGUMENT_MISMATCH]
        assert (result.diagnostics[0].line, result.diagnostics[0].col) == (5, 13)

    def test_mismatched_call_is_still_int(self):
        result = check(self.add(), *body(
            assign_stmt(ident("b"), call("add", true(), num(3))),
        ))
        assert kinds(result) == [ErrorKind.ARGUMENT_MISMATCH, ErrorKind.ASSIGNMENT_MISMATCH]

    def test_arity_mismatch(self):
        result = check(self.add(), *body(call_stmt("add", num(1), line=6, col=3)))
        assert kinds(result) == [ErrorKind.ARITY_MISMATCH]
        assert (result.diagnostics[0].line, result.diagnostics[0].col) == (6, 3)

    def test_arity_mismatch_skips_argument_checks(self):
        result = check(self.add(), *body(call_stmt("add", true(), true(), true())))
        assert kinds(result) == [ErrorKind.ARITY_MISMATCH]

    def test_call_of_non_function(self):
        result = check(*body(call_stmt("x", line=2, col=3)))
        assert kinds(result) == [ErrorKind.CALL_OF_NON_FUNCTION]
        assert result.diagnostics[0].col == 3

    def test_error_argument_not_reported_again(self):
        result = check(self.add(), *body(
            call_stmt("add", binop("+", true(), num(1)), num(2)),
        ))
        assert kinds(result) == [ErrorKind.ARITHMETIC]

    def test_argument_errors_found_for_non_function(self):
        result = check(*body(call_stmt("x", not_(num(1)))))
        assert kinds(result) == [ErrorKind.LOGICAL, ErrorKind.CALL_OF_NON_FUNCTION]


class TestReturns:
    def test_value_from_void(self):
        result = check(fn(void_t(), "f", stmts=[ret(num(1, 2, 12), 2, 5)]))
        assert kinds(result) == [ErrorKind.RETURN_VALUE_FROM_VOID]
        assert (result.diagnostics[0].line, result.diagnostics[0].col) == (2, 12)

    def test_error_value_from_void_still_reported(self):
        result = check(fn(void_t(), "f", stmts=[ret(binop("+", true(), num(1)))]))
        assert kinds(result) == [ErrorKind.ARITHMETIC, ErrorKind.RETURN_VALUE_FROM_VOID]

    def test_missing_return_value(self):
        result = check(fn(int_t(), "f", stmts=[ret(line=4, col=5)]))
        assert kinds(result) == [ErrorKind.MISSING_RETURN_VALUE]
        assert result.diagnostics[0].line == 4

    def test_missing_return(self):
        result = check(fn(int_t(), "f", line=1, col=5))
        assert kinds(result) == [ErrorKind.MISSING_RETURN]
        assert str(result.diagnostics[0]) == "1:5 ***ERROR*** Missing return statement"

    def test_return_only_inside_branch(self):
        result = check(fn(bool_t(), "f", [formal(bool_t(), "c")], stmts=[
            if_else(ident("c"), then_stmts=[ret(true())], else_stmts=[ret(false())]),
        ]))
        assert kinds(result) == [ErrorKind.MISSING_RETURN]

    def test_bad_return_value(self):
        result = check(fn(int_t(), "f", stmts=[ret(true(3, 12))]))
        assert kinds(result) == [ErrorKind.BAD_RETURN_VALUE]
        assert result.diagnostics[0].col == 12

    def test_error_return_value_absorbed(self):
        result = check(fn(int_t(), "f", stmts=[ret(neg(true()))]))
        assert kinds(result) == [ErrorKind.ARITHMETIC]

    def test_void_function_may_fall_off(self):
        assert check(fn(void_t(), "f")).ok

    def test_struct_return(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            fn(struct_t("P"), "make", decls=[var(struct_t("P"), "p")],
               stmts=[ret(ident("p"))]),
        )
        assert result.ok


class TestStatements:
    def test_condition_must_be_bool(self):
        result = check(*body(if_(ident("x", 2, 9))))
        assert kinds(result) == [ErrorKind.NON_BOOL_CONDITION]
        assert result.diagnostics[0].message == "Non-bool expression used as an if condition"

    def test_while_condition(self):
        result = check(*body(while_(num(1))))
        assert result.diagnostics[0].message == "Non-bool expression used as a while condition"

    def test_error_condition_not_reported_again(self):
        result = check(*body(while_(neg(true()))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]

    def test_branches_checked_after_bad_condition(self):
        result = check(*body(if_else(
            num(1),
            then_stmts=[write(neg(true()))],
            else_stmts=[write(not_(num(2)))],
        )))
        assert kinds(result) == [
            ErrorKind.NON_BOOL_CONDITION, ErrorKind.ARITHMETIC, ErrorKind.LOGICAL,
        ]

    def test_post_increment_needs_int(self):
        result = check(*body(inc(ident("x")), dec(ident("b", 4, 3))))
        assert kinds(result) == [ErrorKind.ARITHMETIC]
        assert result.diagnostics[0].line == 4

    def test_write_values(self):
        result = check(*body(write(ident("x")), write(ident("b")), write(string("hi"))))
        assert result.ok

    def test_write_rejections(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            var(struct_t("P"), "p"),
            fn(void_t(), "main", stmts=[
                write(ident("main")),
                write(ident("P")),
                write(ident("p")),
                write(call("main")),
            ]),
        )
        assert kinds(result) == [
            ErrorKind.WRITE_OF_FUNCTION,
            ErrorKind.WRITE_OF_STRUCT_NAME,
            ErrorKind.WRITE_OF_STRUCT_VARIABLE,
            ErrorKind.WRITE_OF_VOID,
        ]

    def test_read_rejections(self):
        result = check(
            struct("P", [var(int_t(), "a")]),
            var(struct_t("P"), "p"),
            fn(void_t(), "main", stmts=[
                read(ident("main")),
                read(ident("P")),
                read(ident("p")),
                read(dot(ident("p"), "a")),
            ]),
        )
        assert kinds(result) == [
            ErrorKind.READ_OF_FUNCTION,
            ErrorKind.READ_OF_STRUCT_NAME,
            ErrorKind.READ_OF_STRUCT_VARIABLE,
        ]

    def test_each_function_checked_against_own_return_type(self):
        result = check(
            fn(int_t(), "f", stmts=[ret(num(1))]),
            fn(bool_t(), "g", stmts=[ret(true())]),
            fn(void_t(), "h", stmts=[ret()]),
        )
        assert result.ok
