import pytest

from mal.errors import MalArithmeticError, MalArityError, MalTypeError
from mal.evaluation.evaluator import evaluate
from mal.reader.parser import read_all


def run(source, env):
    result = None
    for expr in read_all(source):
        result, env = evaluate(expr, env)
    return result


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", 3),
        ("(* 2 3)", 6),
        ("(+ (* 2 3) 4)", 10),
        ("(/ 10 2)", 5),
        ("(- 10 3 2)", 5),
        ("(+ 1 2 3)", 6),
        ("(* 2 3 4)", 24),
        ("(/ 12 3)", 4),
        ("(+ (* 2 3) (- 10 4))", 12),
        ("(/ (+ 20 10) (* 2 5))", 3),
        ("(+ 1 2.5 3)", 6.5),
        ("(+ -1 5 -3)", 1),
        ("(- -10 -5)", -5),
        ("(* -2 3)", -6),
        ("(/ -12 3)", -4),
        ("(/ 7 2)", 3.5),
        ("(- 5)", -5),
        ("(/ 4)", 0.25),
        ("(+)", 0),
        ("(*)", 1),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", 57),
    ]
)
def test_arithmetic(env, source, expected):
    assert run(source, env) == expected


def test_exact_integer_division_stays_integral(env):
    result = run("(/ 10 2)", env)
    assert result == 5
    assert isinstance(result, int)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2 3)", True),
        ("(< 1 3 2)", False),
        ("(<= 1 1 2)", True),
        ("(> 3 2 1)", True),
        ("(>= 2 2 3)", False),
        ("(= 1 1 1)", True),
        ("(= 1 1.0)", True),
        ("(= (list 1 2) (list 1 2))", True),
        ("(= (list 1 2) (vector 1 2))", False),
        ("(= true 1)", False),
        ("(= :a :a)", True),
    ]
)
def test_comparison(env, source, expected):
    assert run(source, env) is expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("(/ 1 0)", MalArithmeticError),
        ("(/ 1.5 0.0)", MalArithmeticError),
        ("(/ " + "1" * 400 + " 3)", MalArithmeticError),
        ("(+ 0.5 " + "9" * 400 + ")", MalArithmeticError),
        ("(* 2.0 " + "9" * 400 + ")", MalArithmeticError),
        ("(- 1.0 " + "9" * 400 + ")", MalArithmeticError),
        ("(-)", MalArityError),
        ("(/)", MalArityError),
        ('(+ 1 "two")', MalTypeError),
        ("(+ 1 true)", MalTypeError),
        ("(< 1 :b)", MalTypeError),
    ]
)
def test_arithmetic_errors(env, source, error):
    with pytest.raises(error):
        run(source, env)


def test_huge_integers_stay_exact(env):
    big = int("9" * 400)
    assert run("(+ 1 " + "9" * 400 + ")", env) == big + 1
    assert run("(/ " + "9" * 400 + " 9)", env) == big // 9
