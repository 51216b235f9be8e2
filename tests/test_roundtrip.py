import pytest

from mathast.latex_emitter import to_latex
from mathast.parser import parse_latex
from mathast.schemas import NumberLiteral


@pytest.mark.parametrize("n", [0, 7, 42, 1000, 123456])
def test_integers_round_trip(n):
    assert to_latex(parse_latex(str(n))) == str(n)


@pytest.mark.parametrize("precision", [3, 10, 14, 17])
def test_rationals_are_exact_at_any_precision(precision):
    node = parse_latex('\\frac{1}{3}')
    assert node == NumberLiteral(value='1/3')
    assert to_latex(node, {'precision': precision}) == '\\frac{1}{3}'


@pytest.mark.parametrize("latex", [
    '2+3\\cdot 4',
    'x^{2}',
    '\\sin x',
    'a-b-c',
    'n!',
    '\\sqrt{x}',
    'f(x)',
    '\\left|x\\right|',
    'a\\le b',
    '\\operatorname{lcm}(a, b)',
])
def test_serialized_form_is_stable(latex):
    once = to_latex(parse_latex(latex))
    assert once == latex
    assert to_latex(parse_latex(once)) == once


@pytest.mark.parametrize("latex", ['2xy', 'a+b+c', '2x+3y', '8-3-2', '2+3\\cdot 4', '2|x|', '\\text{50\\%}'])
def test_reparsing_the_output_gives_the_same_tree(latex):
    ast = parse_latex(latex)
    assert parse_latex(to_latex(ast)) == ast
