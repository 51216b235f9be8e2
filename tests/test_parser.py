import logging

import pytest

from mathast.parser import parse, parse_latex
from mathast.schemas import (Apply, Atom, BinaryOp, Complex, ErrorNode, Fence, Group, NumberLiteral, Symbol, Text,
                             UnaryOp)


def num(value):
    return NumberLiteral(value=value)


def sym(name):
    return Symbol(name=name)


# --- Operators and precedence ---
def test_precedence():
    assert parse_latex('2+3*4') == BinaryOp(op='+', lhs=num(2), rhs=BinaryOp(op='*', lhs=num(3), rhs=num(4)))


def test_equal_precedence_is_left_associative():
    assert parse_latex('8-3-2') == BinaryOp(op='-', lhs=BinaryOp(op='-', lhs=num(8), rhs=num(3)), rhs=num(2))


def test_integer_division_folds_to_rational():
    assert parse_latex('1/3') == num('1/3')
    assert parse_latex('\\frac{1}{3}') == num('1/3')
    assert parse_latex('\\frac{x}{2}') == BinaryOp(op='/', lhs=sym('x'), rhs=num(2))


@pytest.mark.parametrize("latex, op", [('a\\le b', '<='), ('a<=b', '<='), ('a\\ne b', '!='), ('a!=b', '!='),
                                       ('a\\times b', '*'), ('a\\in b', 'elementof')])
def test_relational_operators(latex, op):
    assert parse_latex(latex) == BinaryOp(op=op, lhs=sym('a'), rhs=sym('b'))


# --- Signs and numbers ---
def test_signs():
    assert parse_latex('-3') == num(-3)
    assert parse_latex('-x') == UnaryOp(op='-', rhs=sym('x'))
    assert parse_latex('-\\frac{1}{2}') == num('-1/2')


def test_mixed_number():
    assert parse_latex('2\\frac{1}{2}') == BinaryOp(op='+', lhs=num(2), rhs=num('1/2'))
    assert parse_latex('2\\frac{x}{3}') == BinaryOp(
        op='+', lhs=num(2), rhs=BinaryOp(op='/', lhs=sym('x'), rhs=num(3)))


def test_exponent_marker_needs_digit():
    assert parse_latex('2e5') == num(200000)
    assert parse_latex('2e') == BinaryOp(op='*', lhs=num(2), rhs=sym('e'))


def test_grouping_comma():
    assert parse_latex('1,000') == num(1000)
    assert parse_latex('1,2') == BinaryOp(op=',', lhs=num(1), rhs=num(2))


def test_implicit_multiplication():
    assert parse_latex('2x') == BinaryOp(op='*', lhs=num(2), rhs=sym('x'))
    assert parse_latex('3x^2') == BinaryOp(op='*', lhs=num(3), rhs=Symbol(name='x', sup=num(2)))
    assert parse_latex('h(x)') == BinaryOp(op='*', lhs=sym('h'), rhs=sym('x'))


def test_implicit_products_lean_left():
    assert parse_latex('2xy') == BinaryOp(op='*', lhs=BinaryOp(op='*', lhs=num(2), rhs=sym('x')), rhs=sym('y'))


# --- Functions ---
def test_function_calls():
    assert parse_latex('f(x)') == Apply(fn_name='f', arg=sym('x'))
    assert parse_latex('2f(x)') == BinaryOp(op='*', lhs=num(2), rhs=Apply(fn_name='f', arg=sym('x')))
    assert parse_latex('\\sin x') == Apply(fn_name='sin', arg=sym('x'))


def test_inverse_function():
    assert parse_latex('\\sin^{-1} x') == Apply(fn_name='arcsin', arg=sym('x'))


def test_operatorname_with_argument_list():
    assert parse_latex('\\operatorname{lcm}(a,b)') == Apply(fn_name='lcm', arg=[sym('a'), sym('b')])


def test_big_operator_scripts():
    assert parse_latex('\\sum_{i=1}^{n} i') == Apply(
        fn_name='sum', arg=sym('i'), sup=sym('n'), sub=BinaryOp(op='=', lhs=sym('i'), rhs=num(1)))


def test_roots_and_binomials():
    assert parse_latex('\\sqrt{x}') == Apply(fn_name='sqrt', arg=sym('x'))
    assert parse_latex('\\sqrt[3]{x}') == Apply(fn_name='pow', arg=[sym('x'), num('1/3')])
    assert parse_latex('\\binom{n}{k}') == Apply(fn_name='binom', arg=[sym('n'), sym('k')])


# --- Fences ---
def test_abs_from_explicit_atoms():
    atoms = [Atom(kind='textord', latex='|'), Atom(kind='mord', latex='x'), Atom(kind='textord', latex='|')]
    assert parse(atoms) == Apply(fn_name='abs', arg=sym('x'))


def test_fences():
    assert parse_latex('\\left|x\\right|') == Apply(fn_name='abs', arg=sym('x'))
    assert parse_latex('\\lfloor x\\rfloor') == Apply(fn_name='floor', arg=sym('x'))
    assert parse_latex('||x||') == Apply(fn_name='norm', arg=sym('x'))
    assert parse_latex('(x)') == sym('x')


def test_bar_fences_after_a_factor():
    assert parse_latex('2|x|') == BinaryOp(op='*', lhs=num(2), rhs=Apply(fn_name='abs', arg=sym('x')))
    assert parse_latex('a|b|') == BinaryOp(op='*', lhs=sym('a'), rhs=Apply(fn_name='abs', arg=sym('b')))


def test_sized_delimiters():
    assert parse_latex('\\big|x\\big|') == Apply(fn_name='abs', arg=sym('x'))
    assert parse_latex('\\bigl(x+1\\bigr)') == Group(inner=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)))


def test_parenthesized_group_keeps_scripts():
    assert parse_latex('(x+1)^{2}') == Group(inner=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)), sup=num(2))


def test_unmatched_fence(caplog):
    with caplog.at_level(logging.WARNING, logger='mathast.parser'):
        result = parse_latex('(x+1')
    assert result == Group(inner=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)), fence=Fence(open='(', close=''))
    assert 'Missing closing fence' in caplog.text


def test_unmatched_left_right():
    result = parse_latex('\\left(x+1')
    assert result == Group(inner=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)), fence=Fence(open='(', close=''))


def test_mismatched_pair():
    result = parse_latex('(x]')
    assert isinstance(result, ErrorNode)
    assert result.wrapped == Group(inner=sym('x'), fence=Fence(open='(', close=''))


# --- Postfix operators ---
def test_postfix():
    assert parse_latex('n!') == Apply(fn_name='factorial', arg=sym('n'))
    assert parse_latex('n!!') == Apply(fn_name='factorial2', arg=sym('n'))
    assert parse_latex("x'") == Apply(fn_name='prime', arg=sym('x'))
    assert parse_latex('x^{\\circ}') == Apply(fn_name='degree', arg=sym('x'))


def test_curl_and_div():
    assert parse_latex('\\nabla\\times v') == Apply(fn_name='curl', arg=sym('v'))
    assert parse_latex('\\nabla\\cdot v') == Apply(fn_name='div', arg=sym('v'))
    assert parse_latex('∇·v') == Apply(fn_name='div', arg=sym('v'))


# --- Styled runs and special symbols ---
def test_font_variants_and_text():
    assert parse_latex('\\mathbf{x}') == Symbol(name='x', variant='bold')
    assert parse_latex('\\mathrm{sin} x') == Apply(fn_name='sin', arg=sym('x'))
    assert parse_latex('\\text{hello}') == Text(value='hello')
    assert parse_latex('\\text{50\\%}') == Text(value='50%')
    assert parse_latex('\\alpha') == sym('alpha')


def test_imaginary_unit_and_placeholder():
    assert parse_latex('\\imaginaryI') == Complex(im=num(1))
    assert parse_latex('\\placeholder{}') == num(0)


# --- Malformed input ---
def test_empty_input():
    assert parse([]) is None
    assert parse_latex('') is None


def test_missing_operand(caplog):
    with caplog.at_level(logging.WARNING, logger='mathast.parser'):
        result = parse_latex('2+')
    assert isinstance(result, BinaryOp) and result.lhs == num(2)
    assert isinstance(result.rhs, ErrorNode)
    assert 'Missing right operand' in caplog.text


def test_stray_closing_fence():
    result = parse_latex('x)')
    assert isinstance(result, ErrorNode)
    assert result.wrapped == sym('x')


def test_unexpected_token_is_kept_as_error():
    result = parse_latex('\\perp x')
    assert isinstance(result, BinaryOp)
    assert isinstance(result.lhs, ErrorNode)
    assert result.rhs == sym('x')
