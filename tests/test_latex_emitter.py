from mathast.latex_emitter import to_latex
from mathast.schemas import (Apply, BinaryOp, Complex, ErrorNode, Group, NumberLiteral, Symbol, Text, UnaryOp)


def num(value):
    return NumberLiteral(value=value)


def sym(name, **kwargs):
    return Symbol(name=name, **kwargs)


def test_empty():
    assert to_latex(None) == ''


def test_numbers():
    assert to_latex(num(3)) == '3'
    assert to_latex(num('1/3')) == '\\frac{1}{3}'
    assert to_latex(num(1 / 3)) == '0.\\overline{3}'


def test_symbols():
    assert to_latex(sym('x')) == 'x'
    assert to_latex(sym('alpha')) == '\\alpha'
    assert to_latex(sym('infinity')) == '\\infty'
    assert to_latex(sym('x', variant='bold')) == '\\mathbf{x}'
    assert to_latex(sym('x', sup=num(2), sub=sym('i'))) == 'x^{2}_{i}'


def test_binary_parenthesization():
    assert to_latex(BinaryOp(op='+', lhs=num(2), rhs=BinaryOp(op='*', lhs=num(3), rhs=num(4)))) == '2+3\\cdot 4'
    assert to_latex(BinaryOp(op='*', lhs=BinaryOp(op='+', lhs=sym('a'), rhs=sym('b')), rhs=sym('c'))) == \
        '(a+b)\\cdot c'
    assert to_latex(BinaryOp(op='-', lhs=sym('a'), rhs=BinaryOp(op='-', lhs=sym('b'), rhs=sym('c')))) == 'a-(b-c)'
    assert to_latex(BinaryOp(op='-', lhs=BinaryOp(op='-', lhs=sym('a'), rhs=sym('b')), rhs=sym('c'))) == 'a-b-c'
    assert to_latex(BinaryOp(op='+', lhs=sym('a'), rhs=BinaryOp(op='+', lhs=sym('b'), rhs=sym('c')))) == 'a+(b+c)'


def test_division_and_relations():
    assert to_latex(BinaryOp(op='/', lhs=num(1), rhs=sym('x'))) == '\\frac{1}{x}'
    assert to_latex(BinaryOp(op='<=', lhs=sym('a'), rhs=sym('b'))) == 'a\\le b'


def test_product_option():
    assert to_latex(BinaryOp(op='*', lhs=num(2), rhs=sym('x')), {'product': '\\times '}) == '2\\times x'


def test_unary():
    assert to_latex(UnaryOp(op='-', rhs=sym('x'))) == '-x'
    assert to_latex(UnaryOp(op='-', rhs=BinaryOp(op='+', lhs=sym('a'), rhs=sym('b')))) == '-(a+b)'


def test_functions_with_optional_parentheses():
    assert to_latex(Apply(fn_name='sin', arg=sym('x'))) == '\\sin x'
    assert to_latex(Apply(fn_name='arcsin', arg=sym('x'))) == '\\arcsin x'
    assert to_latex(Apply(fn_name='sin', arg=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)))) == '\\sin (x+1)'


def test_function_argument_lists():
    assert to_latex(Apply(fn_name='f', arg=sym('x'))) == 'f(x)'
    assert to_latex(Apply(fn_name='lcm', arg=[sym('a'), sym('b')])) == '\\operatorname{lcm}(a, b)'


def test_argument_list_longer_than_template_slots():
    assert to_latex(Apply(fn_name='sin', arg=[sym('x'), sym('y')])) == '\\sin (x, y)'
    assert to_latex(Apply(fn_name='sqrt', arg=[sym('x'), sym('y')])) == '\\sqrt{(x, y)}'


def test_postfix_functions():
    assert to_latex(Apply(fn_name='factorial', arg=sym('n'))) == 'n!'
    assert to_latex(Apply(fn_name='factorial', arg=BinaryOp(op='+', lhs=sym('n'), rhs=num(1)))) == '(n+1)!'
    assert to_latex(Apply(fn_name='percent', arg=num(5))) == '5\\%'
    assert to_latex(Apply(fn_name='degree', arg=sym('x'))) == 'x^{\\circ}'


def test_roots_powers_and_fences():
    assert to_latex(Apply(fn_name='sqrt', arg=sym('x'))) == '\\sqrt{x}'
    assert to_latex(Apply(fn_name='pow', arg=[sym('x'), num('1/3')])) == 'x^{\\frac{1}{3}}'
    assert to_latex(Apply(fn_name='abs', arg=sym('x'))) == '\\left|x\\right|'


def test_big_operator():
    node = Apply(fn_name='sum', arg=sym('i'), sup=sym('n'), sub=BinaryOp(op='=', lhs=sym('i'), rhs=num(1)))
    assert to_latex(node) == '\\sum_{i=1}^{n} i'


def test_groups():
    assert to_latex(Group()) == '{}'
    assert to_latex(Group(inner=BinaryOp(op='+', lhs=sym('x'), rhs=num(1)), sup=num(2))) == '(x+1)^{2}'


def test_complex():
    assert to_latex(Complex(im=num(1))) == 'i'
    assert to_latex(Complex(re=num(2), im=num(3))) == '(2+3i)'
    assert to_latex(Complex(re=num(2), im=num(-1))) == '(2-i)'


def test_text_and_errors():
    assert to_latex(Text(value='hi')) == '\\text{hi}'
    assert to_latex(Text(value='50%')) == '\\text{50\\%}'
    assert to_latex(Text(value='a#b')) == '\\text{a\\#b}'
    assert to_latex(ErrorNode(message='bad')) == '\\bbox[#F56165]{\\text{?}}'
    assert to_latex(ErrorNode(wrapped=sym('x'), message='bad')) == '\\bbox[#F56165]{x}'
