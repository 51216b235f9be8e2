# mathast/latex_emitter.py
import re
from typing import List, Optional

from . import definitions
from .config import LatexFormatOptions, OptionsLike, resolve_options
from .number_format import format_number
from .schemas import AnyNode, Apply, BinaryOp, Complex, ErrorNode, Fence, Group, NumberLiteral, Symbol, Text, UnaryOp

ERROR_BOX = '\\bbox[#F56165]'
TEMPLATE_SLOT = re.compile(r'%([01_^%]?)')
TEXT_SPECIAL = re.compile(r'([%#{}&$_])')
DEFAULT_FENCE = Fence()


# --- 1. Small pieces ---
def _scripts(node: AnyNode, options: LatexFormatOptions, skip_sup: bool = False, skip_sub: bool = False) -> str:
    result = ''
    if node.sup is not None and not skip_sup:
        result += '^{' + to_latex(node.sup, options) + '}'
    if node.sub is not None and not skip_sub:
        result += '_{' + to_latex(node.sub, options) + '}'
    return result


def _wrap_fence(fence: Optional[Fence], body: str) -> str:
    fence = fence or DEFAULT_FENCE
    opening = '' if fence.open == '.' else fence.open
    closing = '' if fence.close == '.' else fence.close
    if opening.startswith('\\') and opening[-1].isalpha() and body[:1].isalnum():
        opening += ' '
    if closing.startswith('\\') and closing[-1].isalpha():
        return opening + body + closing + ' '
    return opening + body + closing


def _precedence(node: Optional[AnyNode]) -> int:
    if isinstance(node, BinaryOp) and node.sup is None and node.sub is None:
        prec = definitions.get_precedence(node.op)
        return 0 if prec is None else prec
    return 1000


def _is_simple_argument(node: AnyNode) -> bool:
    """Arguments written without parentheses after \\sin, \\ln, n!..."""
    if isinstance(node, (NumberLiteral, Symbol, Group)):
        return True
    if isinstance(node, BinaryOp):
        return node.op == '/'
    return isinstance(node, Apply) and node.fn_name == 'sqrt'


def _fill_template(template: str, slots: dict) -> str:
    """Replaces every placeholder in one pass, so inserted text is never rescanned."""
    return TEMPLATE_SLOT.sub(lambda m: '%' if m.group(1) == '%' else slots.get(m.group(1), ''), template)


# --- 2. Node kinds ---
def _number_to_latex(node: NumberLiteral, options: LatexFormatOptions) -> str:
    return format_number(node.value, options) + _scripts(node, options)


def _symbol_to_latex(node: Symbol, options: LatexFormatOptions) -> str:
    result = definitions.latex_for_symbol(node.name)
    if node.variant is not None:
        result = definitions.VARIANT_COMMAND[node.variant] + '{' + result + '}'
    return result + _scripts(node, options)


def _group_to_latex(node: Group, options: LatexFormatOptions) -> str:
    if node.inner is None and node.fence is None:
        return '{}' + _scripts(node, options)
    inner = to_latex(node.inner, options) if node.inner is not None else ''
    return _wrap_fence(node.fence, inner) + _scripts(node, options)


def _binary_to_latex(node: BinaryOp, options: LatexFormatOptions) -> str:
    if node.op == '/':
        result = '\\frac{' + to_latex(node.lhs, options) + '}{' + to_latex(node.rhs, options) + '}'
        if node.sup is not None or node.sub is not None:
            result = '\\left(' + result + '\\right)'
        return result + _scripts(node, options)

    prec = _precedence(node)
    lhs = to_latex(node.lhs, options)
    if _precedence(node.lhs) < prec:
        lhs = '(' + lhs + ')'
    rhs = to_latex(node.rhs, options)
    rhs_prec = _precedence(node.rhs)
    # Ties associate to the left.
    if rhs_prec <= prec:
        rhs = '(' + rhs + ')'

    if node.op == '*':
        result = lhs + options.product + rhs
    else:
        result = _fill_template(definitions.latex_template_for_operator(node.op), {'0': lhs, '1': rhs})
    if node.sup is not None or node.sub is not None:
        result = '(' + result + ')'
    return result + _scripts(node, options)


def _unary_to_latex(node: UnaryOp, options: LatexFormatOptions) -> str:
    rhs = to_latex(node.rhs, options)
    prec = definitions.get_precedence(node.op)
    if isinstance(node.rhs, BinaryOp) and node.rhs.op != '/' and _precedence(node.rhs) <= (prec or 0):
        rhs = '(' + rhs + ')'
    result = _fill_template(definitions.latex_template_for_operator(node.op), {'0': '', '1': rhs})
    if node.sup is not None or node.sub is not None:
        result = '(' + result + ')'
    return result + _scripts(node, options)


def _pow_to_latex(node: Apply, options: LatexFormatOptions) -> str:
    base, exponent = node.arguments()[:2]
    result = to_latex(base, options)
    if not isinstance(base, (NumberLiteral, Symbol)) or base.sup is not None:
        result = _wrap_fence(node.fence, result)
    return result + '^{' + to_latex(exponent, options) + '}' + _scripts(node, options, skip_sup=True)


def _apply_to_latex(node: Apply, options: LatexFormatOptions) -> str:
    args = node.arguments()
    if node.fn_name == 'pow' and len(args) == 2:
        return _pow_to_latex(node, options)

    template = definitions.latex_template_for_function(node.fn_name)
    optional_paren = definitions.is_optional_paren_function(node.fn_name) or \
        node.fn_name in definitions.POSTFIX_FUNCTIONS
    positional = [slot for slot in ('%0', '%1') if slot in template]
    has_list_slot = any(m.group(1) == '' for m in TEMPLATE_SLOT.finditer(template))

    rendered: List[str] = []
    if isinstance(node.arg, list) and len(args) > len(positional) and not has_list_slot:
        # More arguments than slots: the whole list goes into the first one.
        fence = node.fence or DEFAULT_FENCE
        rendered.append(_wrap_fence(fence, (fence.middle + ' ').join(to_latex(arg, options) for arg in args)))
    else:
        for arg in args:
            text = to_latex(arg, options)
            if optional_paren and not _is_simple_argument(arg):
                text = _wrap_fence(node.fence, text)
            rendered.append(text)

    remaining = rendered[len(positional):]
    if optional_paren and len(remaining) == 1:
        argument_list = remaining[0]
    else:
        fence = node.fence or DEFAULT_FENCE
        argument_list = _wrap_fence(fence, (fence.middle + ' ').join(remaining))

    sup = node.sup if node.sup is not None else node.over
    sub = node.sub if node.sub is not None else node.under
    slots = {
        '0': rendered[0] if len(rendered) > 0 else '',
        '1': rendered[1] if len(rendered) > 1 else '',
        '^': '^{' + to_latex(sup, options) + '}' if sup is not None else '',
        '_': '_{' + to_latex(sub, options) + '}' if sub is not None else '',
        '': argument_list,
    }
    result = _fill_template(template, slots)
    if sup is not None and '%^' not in template:
        result += slots['^']
    if sub is not None and '%_' not in template:
        result += slots['_']
    return result


def _complex_to_latex(node: Complex, options: LatexFormatOptions) -> str:
    re_part = node.re
    im_part = node.im
    if im_part is None or (isinstance(im_part, NumberLiteral) and im_part.value == 0):
        return to_latex(re_part, options) if re_part is not None else '0'

    if isinstance(im_part, NumberLiteral) and not isinstance(im_part.value, str) and im_part.value in (1, -1):
        imaginary = ('-' if im_part.value < 0 else '') + 'i'
    else:
        imaginary = to_latex(im_part, options)
        if not isinstance(im_part, (NumberLiteral, Symbol)):
            imaginary = '(' + imaginary + ')'
        imaginary += 'i'

    if re_part is None or (isinstance(re_part, NumberLiteral) and re_part.value == 0):
        result = imaginary
    elif imaginary.startswith('-'):
        result = _wrap_fence(node.fence, to_latex(re_part, options) + imaginary)
    else:
        result = _wrap_fence(node.fence, to_latex(re_part, options) + '+' + imaginary)
    return result + _scripts(node, options)


def _error_to_latex(node: ErrorNode, options: LatexFormatOptions) -> str:
    inner = to_latex(node.wrapped, options) if node.wrapped is not None else '\\text{?}'
    return ERROR_BOX + '{' + inner + '}' + _scripts(node, options)


def _text_to_latex(node: Text, options: LatexFormatOptions) -> str:
    return '\\text{' + TEXT_SPECIAL.sub(r'\\\1', node.value) + '}' + _scripts(node, options)


_EMITTERS = {
    'number': _number_to_latex, 'symbol': _symbol_to_latex, 'group': _group_to_latex, 'apply': _apply_to_latex,
    'binary': _binary_to_latex, 'unary': _unary_to_latex, 'text': _text_to_latex, 'complex': _complex_to_latex,
    'error': _error_to_latex,
}


def to_latex(node: Optional[AnyNode], options: OptionsLike = None) -> str:
    """Serializes an AST to LaTeX.

    Args:
        node: The root node; None gives an empty string.
        options: Number and product formatting (a LatexFormatOptions, a mapping, or None).

    Returns:
        The LaTeX text.
    """
    if node is None:
        return ''
    options = resolve_options(options)
    return _EMITTERS[node.kind](node, options)
