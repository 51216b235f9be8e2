# mathast/parser.py
"""Turns a sequence of layout atoms into a semantic expression tree.

Two mutually recursive functions do the work: `parse_primary` reads the
smallest complete unit at the cursor (a number, an identifier, a function
with its argument, a fenced group...) and `parse_expression` combines
primaries through infix operators by precedence climbing.
"""
import logging
import re
from typing import Optional, Sequence, Tuple

from . import definitions, delimiters
from .atoms import atoms_from_latex
from .schemas import (AnyNode, Apply, Atom, BinaryOp, Complex, ErrorNode, Fence, Group, NumberLiteral, Symbol,
                      Text, UnaryOp)

logger = logging.getLogger(__name__)

# --- 1. Atom classification ---
DIGITS = '0123456789'
NUMBER_START = DIGITS + '.'
EXPONENT_MARKERS = 'eEdD'
WRAPPER_COMMANDS = {'\\mathop', '\\mathbin', '\\mathrel', '\\mathopen', '\\mathclose', '\\mathpunct', '\\mathord',
                    '\\mathinner', '\\operatorname', '\\operatorname*'}
CONTAINER_KINDS = ('font', 'leftright', 'group', 'root', 'genfrac', 'surd')
FUNCTION_KINDS = ('mord', 'textord', 'mop', 'font')
PRIMARY_START_KINDS = ('mord', 'surd', 'mop', 'mopen', 'sizeddelim', 'leftright', 'genfrac', 'font', 'group',
                       'placeholder')
OPEN_FENCE_KINDS = ('mopen', 'textord', 'mord', 'sizeddelim')
CLOSE_FENCE_KINDS = ('mclose', 'textord', 'mord', 'sizeddelim')
BAR_FENCES = {'|', '\\vert', '\\Vert', '\\|', '‖'}
SKIPPED_KINDS = ('spacing', 'sizing')

DIGRAPHS = {
    ('\\nabla', '\\times'): 'curl', ('∇', '×'): 'curl', ('\\nabla', '×'): 'curl', ('∇', '\\times'): 'curl',
    ('\\nabla', '\\cdot'): 'div', ('∇', '·'): 'div', ('∇', '⋅'): 'div', ('\\nabla', '·'): 'div',
    ('∇', '\\cdot'): 'div', ('!', '!'): 'factorial2',
}
PREFIX_DIGRAPHS = {'curl', 'div'}
OPERATOR_DIGRAPHS = {'<=': '<=', '>=': '>=', '!=': '!=', ':=': ':=', '**': '**'}
CHAR_PATTERN = re.compile(r'^\\char"([0-9a-fA-F]+)$')


class ParseCursor:
    """Read position in an atom sequence and the node parsed so far.

    A cursor belongs to a single parse call; nested branches (superscripts,
    numerators, fence bodies) get their own cursor through `parse`.
    """

    def __init__(self, atoms: Sequence[Atom], index: int = 0, min_prec: int = 0):
        self.atoms, self.index, self.min_prec = list(atoms), index, min_prec
        self.result: Optional[AnyNode] = None
        # Indices of atoms whose scripts were already attached to a node.
        self.scripted = set()
        # Bar fences (|x|, \|x\|) whose closing bar is still expected.
        self.bar_depth = 0

    def has_atoms(self) -> bool: return self.index < len(self.atoms)

    def peek(self, offset: int = 0) -> Optional[Atom]:
        i = self.index + offset
        return self.atoms[i] if 0 <= i < len(self.atoms) else None

    def current_atom(self) -> Optional[Atom]: return self.peek(0)

    def advance(self, count: int = 1): self.index += count

    def skip_spacing(self):
        while self.has_atoms() and self.atoms[self.index].kind in SKIPPED_KINDS:
            self.index += 1


# --- 2. Helpers ---
def get_string(atom: Optional[Atom]) -> str:
    """Raw text of an atom; containers and wrapper commands contribute the text of their body."""
    if atom is None:
        return ''
    if atom.kind == 'sizeddelim':
        return atom.delim or ''
    if atom.kind in CONTAINER_KINDS or atom.latex.strip() in WRAPPER_COMMANDS:
        return ''.join(get_string(a) for a in atom.body or [])
    return atom.latex.strip()


def op_prec(atom: Optional[Atom]) -> int:
    if atom is None or atom.mode == 'text' or atom.kind in CONTAINER_KINDS:
        return -1
    prec = definitions.get_precedence(definitions.get_canonical_name(get_string(atom)))
    return -1 if prec is None else prec


def _is_digit(atom: Optional[Atom]) -> bool:
    return atom is not None and atom.kind == 'mord' and atom.mode == 'math' and len(atom.latex) == 1 \
        and atom.latex in DIGITS


def _starts_number(atom: Optional[Atom]) -> bool:
    return atom is not None and atom.kind == 'mord' and atom.mode == 'math' and len(atom.latex) == 1 \
        and atom.latex in NUMBER_START


def _is_plain_integer(node: Optional[AnyNode]) -> bool:
    return isinstance(node, NumberLiteral) and node.is_integer() and node.sup is None and node.sub is None


def _is_closing_fence(atom: Atom) -> bool:
    if atom.kind == 'mclose':
        return True
    if atom.kind != 'sizeddelim':
        return False
    text = get_string(atom)
    # \bigr| closes even though | also opens.
    return text in delimiters.CLOSING_DELIMS and (delimiters.right_of(text) is None or atom.latex.endswith('r'))


def _bar_follows(cursor: ParseCursor, bar: str) -> bool:
    return any(a.kind in CLOSE_FENCE_KINDS and get_string(a) == bar for a in cursor.atoms[cursor.index + 1:])


def _starts_primary(cursor: ParseCursor, atom: Optional[Atom]) -> bool:
    if atom is None:
        return False
    if atom.mode == 'text':
        return True
    if op_prec(atom) >= 0 or _is_closing_fence(atom):
        return False
    text = get_string(atom)
    if text in BAR_FENCES and atom.kind in OPEN_FENCE_KINDS:
        # Inside a bar fence the next bar closes it.
        return cursor.bar_depth == 0 and _bar_follows(cursor, text)
    if atom.kind == 'sizeddelim':
        return delimiters.right_of(text) is not None
    return atom.kind in PRIMARY_START_KINDS


def _opens_paren(atom: Optional[Atom]) -> bool:
    if atom is None:
        return False
    if atom.kind == 'leftright':
        return atom.left_delim == '('
    return atom.kind in ('mopen', 'sizeddelim') and get_string(atom) == '('


def _operator_at(cursor: ParseCursor) -> Optional[Tuple[str, int, int]]:
    """(canonical name, precedence, atom count) of the infix operator at the cursor, if any."""
    first, second = cursor.current_atom(), cursor.peek(1)
    if first is None:
        return None
    if second is not None and not first.has_scripts() and first.mode == 'math':
        pair = OPERATOR_DIGRAPHS.get(get_string(first) + get_string(second))
        if pair is not None:
            return pair, definitions.get_precedence(pair), 2
    prec = op_prec(first)
    if prec < 0:
        return None
    return definitions.get_canonical_name(get_string(first)), prec, 1


def _negate(value):
    if isinstance(value, str):
        return value[1:] if value.startswith('-') else '-' + value
    return -value


def _is_minus_one(node: Optional[AnyNode]) -> bool:
    if isinstance(node, NumberLiteral):
        return not isinstance(node.value, str) and node.value == -1
    return isinstance(node, UnaryOp) and node.op == '-' and isinstance(node.rhs, NumberLiteral) \
        and node.rhs.value == 1


def _missing(what: str) -> ErrorNode:
    logger.warning("Missing %s.", what)
    return ErrorNode(message=f"Missing {what}")


# --- 3. Atom to node ---
def atom_to_node(atom: Atom) -> Optional[AnyNode]:
    """Converts a single structural atom (fraction, radical, styled run, symbol) to a node."""
    if atom.kind == 'genfrac':
        numer = parse(atom.numer) or NumberLiteral(value=0)
        denom = parse(atom.denom) or NumberLiteral(value=0)
        if not atom.has_bar:
            return Apply(fn_name='binom', arg=[numer, denom])
        if _is_plain_integer(numer) and _is_plain_integer(denom) and denom.value != 0:
            return NumberLiteral(value=f'{int(numer.value)}/{int(denom.value)}')
        return BinaryOp(op='/', lhs=numer, rhs=denom)

    if atom.kind == 'surd':
        radicand = parse(atom.body) or NumberLiteral(value=0)
        index = parse(atom.index) if atom.index else None
        if index is None:
            return Apply(fn_name='sqrt', arg=radicand)
        if _is_plain_integer(index) and index.value != 0:
            exponent = NumberLiteral(value=f'1/{int(index.value)}')
        else:
            exponent = BinaryOp(op='/', lhs=NumberLiteral(value=1), rhs=index)
        return Apply(fn_name='pow', arg=[radicand, exponent])

    if atom.kind == 'font':
        text = get_string(atom)
        if atom.font == 'text' or atom.mode == 'text':
            return Text(value=text)
        return Symbol(name=definitions.get_canonical_name(text), variant=definitions.FONT_VARIANT.get(atom.font))

    match = CHAR_PATTERN.match(atom.latex.strip())
    raw = chr(int(match.group(1), 16)) if match else get_string(atom)
    name = definitions.get_canonical_name(raw)
    if name == 'imaginaryI':
        return Complex(im=NumberLiteral(value=1))
    if not name:
        return None
    return Symbol(name=name, variant=definitions.FONT_VARIANT.get(atom.font) if atom.font else None)


# --- 4. Decorations ---
def parse_digraph(cursor: ParseCursor) -> Optional[str]:
    """Name of the two-atom sequence at the cursor (curl, div, factorial2), without consuming it."""
    first, second = cursor.current_atom(), cursor.peek(1)
    if first is None or second is None or first.has_scripts():
        return None
    return DIGRAPHS.get((get_string(first), get_string(second)))


def parse_supsub(cursor: ParseCursor) -> ParseCursor:
    """Attaches the scripts of the atom just consumed, or of a following script-only atom."""
    atom = cursor.peek(-1)
    if atom is None or not atom.has_scripts() or (cursor.index - 1) in cursor.scripted:
        atom = cursor.current_atom()
        if atom is None or atom.kind != 'msubsup' or not atom.has_scripts():
            return cursor
        cursor.advance()
    cursor.scripted.add(cursor.index - 1)

    # x^{\circ}, x^{\prime}: a lone postfix symbol in the superscript.
    postfix = None
    if atom.superscript is not None and len(atom.superscript) == 1:
        text = get_string(atom.superscript[0])
        postfix = 'degree' if text == '\\circ' else delimiters.postfix_function_name(text)
    if postfix is not None and cursor.result is not None:
        atom = atom.model_copy(update={'superscript': None})
        cursor.result = Apply(fn_name=postfix, arg=cursor.result)
        if not atom.has_scripts():
            return cursor

    sup = parse(atom.superscript) if atom.superscript is not None else None
    sub = parse(atom.subscript) if atom.subscript is not None else None
    node = cursor.result if cursor.result is not None else Group()
    taken = (sup is not None and node.sup is not None) or (sub is not None and node.sub is not None)
    if taken or not isinstance(node, (NumberLiteral, Symbol, Group, Apply)):
        node = Group(inner=node)
    update = {}
    if sup is not None: update['sup'] = sup
    if sub is not None: update['sub'] = sub
    cursor.result = node.model_copy(update=update)
    return cursor


def parse_postfix(cursor: ParseCursor) -> ParseCursor:
    lhs = cursor.result
    atom = cursor.current_atom()
    if lhs is None or atom is None or atom.mode == 'text' or atom.kind not in ('textord', 'mord', 'mclose'):
        return cursor
    text, following = get_string(atom), get_string(cursor.peek(1))
    if parse_digraph(cursor) == 'factorial2':
        name = 'factorial2'
        cursor.advance(2)
    elif text == '!' and following == '=':
        return cursor
    else:
        name = delimiters.postfix_function_name(text)
        if name is None:
            return cursor
        cursor.advance()
    cursor.result = Apply(fn_name=name, arg=lhs)
    return parse_postfix(parse_supsub(cursor))


# --- 5. Fences ---
def _parse_fence(cursor: ParseCursor) -> Optional[Tuple[str, str, Optional[AnyNode], bool]]:
    """Reads a fenced construct: (open, close, inner node, whether the closing fence was found)."""
    atom = cursor.current_atom()
    if atom is None or atom.mode == 'text':
        return None

    if atom.kind == 'leftright':
        cursor.advance()
        opening = atom.left_delim or '.'
        closing = atom.right_delim or '?'
        inner = parse(atom.body or [])
        return opening, closing, inner, closing != '?'

    if atom.kind not in OPEN_FENCE_KINDS:
        return None
    opening = get_string(atom)
    closing = delimiters.right_of(opening)
    if closing is None:
        return None
    width = 1
    if opening == '|' and get_string(cursor.peek(1)) == '|' and not atom.has_scripts():
        opening, closing, width = '\\|', '\\|', 2
    cursor.advance(width)

    bar = opening in BAR_FENCES
    saved = cursor.min_prec
    cursor.min_prec = 0
    cursor.bar_depth += bar
    inner = parse_expression(parse_primary(cursor)).result
    cursor.bar_depth -= bar
    cursor.min_prec = saved

    cursor.skip_spacing()
    end = cursor.current_atom()
    if width == 2:
        matched = get_string(end) == '|' and get_string(cursor.peek(1)) == '|'
    else:
        matched = end is not None and end.kind in CLOSE_FENCE_KINDS and get_string(end) == closing
    if matched:
        cursor.advance(width)
    return opening, closing, inner, matched


def _fenced_node(opening: str, closing: str, inner: Optional[AnyNode]) -> AnyNode:
    if delimiters.has_named_function(opening, closing):
        return Apply(fn_name=delimiters.delim_function_name(opening, closing), arg=inner)
    if opening == '(' and closing == ')':
        if inner is None:
            return Group(fence=Fence())
        if isinstance(inner, (NumberLiteral, Symbol, Apply)):
            return inner
        return Group(inner=inner)
    return Group(inner=inner, fence=Fence(open=opening, close=closing))


def parse_delim(cursor: ParseCursor) -> ParseCursor:
    """Parses a fenced primary: `|x|` becomes abs(x), `(x+1)` a Group, `(x)` plain x.

    When the closing fence is missing the content is kept as a Group whose
    closing fence is empty.
    """
    fence = _parse_fence(cursor)
    if fence is None:
        return cursor
    opening, closing, inner, matched = fence
    if not matched:
        logger.warning("Missing closing fence for '%s'; keeping the content as a group.", opening)
        cursor.result = Group(inner=inner, fence=Fence(open=opening, close=''))
        return cursor
    cursor.result = _fenced_node(opening, closing, inner)
    return parse_postfix(parse_supsub(cursor))


# --- 6. Primaries ---
def _parse_number(cursor: ParseCursor) -> ParseCursor:
    text, seen_exponent = '', False
    while cursor.has_atoms():
        atom = cursor.current_atom()
        if atom.kind in SKIPPED_KINDS:
            cursor.advance()
            continue
        value = get_string(atom)
        if _is_digit(atom):
            text += value
        elif _starts_number(atom) and not seen_exponent and '.' not in text:
            text += '.'
        elif atom.kind == 'mpunct' and value == ',' and not seen_exponent and '.' not in text and text \
                and all(_is_digit(cursor.peek(i)) and not cursor.peek(i).has_scripts() for i in (1, 2)) \
                and _is_digit(cursor.peek(3)) and not _is_digit(cursor.peek(4)):
            # Digit-grouping comma: "1,000".
            cursor.advance()
            continue
        elif atom.kind == 'mord' and value in EXPONENT_MARKERS and text and not seen_exponent and \
                (_is_digit(cursor.peek(1)) or (get_string(cursor.peek(1)) in ('+', '-') and
                                               _is_digit(cursor.peek(2)))):
            text += 'e'
            seen_exponent = True
        elif atom.kind == 'mbin' and value in ('+', '-') and text.endswith('e'):
            text += value
        else:
            break
        cursor.advance()
        if atom.has_scripts():
            break

    try:
        cursor.result = NumberLiteral(value=float(text))
    except ValueError:
        logger.warning("Malformed number literal '%s'.", text)
        cursor.result = ErrorNode(message=f"Malformed number '{text}'")
    return cursor


def _parse_text_run(cursor: ParseCursor) -> ParseCursor:
    value = ''
    while cursor.has_atoms() and cursor.current_atom().mode == 'text':
        value += get_string(cursor.current_atom())
        cursor.advance()
    cursor.result = Text(value=value)
    return cursor


def _parse_function(cursor: ParseCursor, name: str) -> ParseCursor:
    cursor.advance()
    cursor.result = Apply(fn_name=name)
    fn = parse_supsub(cursor).result
    if isinstance(fn, Apply) and fn.fn_name in definitions.INVERSE_FUNCTION and _is_minus_one(fn.sup):
        fn = fn.model_copy(update={'fn_name': definitions.INVERSE_FUNCTION[fn.fn_name], 'sup': None})
    arg = _function_arguments(parse_primary(cursor).result)
    cursor.result = fn.model_copy(update={'arg': arg}) if isinstance(fn, Apply) else Apply(fn_name=name, arg=arg)
    return cursor


def _function_arguments(arg: Optional[AnyNode]):
    """Drops the parentheses of a call and splits `a, b` into an argument list."""
    if not isinstance(arg, Group) or arg.fence is not None or arg.sup is not None or arg.sub is not None:
        return arg
    inner = arg.inner
    items = []
    while isinstance(inner, BinaryOp) and inner.op == ',' and inner.sup is None and inner.sub is None:
        items.insert(0, inner.rhs)
        inner = inner.lhs
    if not items:
        return inner
    return [inner] + items


def _is_function_atom(atom: Atom, name: str) -> bool:
    if atom.kind == 'mop' and atom.latex.strip() in WRAPPER_COMMANDS:
        return bool(name)
    return definitions.is_function(name)


def _apply_sign(sign: str, operand: Optional[AnyNode], following: Optional[Atom]) -> AnyNode:
    if operand is None:
        return UnaryOp(op=sign, rhs=_missing(f"operand after '{sign}'"))
    if isinstance(operand, NumberLiteral) and operand.sup is None and operand.sub is None and following is not None \
            and (_starts_number(following) or following.kind == 'genfrac'):
        if sign == '+':
            return operand
        return operand.model_copy(update={'value': _negate(operand.value)})
    return UnaryOp(op=sign, rhs=operand)


def _parse_call(cursor: ParseCursor) -> ParseCursor:
    """Reads `f(x)` and `g(x)` as calls rather than products."""
    fn = cursor.result
    if not isinstance(fn, Symbol) or fn.name not in ('f', 'g') or fn.sup is not None or fn.sub is not None \
            or fn.variant is not None:
        return cursor
    cursor.skip_spacing()
    if not _opens_paren(cursor.current_atom()):
        return cursor
    _, _, inner, matched = _parse_fence(cursor)
    if not matched:
        logger.warning("Missing closing fence for the arguments of '%s'.", fn.name)
    cursor.result = Apply(fn_name=fn.name, arg=_function_arguments(Group(inner=inner)))
    return parse_postfix(parse_supsub(cursor))


def _parse_implicit_multiplication(cursor: ParseCursor) -> ParseCursor:
    """Joins primaries written side by side into a left-leaning product: 2xy is (2*x)*y."""
    while True:
        cursor.skip_spacing()
        if not _starts_primary(cursor, cursor.current_atom()):
            return cursor
        lhs = cursor.result
        rhs = parse_primary(cursor, implicit=False).result
        if rhs is None:
            cursor.result = lhs
            return cursor
        cursor.result = BinaryOp(op='*', lhs=lhs, rhs=rhs)


def parse_primary(cursor: ParseCursor, implicit: bool = True) -> ParseCursor:
    """Parses the primary at the cursor into `cursor.result`.

    The result stays None when the cursor is at an infix operator or a closing fence.
    With `implicit`, the primaries that follow without an operator are multiplied in.
    """
    cursor.result = None
    cursor.skip_spacing()
    atom = cursor.current_atom()
    if atom is None:
        return cursor
    start = cursor.index

    digraph = parse_digraph(cursor)
    if digraph in PREFIX_DIGRAPHS:
        cursor.advance(2)
        operand = parse_primary(cursor).result
        cursor.result = Apply(fn_name=digraph, arg=operand)
        return cursor

    kind, text = atom.kind, get_string(atom)
    if atom.mode == 'text':
        _parse_text_run(cursor)
    elif kind == 'mbin' and definitions.get_canonical_name(text) in ('+', '-'):
        cursor.advance()
        following = cursor.current_atom()
        operand = parse_primary(cursor).result
        cursor.result = _apply_sign(definitions.get_canonical_name(text), operand, following)
        return cursor
    elif _starts_number(atom):
        _parse_number(cursor)
        following = cursor.current_atom()
        if following is not None and following.kind == 'genfrac' and following.has_bar \
                and _is_plain_integer(cursor.result) and not cursor.peek(-1).has_scripts():
            # Mixed number: 2 1/2 is 2 + 1/2.
            whole = cursor.result
            cursor.result = BinaryOp(op='+', lhs=whole, rhs=parse_primary(cursor).result)
            return cursor
        parse_postfix(parse_supsub(cursor))
    elif kind in ('genfrac', 'surd'):
        cursor.advance()
        cursor.result = atom_to_node(atom)
        parse_postfix(parse_supsub(cursor))
    elif kind == 'placeholder':
        cursor.advance()
        cursor.result = NumberLiteral(value=0)
        parse_supsub(cursor)
    elif kind == 'error':
        cursor.advance()
        logger.warning("Invalid command '%s'.", atom.latex)
        cursor.result = ErrorNode(message=f"Invalid command '{atom.latex}'")
    elif kind in ('group', 'root'):
        cursor.advance()
        cursor.result = parse(atom.body) or Group()
        parse_postfix(parse_supsub(cursor))
    elif kind in ('mclose',) or _is_closing_fence(atom) or op_prec(atom) >= 0:
        return cursor
    elif kind in ('leftright', 'sizeddelim', 'mopen') or (delimiters.right_of(text) and kind in OPEN_FENCE_KINDS):
        parse_delim(cursor)
    elif kind in FUNCTION_KINDS:
        name = definitions.get_canonical_name(text)
        if _is_function_atom(atom, name):
            return _parse_function(cursor, name)
        cursor.advance()
        cursor.result = atom_to_node(atom)
        _parse_call(parse_postfix(parse_supsub(cursor)))

    if cursor.result is None and cursor.index == start:
        logger.warning("Unexpected token '%s' of kind '%s'.", atom.latex, kind)
        cursor.advance()
        cursor.result = ErrorNode(message=f"Unexpected token '{atom.latex}' ({kind})")

    if implicit and cursor.result is not None:
        _parse_implicit_multiplication(cursor)
    return cursor


# --- 7. Expressions ---
def _combine(op: str, lhs: Optional[AnyNode], rhs: Optional[AnyNode]) -> AnyNode:
    if rhs is None:
        rhs = _missing(f"right operand for '{op}'")
    if lhs is None:
        return UnaryOp(op=op, rhs=rhs)
    if op == '/' and _is_plain_integer(lhs) and _is_plain_integer(rhs) and rhs.value != 0:
        return NumberLiteral(value=f'{int(lhs.value)}/{int(rhs.value)}')
    return BinaryOp(op=op, lhs=lhs, rhs=rhs)


def parse_expression(cursor: ParseCursor) -> ParseCursor:
    """Precedence climbing from `cursor.result` as the left operand.

    Operators binding tighter than the one just read are absorbed into its right
    operand; operators of equal precedence associate to the left.
    """
    lhs = cursor.result
    min_prec = cursor.min_prec
    while True:
        cursor.skip_spacing()
        operator = _operator_at(cursor)
        if operator is None or operator[1] < min_prec:
            break
        name, prec, width = operator
        cursor.advance(width)
        rhs = parse_primary(cursor).result
        while True:
            cursor.skip_spacing()
            lookahead = _operator_at(cursor)
            if lookahead is None or lookahead[1] <= prec:
                break
            cursor.result = rhs
            cursor.min_prec = lookahead[1]
            rhs = parse_expression(cursor).result
            cursor.min_prec = min_prec
        lhs = _combine(name, lhs, rhs)
    cursor.result = lhs
    return cursor


def parse(atoms: Optional[Sequence[Atom]]) -> Optional[AnyNode]:
    """Parses an atom sequence into an AST. Never raises on malformed input.

    Args:
        atoms: The atoms of a formula (or of one of its branches).

    Returns:
        The root node, or None for an empty sequence.
    """
    if not atoms:
        return None
    cursor = parse_expression(parse_primary(ParseCursor(atoms)))
    result = cursor.result
    while cursor.has_atoms():
        stray = cursor.current_atom()
        cursor.advance()
        logger.warning("Unexpected '%s' at position %d.", stray.latex, cursor.index - 1)
        result = ErrorNode(wrapped=result if result is not None else Text(value='?'),
                           message=f"Unexpected '{stray.latex}'")
        rest = parse_expression(parse_primary(cursor)).result
        if rest is not None:
            result = BinaryOp(op='*', lhs=result, rhs=rest)
    return result


def parse_latex(latex: str) -> Optional[AnyNode]:
    return parse(atoms_from_latex(latex))
