# mathast/atoms.py
"""Builds the atom sequence of a formula from its LaTeX source.

Atoms normally come from the editor's layout engine. This builder produces
the same shapes from plain LaTeX so formulas can be parsed without an editor:
one atom per character for digits and letters, one atom per command, with
scripts attached to the atom they decorate.
"""
import logging
import re
from typing import List, Optional

from . import definitions, delimiters
from .schemas import Atom

logger = logging.getLogger(__name__)

# --- 1. Token categories ---
BIN_COMMANDS = {'\\times', '\\cdot', '\\div', '\\pm', '\\mp', '\\ast', '\\cup', '\\cap', '\\setminus', '\\circ',
                '\\star', '\\oplus', '\\otimes', '\\land', '\\lor', '\\wedge', '\\vee'}
REL_COMMANDS = {'\\le', '\\leq', '\\leqslant', '\\ge', '\\geq', '\\geqslant', '\\ne', '\\neq', '\\lt', '\\gt',
                '\\approx', '\\equiv', '\\sim', '\\cong', '\\in', '\\notin', '\\subset', '\\supset', '\\subseteq',
                '\\supseteq', '\\to', '\\rightarrow', '\\Rightarrow', '\\implies', '\\Leftrightarrow', '\\iff',
                '\\coloneq', '\\coloneqq', '\\therefore', '\\because', '\\perp', '\\parallel', '\\mid'}
OPEN_COMMANDS = {'\\{', '\\lbrace', '\\langle', '\\lfloor', '\\lceil', '\\lvert', '\\lVert', '\\lbrack',
                 '\\ulcorner', '\\llcorner', '\\lgroup', '\\lmoustache'}
CLOSE_COMMANDS = {'\\}', '\\rbrace', '\\rangle', '\\rfloor', '\\rceil', '\\rvert', '\\rVert', '\\rbrack',
                  '\\urcorner', '\\lrcorner', '\\rgroup', '\\rmoustache'}
BAR_COMMANDS = {'\\vert', '\\Vert', '\\|'}
SPACING_COMMANDS = {'\\,', '\\;', '\\:', '\\!', '\\ ', '\\quad', '\\qquad', '\\enspace', '\\thinspace', '\\\\'}
SIZING_COMMANDS = {'\\big', '\\Big', '\\bigg', '\\Bigg', '\\bigl', '\\Bigl', '\\biggl', '\\Biggl', '\\bigr',
                   '\\Bigr', '\\biggr', '\\Biggr', '\\bigm', '\\Bigm'}
FRACTION_COMMANDS = {'\\frac', '\\dfrac', '\\tfrac', '\\cfrac'}
BINOMIAL_COMMANDS = {'\\binom', '\\dbinom', '\\tbinom'}
OPERATOR_NAME_COMMANDS = {'\\operatorname', '\\operatorname*', '\\mathop'}
FONT_COMMANDS = {'\\' + name for name in definitions.FONT_VARIANT}
NAMED_FUNCTIONS = {'\\sin', '\\cos', '\\tan', '\\csc', '\\sec', '\\cot', '\\sinh', '\\cosh', '\\tanh', '\\coth',
                   '\\arcsin', '\\arccos', '\\arctan', '\\log', '\\ln', '\\lg', '\\exp', '\\det', '\\dim', '\\min',
                   '\\max', '\\sup', '\\inf', '\\gcd', '\\lim', '\\sum', '\\prod', '\\int', '\\Re', '\\Im'}

BIN_CHARS = '+-*/−×÷·⋅±∓∪∩'
REL_CHARS = '=<>:≤≥≠≈≡→⇒⇔∈∉⊂⊃'
PUNCT_CHARS = ',;'
POSTFIX_CHARS = "!'′″°"

TOKEN_PATTERN = re.compile(r'(\\text(?:rm|it|bf|sf|tt)?\{[^{}]*\}|\\char"[0-9a-fA-F]+|\\(?:[a-zA-Z]+\*?|\S))')
TEXT_PATTERN = re.compile(r'^\\text(?:rm|it|bf|sf|tt)?\{([^{}]*)\}$')
TEXT_ESCAPE = re.compile(r'\\([%#{}&$_])')


class TokenState:
    def __init__(self, tokens: List[str]): self.tokens, self.pos = tokens, 0
    def has_tokens(self) -> bool: return self.pos < len(self.tokens)
    def current_token(self) -> Optional[str]: return self.tokens[self.pos] if self.has_tokens() else None
    def advance(self) -> Optional[str]:
        if self.has_tokens():
            token = self.current_token(); self.pos += 1; return token
        return None


def tokenize(latex_string: str) -> List[str]:
    """Splits LaTeX into commands, \\text{...} runs and single characters (whitespace dropped)."""
    tokens = []
    for part in TOKEN_PATTERN.split(latex_string):
        if not part: continue
        if TOKEN_PATTERN.match(part):
            tokens.append(part)
        else:
            tokens.extend(ch for ch in part if not ch.isspace())
    return tokens


# --- 2. Elements ---
def _build_argument(state: TokenState) -> List[Atom]:
    if state.current_token() == '{':
        state.advance()
        atoms = _build_atoms(state, stop_tokens=['}'])
        state.advance()
        return atoms
    if not state.has_tokens():
        return []
    return _build_element(state)


def _command_atom(token: str) -> Atom:
    if token in BIN_COMMANDS: return Atom(kind='mbin', latex=token)
    if token in REL_COMMANDS: return Atom(kind='mrel', latex=token)
    if token in OPEN_COMMANDS: return Atom(kind='mopen', latex=token)
    if token in CLOSE_COMMANDS: return Atom(kind='mclose', latex=token)
    if token in BAR_COMMANDS or token in delimiters.POSTFIX_FUNCTION: return Atom(kind='textord', latex=token)
    if token in SPACING_COMMANDS: return Atom(kind='spacing', latex=token)
    if token in NAMED_FUNCTIONS: return Atom(kind='mop', latex=token)
    name = token[1:]
    if token not in definitions.CANONICAL_NAMES and name not in definitions.COMMAND_SYMBOLS \
            and name not in definitions.SYMBOL_LATEX and not definitions.is_function(name):
        logger.debug("Unknown command '%s' kept as a symbol.", token)
    return Atom(kind='mord', latex=token)


def _char_atom(token: str) -> Atom:
    if token in BIN_CHARS: return Atom(kind='mbin', latex=token)
    if token in REL_CHARS: return Atom(kind='mrel', latex=token)
    if token in PUNCT_CHARS: return Atom(kind='mpunct', latex=token)
    if token in '([': return Atom(kind='mopen', latex=token)
    if token in ')]': return Atom(kind='mclose', latex=token)
    if token in '|‖' or token in POSTFIX_CHARS: return Atom(kind='textord', latex=token)
    if token == '~': return Atom(kind='spacing', latex=token)
    return Atom(kind='mord', latex=token)


def _build_element(state: TokenState) -> List[Atom]:
    token = state.advance()
    if token == '{':
        body = _build_atoms(state, stop_tokens=['}'])
        state.advance()
        return [Atom(kind='group', body=body)]
    if token in ('}', '\\right'):
        logger.debug("Ignoring unbalanced '%s'.", token)
        return []
    if not token.startswith('\\'):
        return [_char_atom(token)]

    text = TEXT_PATTERN.match(token)
    if text:
        body = [Atom(kind='textord', latex=ch, mode='text') for ch in TEXT_ESCAPE.sub(r'\1', text.group(1))]
        return [Atom(kind='font', latex='\\text', font='text', mode='text', body=body)]
    if token in FRACTION_COMMANDS:
        numer = _build_argument(state)
        return [Atom(kind='genfrac', latex=token, numer=numer, denom=_build_argument(state))]
    if token in BINOMIAL_COMMANDS:
        numer = _build_argument(state)
        return [Atom(kind='genfrac', latex=token, numer=numer, denom=_build_argument(state), has_bar=False)]
    if token == '\\sqrt':
        index = None
        if state.current_token() == '[':
            state.advance()
            index = _build_atoms(state, stop_tokens=[']'])
            state.advance()
        return [Atom(kind='surd', latex=token, index=index, body=_build_argument(state))]
    if token == '\\left':
        left = state.advance() or '.'
        body = _build_atoms(state, stop_tokens=['\\right'])
        right = '?'
        if state.current_token() == '\\right':
            state.advance()
            right = state.advance() or '?'
        return [Atom(kind='leftright', latex=token, left_delim=left, right_delim=right, body=body)]
    if token in SIZING_COMMANDS:
        return [Atom(kind='sizeddelim', latex=token, delim=state.advance() or '.')]
    if token in OPERATOR_NAME_COMMANDS:
        return [Atom(kind='mop', latex=token, body=_build_argument(state))]
    if token in FONT_COMMANDS:
        return [Atom(kind='font', latex=token, font=token[1:], body=_build_argument(state))]
    if token == '\\placeholder':
        if state.current_token() == '[':
            _build_atoms(state, stop_tokens=[']']); state.advance()
        if state.current_token() == '{':
            _build_argument(state)
        return [Atom(kind='placeholder', latex=token)]
    return [_command_atom(token)]


def _build_atoms(state: TokenState, stop_tokens: List[str] = None) -> List[Atom]:
    atoms: List[Atom] = []
    while state.has_tokens():
        token = state.current_token()
        if stop_tokens and token in stop_tokens:
            break
        if token in ('^', '_'):
            state.advance()
            field = 'superscript' if token == '^' else 'subscript'
            script = _build_argument(state)
            if atoms and getattr(atoms[-1], field) is None and atoms[-1].kind not in ('spacing', 'msubsup'):
                atoms[-1] = atoms[-1].model_copy(update={field: script})
            elif atoms and atoms[-1].kind == 'msubsup' and getattr(atoms[-1], field) is None:
                atoms[-1] = atoms[-1].model_copy(update={field: script})
            else:
                atoms.append(Atom(kind='msubsup', **{field: script}))
            continue
        atoms.extend(_build_element(state))
    return atoms


def atoms_from_latex(latex: str) -> List[Atom]:
    """Builds the atoms of a LaTeX formula.

    Args:
        latex: The formula, e.g. '\\frac{1}{3}+2x'.

    Returns:
        The top-level atoms, with fractions, radicals, fences and scripts nested as child branches.
    """
    return _build_atoms(TokenState(tokenize(latex)))
