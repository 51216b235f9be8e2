# mathast/definitions.py
"""Operator and function catalog.

Maps raw atom text to canonical names, gives operator precedences and holds
the LaTeX templates used when an AST is written back out. Templates use these
placeholders:

    %0, %1   positional arguments
    %^, %_   superscript / subscript (rendered as ^{...} / _{...})
    %        the remaining arguments, fenced and separated
    %%       a literal percent sign
"""
import re
from types import MappingProxyType
from typing import Optional

# --- 1. Symbol tables ---
GREEK_LETTERS = {'\\alpha': 'α', '\\beta': 'β', '\\gamma': 'γ', '\\delta': 'δ', '\\epsilon': 'ε', '\\zeta': 'ζ',
                 '\\eta': 'η', '\\theta': 'θ', '\\iota': 'ι', '\\kappa': 'κ', '\\lambda': 'λ', '\\mu': 'μ', '\\nu': 'ν',
                 '\\xi': 'ξ', '\\omicron': 'ο', '\\pi': 'π', '\\rho': 'ρ', '\\sigma': 'σ', '\\tau': 'τ',
                 '\\upsilon': 'υ', '\\phi': 'φ', '\\chi': 'χ', '\\psi': 'ψ', '\\omega': 'ω', '\\Gamma': 'Γ',
                 '\\Delta': 'Δ', '\\Theta': 'Θ', '\\Lambda': 'Λ', '\\Xi': 'Ξ', '\\Pi': 'Π', '\\Sigma': 'Σ',
                 '\\Upsilon': 'Υ', '\\Phi': 'Φ', '\\Psi': 'Ψ', '\\Omega': 'Ω', '\\varepsilon': 'ɛ', '\\vartheta': 'ϑ',
                 '\\varpi': 'ϖ', '\\varrho': 'ϱ', '\\varsigma': 'ς', '\\varphi': 'ϕ'}
LETTERLIKE = {'\\infty': '∞', '\\partial': '∂', '\\hbar': 'ħ', '\\ell': 'ℓ', '\\aleph': 'ℵ', '\\emptyset': '∅',
              '\\forall': '∀', '\\exists': '∃', '\\angle': '∠', '\\ldots': '…', '\\cdots': '⋯'}
# Canonical symbol name -> LaTeX, for names that are not plain commands.
SYMBOL_LATEX = MappingProxyType({
    'infinity': '\\infty', 'imaginaryI': '\\imaginaryI', 'exponentialE': '\\exponentialE',
    'differentialD': '\\differentialD',
})
COMMAND_SYMBOLS = frozenset(k[1:] for k in {**GREEK_LETTERS, **LETTERLIKE})
UNICODE_TO_LATEX = MappingProxyType({v: k for k, v in {**GREEK_LETTERS, **LETTERLIKE}.items()})

# --- 2. Canonical names ---
CANONICAL_NAMES = MappingProxyType({
    '\\times': '*', '\\cdot': '*', '\\ast': '*', '×': '*', '·': '*', '⋅': '*', '∗': '*',
    '\\div': '/', '÷': '/', '−': '-',
    '\\pm': 'plusminus', '±': 'plusminus', '\\mp': 'minusplus', '∓': 'minusplus',
    '\\ne': '!=', '\\neq': '!=', '≠': '!=',
    '\\le': '<=', '\\leq': '<=', '\\leqslant': '<=', '≤': '<=',
    '\\ge': '>=', '\\geq': '>=', '\\geqslant': '>=', '≥': '>=',
    '\\lt': '<', '\\gt': '>', '\\coloneq': ':=', '\\coloneqq': ':=',
    '\\approx': 'approx', '≈': 'approx', '\\equiv': 'equiv', '≡': 'equiv',
    '\\sim': 'similar', '\\cong': 'congruent',
    '\\in': 'elementof', '∈': 'elementof', '\\notin': '!elementof', '∉': '!elementof',
    '\\subset': 'subset', '\\supset': 'superset', '\\subseteq': 'subseteq', '\\supseteq': 'superseteq',
    '\\cup': 'union', '∪': 'union', '\\cap': 'intersection', '∩': 'intersection', '\\setminus': 'setminus',
    '\\land': 'and', '\\wedge': 'and', '∧': 'and', '\\lor': 'or', '\\vee': 'or', '∨': 'or',
    '\\oplus': 'xor', '\\otimes': 'otimes',
    '\\to': 'to', '\\rightarrow': 'to', '→': 'to', '\\Rightarrow': 'implies', '\\implies': 'implies',
    '⇒': 'implies', '\\Leftrightarrow': 'iff', '\\iff': 'iff', '⇔': 'iff',
    '\\therefore': 'therefore', '\\because': 'because',
    '\\lnot': 'not', '\\neg': 'not', '¬': 'not',
    '\\nabla': 'nabla', '∇': 'nabla', '\\infty': 'infinity', '∞': 'infinity',
    '\\int': 'integral', '∫': 'integral', '∑': 'sum', '∏': 'prod', '√': 'sqrt', '!': 'factorial',
})

# --- 3. Operator precedence (higher binds tighter) ---
OP_PRECEDENCE = MappingProxyType({
    '**': 720, '/': 660, 'setminus': 650, 'otimes': 410, '*': 390,
    'union': 350, 'intersection': 350,
    '+': 275, '-': 275, 'plusminus': 275, 'minusplus': 275,
    'equiv': 260, '=': 260, '!=': 255, 'similar': 250, 'congruent': 250, 'approx': 247,
    '<': 245, '>': 243, '>=': 242, '<=': 241,
    'elementof': 240, '!elementof': 240, 'subset': 240, 'superset': 240, 'subseteq': 240, 'superseteq': 240,
    'and': 200, 'xor': 195, 'or': 190, ':': 100, ':=': 80, 'therefore': 70, 'because': 70,
    'to': 60, 'implies': 50, 'iff': 45, ',': 40, ';': 30,
})

OPERATOR_TEMPLATE = MappingProxyType({
    '+': '%0+%1', '-': '%0-%1', '**': '%0^{%1}', '=': '%0=%1', '<': '%0<%1', '>': '%0>%1',
    '!=': '%0\\ne %1', '<=': '%0\\le %1', '>=': '%0\\ge %1', ':=': '%0:=%1', ':': '%0:%1',
    'plusminus': '%0\\pm %1', 'minusplus': '%0\\mp %1', 'setminus': '%0\\setminus %1', 'otimes': '%0\\otimes %1',
    'union': '%0\\cup %1', 'intersection': '%0\\cap %1', 'equiv': '%0\\equiv %1', 'similar': '%0\\sim %1',
    'congruent': '%0\\cong %1', 'approx': '%0\\approx %1', 'elementof': '%0\\in %1', '!elementof': '%0\\notin %1',
    'subset': '%0\\subset %1', 'superset': '%0\\supset %1', 'subseteq': '%0\\subseteq %1',
    'superseteq': '%0\\supseteq %1', 'and': '%0\\land %1', 'xor': '%0\\oplus %1', 'or': '%0\\lor %1',
    'therefore': '%0\\therefore %1', 'because': '%0\\because %1', 'to': '%0\\to %1',
    'implies': '%0\\implies %1', 'iff': '%0\\iff %1', ',': '%0, %1', ';': '%0; %1',
})

# --- 4. Functions ---
FUNCTION_TEMPLATE = MappingProxyType({
    # Trigonometry
    'sin': '\\sin%_%^ %0', 'cos': '\\cos%_%^ %0', 'tan': '\\tan%_%^ %0', 'cot': '\\cot%_%^ %0',
    'sec': '\\sec%_%^ %0', 'csc': '\\csc%_%^ %0',
    'sinh': '\\sinh%_%^ %0', 'cosh': '\\cosh%_%^ %0', 'tanh': '\\tanh%_%^ %0', 'coth': '\\coth%_%^ %0',
    'sech': '\\operatorname{sech}%_%^ %0', 'csch': '\\operatorname{csch}%_%^ %0',
    'arcsin': '\\arcsin%_%^ %0', 'arccos': '\\arccos%_%^ %0', 'arctan': '\\arctan%_%^ %0',
    'arccot': '\\operatorname{arccot}%_%^ %0', 'arcsec': '\\operatorname{arcsec}%_%^ %0',
    'arccsc': '\\operatorname{arccsc}%_%^ %0',
    'arsinh': '\\operatorname{arsinh}%_%^ %0', 'arcosh': '\\operatorname{arcosh}%_%^ %0',
    'artanh': '\\operatorname{artanh}%_%^ %0', 'arcoth': '\\operatorname{arcoth}%_%^ %0',
    'arsech': '\\operatorname{arsech}%_%^ %0', 'arcsch': '\\operatorname{arcsch}%_%^ %0',
    # Logarithms and friends
    'ln': '\\ln%_%^ %0', 'log': '\\log%_%^ %0', 'lg': '\\lg%_%^ %0', 'lb': '\\operatorname{lb}%_%^ %0',
    'exp': '\\exp%_%^%', 'det': '\\det%_%^%', 'dim': '\\dim%_%^%', 'min': '\\min%_%^%', 'max': '\\max%_%^%',
    'sup': '\\sup%_%^%', 'inf': '\\inf%_%^%', 'gcd': '\\gcd%', 'lcm': '\\operatorname{lcm}%',
    'erf': '\\operatorname{erf}%', 'erfc': '\\operatorname{erfc}%', 'sgn': '\\operatorname{sgn}%',
    'Re': '\\Re%', 'Im': '\\Im%',
    # Big operators
    'lim': '\\lim%_%^ %0', 'sum': '\\sum%_%^ %0', 'prod': '\\prod%_%^ %0', 'integral': '\\int%_%^ %0',
    # Roots and fractions
    'sqrt': '\\sqrt{%0}', 'root': '\\sqrt[%1]{%0}', 'binom': '\\binom{%0}{%1}',
    # Fences
    'abs': '\\left|%0\\right|', 'norm': '\\left\\Vert %0\\right\\Vert', 'floor': '\\lfloor %0\\rfloor',
    'ceil': '\\lceil %0\\rceil', 'ucorner': '\\ulcorner %0\\urcorner', 'lcorner': '\\llcorner %0\\lrcorner',
    'angle': '\\langle %0\\rangle', 'group': '\\lgroup %0\\rgroup', 'moustache': '\\lmoustache %0\\rmoustache',
    'brace': '\\lbrace %0\\rbrace',
    # Postfix
    'factorial': '%0!', 'factorial2': '%0!!', 'prime': "%0'", 'prime2': "%0''", 'degree': '%0^{\\circ}',
    'percent': '%0\\%%', 'dagger': '%0^{\\dagger}', 'dagger2': '%0^{\\ddagger}', 'maltese': '%0\\maltese',
    'backprime': '%0\\backprime', 'backprime2': '%0\\backprime\\backprime',
    # Vector calculus and logic
    'nabla': '\\nabla %0', 'curl': '\\nabla\\times %0', 'div': '\\nabla\\cdot %0', 'not': '\\lnot %0',
})

POSTFIX_FUNCTIONS = frozenset({'factorial', 'factorial2', 'prime', 'prime2', 'degree', 'percent', 'dagger',
                               'dagger2', 'maltese', 'backprime', 'backprime2'})

# Functions that may drop the parentheses around a simple argument: "\sin x", "n!".
OPTIONAL_PAREN_FUNCTION = re.compile(r'^(factorial2?|(ar|arc)?(sin|cos|tan|cot|sec|csc)h?|ln|log|lg|lb)$')

INVERSE_FUNCTION = MappingProxyType({
    'sin': 'arcsin', 'cos': 'arccos', 'tan': 'arctan', 'cot': 'arccot', 'sec': 'arcsec', 'csc': 'arccsc',
    'sinh': 'arsinh', 'cosh': 'arcosh', 'tanh': 'artanh', 'csch': 'arcsch', 'sech': 'arsech', 'coth': 'arcoth',
})

# --- 5. Font variants ---
FONT_VARIANT = MappingProxyType({
    'mathrm': 'normal', 'mathbb': 'double-struck', 'mathbf': 'bold', 'mathcal': 'script', 'mathscr': 'script',
    'mathfrak': 'fraktur', 'mathsf': 'sans-serif', 'mathtt': 'monospace',
})
VARIANT_COMMAND = MappingProxyType({
    'normal': '\\mathrm', 'double-struck': '\\mathbb', 'bold': '\\mathbf', 'script': '\\mathcal',
    'fraktur': '\\mathfrak', 'sans-serif': '\\mathsf', 'monospace': '\\mathtt',
})

_PLACEHOLDER = re.compile(r'%[01_^%]?')


def get_canonical_name(raw: str) -> str:
    """Normalizes the raw text of an atom to a catalog name.

    Args:
        raw: The atom text, e.g. '\\times', '≤', 'x' or '\\alpha'.

    Returns:
        '*' for '\\times', '<=' for '≤', 'alpha' for '\\alpha' or 'α'; plain text is returned unchanged.
    """
    raw = raw.strip()
    if raw in CANONICAL_NAMES:
        return CANONICAL_NAMES[raw]
    if raw in UNICODE_TO_LATEX:
        return UNICODE_TO_LATEX[raw][1:]
    if raw.startswith('\\') and len(raw) > 1 and raw[1:].isalpha():
        return raw[1:]
    return raw


def get_precedence(name: str) -> Optional[int]:
    """Precedence of an infix operator, None when `name` is not one."""
    return OP_PRECEDENCE.get(name)


def is_function(name: str) -> bool:
    return name in FUNCTION_TEMPLATE


def is_optional_paren_function(name: str) -> bool:
    return bool(OPTIONAL_PAREN_FUNCTION.match(name))


def latex_template_for_function(name: str) -> str:
    template = FUNCTION_TEMPLATE.get(name)
    if template is not None:
        return template
    if len(name) == 1:
        return name + '%^%_%'
    return '\\operatorname{' + name + '}%^%_%'


def latex_template_for_operator(name: str) -> str:
    template = OPERATOR_TEMPLATE.get(name)
    if template is not None:
        return template
    return '%0' + latex_for_symbol(name) + ' %1'


def latex_for_symbol(name: str) -> str:
    """LaTeX for a bare symbol: a function name without its arguments, a command, or the name itself."""
    if name in FUNCTION_TEMPLATE:
        return _PLACEHOLDER.sub('', FUNCTION_TEMPLATE[name]).strip()
    if name in SYMBOL_LATEX:
        return SYMBOL_LATEX[name]
    if name in COMMAND_SYMBOLS:
        return '\\' + name
    if name in UNICODE_TO_LATEX:
        return UNICODE_TO_LATEX[name]
    return name
