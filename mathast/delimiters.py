# mathast/delimiters.py
from types import MappingProxyType
from typing import Optional

# --- 1. Opening fence -> required closing fence ---
RIGHT_DELIM = MappingProxyType({
    '(': ')', '[': ']', '\\{': '\\}', '{': '}', '|': '|', '\\|': '\\|',
    '\\lbrace': '\\rbrace', '\\langle': '\\rangle', '\\lfloor': '\\rfloor', '\\lceil': '\\rceil',
    '\\vert': '\\vert', '\\lvert': '\\rvert', '\\Vert': '\\Vert', '\\lVert': '\\rVert',
    '\\lbrack': '\\rbrack', '\\ulcorner': '\\urcorner', '\\llcorner': '\\lrcorner',
    '\\lgroup': '\\rgroup', '\\lmoustache': '\\rmoustache',
    '⌊': '⌋', '⌈': '⌉', '⟨': '⟩', '‖': '‖',
})

CLOSING_DELIMS = frozenset(RIGHT_DELIM.values())

# --- 2. Matched open+close pair -> named function ---
DELIM_FUNCTION = MappingProxyType({
    '\\lfloor\\rfloor': 'floor', '⌊⌋': 'floor',
    '\\lceil\\rceil': 'ceil', '⌈⌉': 'ceil',
    '||': 'abs', '\\vert\\vert': 'abs', '\\lvert\\rvert': 'abs',
    '\\|\\|': 'norm', '\\Vert\\Vert': 'norm', '\\lVert\\rVert': 'norm', '‖‖': 'norm',
    '\\ulcorner\\urcorner': 'ucorner', '\\llcorner\\lrcorner': 'lcorner',
    '\\langle\\rangle': 'angle', '⟨⟩': 'angle',
    '\\lgroup\\rgroup': 'group', '\\lmoustache\\rmoustache': 'moustache',
    '\\lbrace\\rbrace': 'brace',
})

# --- 3. Trailing symbol -> postfix function ---
POSTFIX_FUNCTION = MappingProxyType({
    '!': 'factorial', '\\dag': 'dagger', '\\dagger': 'dagger', '\\ddagger': 'dagger2', '\\maltese': 'maltese',
    '\\backprime': 'backprime', '\\backdoubleprime': 'backprime2', "'": 'prime', '′': 'prime',
    '\\prime': 'prime', '\\doubleprime': 'prime2', "''": 'prime2', '″': 'prime2', '\\$': '$', '\\%': 'percent',
    '\\_': '_', '\\degree': 'degree', '°': 'degree',
})


def right_of(open_delim: str) -> Optional[str]:
    """Returns the closing fence required by `open_delim`, or None if it does not open a fence."""
    return RIGHT_DELIM.get(open_delim)


def delim_function_name(open_delim: str, close_delim: str) -> str:
    """Name of the function a fence pair stands for; the concatenation of the pair when it has none."""
    key = open_delim + close_delim
    return DELIM_FUNCTION.get(key, key)


def has_named_function(open_delim: str, close_delim: str) -> bool:
    return (open_delim + close_delim) in DELIM_FUNCTION


def postfix_function_name(symbol: str) -> Optional[str]:
    return POSTFIX_FUNCTION.get(symbol)
