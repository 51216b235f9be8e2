# mathast/schemas.py

from typing import List, Literal, Optional, Union, Annotated
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ==============================================================================
# SECTION 1: ATOM INPUT SCHEMA
# ==============================================================================
AtomKind = Literal['mord', 'textord', 'mbin', 'mrel', 'mpunct', 'mop', 'mopen', 'mclose', 'minner', 'genfrac',
                   'surd', 'font', 'leftright', 'sizeddelim', 'delim', 'spacing', 'sizing', 'msubsup',
                   'placeholder', 'group', 'root', 'error']


class Atom(BaseModel):
    """One laid-out unit of a formula, as handed over by the editor.

    Only the fields relevant to the atom's kind are set: `numer`/`denom` for
    `genfrac`, `body`/`index` for `surd`, `left_delim`/`right_delim` for
    `leftright`, `delim` for `sizeddelim`, `font` for `font` runs.
    """
    model_config = ConfigDict(frozen=True)

    kind: AtomKind
    latex: str = ''
    mode: Literal['math', 'text'] = 'math'
    body: Optional[List['Atom']] = None
    superscript: Optional[List['Atom']] = None
    subscript: Optional[List['Atom']] = None
    numer: Optional[List['Atom']] = None
    denom: Optional[List['Atom']] = None
    has_bar: bool = True
    index: Optional[List['Atom']] = None
    left_delim: Optional[str] = None
    right_delim: Optional[str] = None
    delim: Optional[str] = None
    font: Optional[str] = None

    def has_scripts(self) -> bool:
        return self.superscript is not None or self.subscript is not None


# ==============================================================================
# SECTION 2: SEMANTIC AST SCHEMA
# ==============================================================================
class Fence(BaseModel):
    """Opening, closing and argument-separator text of a fence. '.' is an invisible fence."""
    model_config = ConfigDict(frozen=True)

    open: str = '('
    close: str = ')'
    middle: str = ','


class BaseNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    sup: Optional['AnyNode'] = None
    sub: Optional['AnyNode'] = None


class NumberLiteral(BaseNode):
    kind: Literal['number'] = 'number'
    # Rationals are kept as "p/q" strings so they stay exact.
    value: Union[float, str]

    @model_validator(mode='after')
    def check_rational(self) -> 'NumberLiteral':
        if isinstance(self.value, str):
            parts = self.value.split('/')
            if len(parts) != 2 or not all(p.lstrip('-').isdigit() for p in parts):
                raise ValueError(f"Rational literal must look like 'p/q', got {self.value!r}.")
        return self

    def is_integer(self) -> bool:
        return isinstance(self.value, float) and self.value.is_integer()


class Symbol(BaseNode):
    kind: Literal['symbol'] = 'symbol'
    name: str
    variant: Optional[Literal['normal', 'double-struck', 'bold', 'script', 'fraktur', 'sans-serif',
                              'monospace']] = None


class Group(BaseNode):
    kind: Literal['group'] = 'group'
    inner: Optional['AnyNode'] = None
    fence: Optional[Fence] = None


class Apply(BaseNode):
    kind: Literal['apply'] = 'apply'
    fn_name: str
    arg: Optional[Union['AnyNode', List['AnyNode']]] = None
    over: Optional['AnyNode'] = None
    under: Optional['AnyNode'] = None
    fence: Optional[Fence] = None

    def arguments(self) -> List['AnyNode']:
        if self.arg is None: return []
        return list(self.arg) if isinstance(self.arg, list) else [self.arg]


class BinaryOp(BaseNode):
    kind: Literal['binary'] = 'binary'
    op: str
    lhs: 'AnyNode'
    rhs: 'AnyNode'


class UnaryOp(BaseNode):
    kind: Literal['unary'] = 'unary'
    op: str
    rhs: 'AnyNode'


class Text(BaseNode):
    kind: Literal['text'] = 'text'
    value: str


class Complex(BaseNode):
    kind: Literal['complex'] = 'complex'
    re: Optional['AnyNode'] = None
    im: Optional['AnyNode'] = None
    fence: Optional[Fence] = None


class ErrorNode(BaseNode):
    kind: Literal['error'] = 'error'
    wrapped: Optional['AnyNode'] = Field(default_factory=lambda: Text(value='?'))
    message: str


AnyNode = Annotated[Union[NumberLiteral, Symbol, Group, Apply, BinaryOp, UnaryOp, Text, Complex, ErrorNode],
                    Field(discriminator='kind')]

for _model in (Atom, BaseNode, NumberLiteral, Symbol, Group, Apply, BinaryOp, UnaryOp, Text, Complex, ErrorNode):
    _model.model_rebuild()
