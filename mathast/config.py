# mathast/config.py
import logging
from typing import Any, Literal, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config.yaml'
CONFIG_SECTION = 'latex_format'


class LatexFormatOptions(BaseModel):
    """How numbers and products are written when an AST is turned back into LaTeX.

    Field names may also be given in camelCase (``decimalMarker``, ``groupSeparator``...).
    """
    model_config = ConfigDict(frozen=True, extra='forbid', alias_generator=to_camel, populate_by_name=True)

    precision: int = Field(14, ge=3, le=17, description="Maximum number of significant digits.")
    decimal_marker: str = '.'
    # Empty turns digit grouping off, e.g. '\\, ' gives '1\\, 234\\, 567'.
    group_separator: str = ''
    product: str = '\\cdot '
    exponent_product: str = '\\cdot '
    exponent_marker: str = ''
    scientific_notation: Literal['auto', 'engineering', 'on'] = 'auto'
    begin_repeating_digits: str = '\\overline{'
    end_repeating_digits: str = '}'


OptionsLike = Union[LatexFormatOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> LatexFormatOptions:
    if options is None:
        return LatexFormatOptions()
    if isinstance(options, LatexFormatOptions):
        return options
    return LatexFormatOptions.model_validate(dict(options))


def load_format_options(path: str = DEFAULT_CONFIG_PATH) -> LatexFormatOptions:
    """Reads the `latex_format` section of a YAML file.

    Falls back to the built-in defaults when the file or the section is missing, or
    when the file is not valid YAML. Values that fail validation raise.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            section = (yaml.safe_load(f) or {})[CONFIG_SECTION]
        logger.info("Loaded LaTeX format options from %s.", path)
    except (FileNotFoundError, KeyError, TypeError, yaml.YAMLError):
        logger.warning("%s not found or malformed, using default LaTeX format options.", path)
        return LatexFormatOptions()
    return LatexFormatOptions.model_validate(section or {})
