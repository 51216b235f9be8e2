# mathast/number_format.py
import math
import re
from decimal import Decimal
from typing import Union

from .config import LatexFormatOptions, OptionsLike, resolve_options

RATIONAL_PATTERN = re.compile(r'^\s*(-?\d+)\s*/\s*(-?\d+)\s*$')
DIGIT_STRING_PATTERN = re.compile(r'^([+-]?)(\d*)(?:\.(\d*))?([eEdD][+-]?\d+)?$')
THOUSANDS_PATTERN = re.compile(r'\B(?=(\d{3})+(?!\d))')

MAX_CYCLE_LENGTH = 17
# Fractions whose first significant digit is further out than this are written in scientific form.
SMALL_NUMBER_ZEROS = 6


# ==============================================================================
# SECTION 1: PLAIN TEXT CONVERSION
# ==============================================================================
def number_to_string(value: float) -> str:
    """Shortest round-tripping text of a float, in positional form for 1e-6 <= |value| < 1e21.

    Larger and smaller magnitudes use an exponent: '1e+21', '1.5e-7'.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    sign = '-' if value < 0 else ''
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k
    if k <= n <= 21:
        return sign + digits + '0' * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + '.' + digits[n:]
    if -6 < n <= 0:
        return sign + '0.' + '0' * (-n) + digits
    e = n - 1
    mantissa = digits[0] + ('.' + digits[1:] if k > 1 else '')
    return sign + mantissa + 'e' + ('+' if e >= 0 else '-') + str(abs(e))


def _round_significant(value: float, precision: int) -> float:
    return float(f'{value:.{precision}g}')


def _group_integer(digits: str, options: LatexFormatOptions) -> str:
    if not options.group_separator:
        return digits
    return THOUSANDS_PATTERN.sub(lambda _: options.group_separator, digits)


def _group_fraction(digits: str, options: LatexFormatOptions) -> str:
    if not options.group_separator:
        return digits
    return options.group_separator.join(digits[i:i + 3] for i in range(0, len(digits), 3))


# ==============================================================================
# SECTION 2: MANTISSA AND REPEATING DIGITS
# ==============================================================================
def format_mantissa(mantissa: str, options: OptionsLike = None) -> str:
    """Formats the digits after the decimal marker.

    A repeating tail is wrapped in the repeating-digit markers ('3333...' gives
    '\\overline{3}'); digits cut off to honor the precision end with '\\ldots'.

    Args:
        mantissa: The fractional digits, without the decimal marker.
        options: Format options; defaults when None.

    Returns:
        The LaTeX for the fractional part. May be empty when it is all zeros.
    """
    options = resolve_options(options)
    limit = options.precision - 2
    digits = mantissa[:limit]
    truncated = len(digits) != len(mantissa)

    if len(mantissa) >= limit:
        for offset in range(len(digits)):
            prefix = digits[:offset]
            remaining = len(digits) - offset
            if remaining < len(digits) // 2:
                break
            for length in range(1, MAX_CYCLE_LENGTH + 1):
                times = remaining // length
                if times < 2:
                    break
                cycle = digits[offset:offset + length]
                if (prefix + cycle * (times + 1)).startswith(digits):
                    if cycle == '0' * length:
                        return _group_fraction(prefix, options)
                    return (_group_fraction(prefix, options) + options.begin_repeating_digits + cycle +
                            options.end_repeating_digits)

    return _group_fraction(digits, options) + ('\\ldots' if truncated else '')


def _join_parts(sign: str, whole: str, fraction: str, options: LatexFormatOptions) -> str:
    result = sign + _group_integer(whole, options)
    if fraction:
        result += options.decimal_marker + format_mantissa(fraction, options)
    if result.endswith(options.decimal_marker) and options.decimal_marker:
        result = result[:-len(options.decimal_marker)]
    return result


def _with_exponent(mantissa_latex: str, exponent: int, options: LatexFormatOptions) -> str:
    if exponent == 0:
        return mantissa_latex
    if options.exponent_marker:
        return mantissa_latex + options.exponent_marker + str(exponent)
    return mantissa_latex + options.exponent_product + '10^{' + str(exponent) + '}'


def _format_positional(value: float, options: LatexFormatOptions) -> str:
    text = number_to_string(value)
    sign = '-' if text.startswith('-') else ''
    whole, _, fraction = text.lstrip('-').partition('.')
    return _join_parts(sign, whole, fraction, options)


# ==============================================================================
# SECTION 3: FLOATS
# ==============================================================================
def _split_exponent(value: float, step: int) -> tuple:
    exponent = math.floor(math.log10(abs(value)))
    exponent -= exponent % step
    mantissa = value / 10 ** exponent
    # log10 can land one short for exact powers of ten.
    if abs(mantissa) >= 10 ** step:
        exponent += step
        mantissa = value / 10 ** exponent
    return mantissa, exponent


def _format_float(value: float, options: LatexFormatOptions) -> str:
    if math.isnan(value):
        return '\\text{NaN}'
    if math.isinf(value):
        return '\\infty' if value > 0 else '-\\infty'
    value = _round_significant(value, options.precision)
    if value == 0:
        return '0'

    if options.scientific_notation == 'auto':
        text = number_to_string(value)
        if 'e' not in text:
            return _format_positional(value, options)
        mantissa, _, exponent = text.partition('e')
        return _with_exponent(_format_positional(float(mantissa), options), int(exponent), options)

    step = 3 if options.scientific_notation == 'engineering' else 1
    mantissa, exponent = _split_exponent(value, step)
    mantissa = _round_significant(mantissa, options.precision)
    return _with_exponent(_format_positional(mantissa, options), exponent, options)


# ==============================================================================
# SECTION 4: DIGIT STRINGS AND RATIONALS
# ==============================================================================
def _format_rational(match: re.Match) -> str:
    p, q = int(match.group(1)), int(match.group(2))
    if p == 0 or q == 0:
        return '0'
    sign = '-' if (p < 0) != (q < 0) else ''
    p, q = abs(p), abs(q)
    if q == 1:
        return sign + str(p)
    return sign + '\\frac{' + str(p) + '}{' + str(q) + '}'


def _format_digit_string(text: str, options: LatexFormatOptions) -> str:
    match = DIGIT_STRING_PATTERN.match(text.strip())
    if not match or not (match.group(2) or match.group(3)):
        return '\\text{NaN}'
    sign, whole, fraction, exponent = match.groups()
    if exponent:
        return _format_float(float(text.strip().replace('d', 'e').replace('D', 'e')), options)
    sign = '-' if sign == '-' else ''
    whole = whole.lstrip('0') or '0'
    fraction = fraction or ''

    if len(whole) > options.precision:
        digits = whole[1:options.precision].rstrip('0')
        mantissa = whole[0] + (options.decimal_marker + digits if digits else '')
        return _with_exponent(sign + mantissa, len(whole) - 1, options)

    if whole == '0' and fraction.strip('0'):
        leading = len(fraction) - len(fraction.lstrip('0'))
        if leading >= SMALL_NUMBER_ZEROS:
            significant = fraction[leading:]
            return _with_exponent(_join_parts(sign, significant[0], significant[1:], options), -(leading + 1),
                                  options)

    return _join_parts(sign, whole, fraction, options)


def format_number(value: Union[float, int, str], options: OptionsLike = None) -> str:
    """Renders a number as LaTeX.

    Args:
        value: A float, an int, a rational string 'p/q' or a digit string such as '0.000012'.
        options: Format options (a LatexFormatOptions, a mapping, or None for defaults).

    Returns:
        The LaTeX text. Rationals bypass rounding; malformed strings give '\\text{NaN}'.
    """
    options = resolve_options(options)
    if isinstance(value, str):
        rational = RATIONAL_PATTERN.match(value)
        if rational:
            return _format_rational(rational)
        return _format_digit_string(value, options)
    try:
        value = float(value)
    except OverflowError:
        # Integers beyond the float range keep all their digits.
        return _format_digit_string(str(value), options)
    return _format_float(value, options)
