import math

import pytest
from pydantic import ValidationError

from mathast.number_format import format_mantissa, format_number, number_to_string


@pytest.mark.parametrize("value, expected", [
    (123.0, '123'),
    (0.5, '0.5'),
    (-2.5, '-2.5'),
    (1e20, '100000000000000000000'),
    (1e21, '1e+21'),
    (1e-7, '1e-7'),
])
def test_number_to_string(value, expected):
    assert number_to_string(value) == expected


def test_repeating_digits():
    assert format_number(1 / 3) == '0.\\overline{3}'
    assert format_number(1 / 7) == '0.\\overline{142857}'
    assert format_number(1 / 6) == '0.1\\overline{6}'


def test_truncated_mantissa_ends_with_ellipsis():
    assert format_number(math.pi) == '3.141592653589\\ldots'


def test_mantissa_with_zero_cycle_drops_the_zeros():
    assert format_mantissa('5000000000000') == '5'
    assert format_mantissa('25') == '25'


def test_precision_changes_cycle_detection():
    assert format_number(1 / 3, {'precision': 5}) == '0.\\overline{3}'


def test_large_and_small_floats_use_exponent():
    assert format_number(1e21) == '1\\cdot 10^{21}'
    assert format_number(1.5e-7) == '1.5\\cdot 10^{-7}'


def test_scientific_modes():
    assert format_number(12345, {'scientific_notation': 'engineering'}) == '12.345\\cdot 10^{3}'
    assert format_number(1500, {'scientific_notation': 'on'}) == '1.5\\cdot 10^{3}'
    assert format_number(5, {'scientific_notation': 'on'}) == '5'


def test_exponent_marker():
    assert format_number(1e21, {'exponent_marker': '\\mathrm{e}'}) == '1\\mathrm{e}21'


def test_rationals():
    assert format_number('1/3') == '\\frac{1}{3}'
    assert format_number('-2/4') == '-\\frac{2}{4}'
    assert format_number('6/1') == '6'
    assert format_number('0/5') == '0'


def test_digit_strings():
    assert format_number('0.00000012') == '1.2\\cdot 10^{-7}'
    assert format_number('0.0000012') == '0.0000012'
    assert format_number('12345678901234567890') == '1.2345678901234\\cdot 10^{19}'
    assert format_number('1.5e3') == '1500'
    assert format_number('abc') == '\\text{NaN}'
    assert format_number('') == '\\text{NaN}'


def test_special_values():
    assert format_number(float('nan')) == '\\text{NaN}'
    assert format_number(float('inf')) == '\\infty'
    assert format_number(float('-inf')) == '-\\infty'
    assert format_number(0.0) == '0'


def test_grouping_and_decimal_marker():
    assert format_number(1234567, {'group_separator': '\\,'}) == '1\\,234\\,567'
    assert format_number(1234567) == '1234567'
    assert format_number(3.25, {'decimalMarker': '{,}'}) == '3{,}25'


def test_invalid_precision_is_rejected():
    with pytest.raises(ValidationError):
        format_number(1.0, {'precision': 2})


def test_integers_beyond_float_range():
    assert format_number(10 ** 400) == '1\\cdot 10^{400}'
    assert format_number(-(10 ** 400)) == '-1\\cdot 10^{400}'
