# -*- mode: python; coding: utf-8 -*-
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""Rounding numbers to a physically meaningful precision.

An uncertainty is quoted with one significant figure and the central value
is rounded to the same decimal place. All of the digit bookkeeping is done
on the shortest decimal representation of each float (its :func:`repr`), via
the :mod:`decimal` module, so that ``0.0347`` really is treated as
``3.47e-2`` and ties round the way a person would round them on paper.

"""

__all__ = '''
order10
round_half_up
error_decimals
normalize
format_fixed
'''.split ()

import math
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP, localcontext


def _as_decimal (x):
    return Decimal (repr (float (x)))


def order10 (x):
    """Return the decimal order of magnitude of *x*: the power of ten of its
    leading significant digit. ``order10 (0.0234) == -2``.

    """
    if x == 0 or not math.isfinite (x):
        raise ValueError ('order of magnitude of %r is undefined' % x)
    return _as_decimal (abs (x)).adjusted ()


def round_half_up (x, decimals):
    """Round *x* to *decimals* places after the decimal point; a negative
    *decimals* rounds to tens, hundreds, and so on. Ties go away from zero.

    """
    d = _as_decimal (x)

    if not d.is_finite () or d.as_tuple ().exponent >= -decimals:
        return float (x) # nothing to drop

    return float (d.quantize (Decimal (1).scaleb (-decimals), rounding=ROUND_HALF_UP))


def error_decimals (error, extra_digit_for_one=False):
    """Return the number of decimal places that *error* should be quoted to,
    or None if there is no sensible answer (zero or non-finite error).

    The answer puts the single significant figure of the *rounded* error in
    the last place, so that 0.096 gives 1 (0.1) rather than 2.

    With *extra_digit_for_one*, an error that would be quoted as a bare 1 in
    its leading place keeps a second figure. That covers errors from 1 up to
    and including 1.5 units of the leading place: 0.15 stays 0.15, while
    0.151 and 0.19 become 0.2 and 0.096 becomes 0.1.

    """
    if error == 0 or not math.isfinite (error):
        return None

    decimals = -order10 (error)
    unit = Decimal (1).scaleb (-decimals)

    if extra_digit_for_one and _as_decimal (error).quantize (unit, rounding=ROUND_HALF_DOWN) == unit:
        return decimals + 1

    return -order10 (round_half_up (error, decimals))


def normalize (value, error, extra_digit_for_one=False):
    """Round *value* and *error* for presentation.

    Returns ``(value, error, decimals)``. When :func:`error_decimals` has no
    answer, *value* and *error* come back untouched and *decimals* is None.

    """
    decimals = error_decimals (error, extra_digit_for_one)
    if decimals is None:
        return float (value), float (error), None

    return round_half_up (value, decimals), round_half_up (error, decimals), decimals


def format_fixed (x, decimals):
    """Format *x* with exactly *decimals* digits after the point, keeping
    trailing zeros. None means full precision.

    """
    d = _as_decimal (x)
    if decimals is None or not d.is_finite ():
        return repr (float (x))

    # Format the shortest decimal repr, not the binary float, so that 1e30
    # prints as 1 followed by zeros.
    places = max (decimals, 0)
    with localcontext () as ctx:
        ctx.prec = max (ctx.prec, d.adjusted () + places + 2)
        d = d.quantize (Decimal (1).scaleb (-places), rounding=ROUND_HALF_UP)
    text = format (d, '.%df' % places)

    if float (text) == 0:
        text = text.lstrip ('-') # no "-0.00"
    return text
