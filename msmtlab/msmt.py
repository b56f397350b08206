# -*- mode: python; coding: utf-8 -*-
# Copyright 2013-2015 Peter Williams <peter@newton.cx> and collaborators.
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""Math with uncertain measurements.

A :class:`Measure` is a central value paired with a non-negative
uncertainty. Arithmetic and the elementary functions propagate the
uncertainty to first order, assuming that distinct operands are
statistically independent. Measures are immutable: every operation returns a
new object and leaves its operands alone.

Measures can be built directly from a (value, error) pair or aggregated from
a set of repeated observations; see :func:`build` and :func:`aggregate`.

"""

__all__ = '''
Mode
Style
DisplayConfig
CONFIG
set_config
reset_config

Measure
MeasureFunctionLibrary
measure_function_library

aggregate
build
from_pair
from_samples
series
delta
values_and_errors
'''.split ()

import logging, numbers, operator
from dataclasses import dataclass, replace
from functools import partialmethod
import numpy as np

from . import (InvalidUncertainty, LengthMismatch, EmptySample, InsufficientSample,
                UndefinedPropagation)
from . import numutil
from .simpleenum import enumeration
from .mathlib import (MathFunctionLibrary, MathlibDelegatingObject, propagate_unary,
                      propagate_binary, unary_funcs)

logger = logging.getLogger (__name__)




@enumeration
class Mode (object):
    """The ways :func:`build` can construct a Measure.

    """
    single_pair = 0
    sample = 1
    sample_with_dispersion = 2

    names = ['single_pair', 'sample', 'sample_with_dispersion']

    @classmethod
    def normalize (cls, mode):
        """Return a verified, normalized mode. The string names are accepted too."""
        try:
            mval = Mode.names.index (mode)
        except ValueError:
            try:
                mval = int (mode)
            except (ValueError, TypeError):
                raise ValueError ('illegal construction mode %r' % (mode,))

        if not (mval >= cls.single_pair and mval <= cls.sample_with_dispersion):
            raise ValueError ('illegal construction mode %r' % (mode,))
        return mval


@enumeration
class Style (object):
    """Textual styles for printing a Measure.

    """
    pm = 0
    latex = 1
    typst = 2

    names = ['pm', 'latex', 'typst']
    templates = ['%s ± %s', '$%s \\pm %s$', '$%s plus.minus %s$']

    @classmethod
    def normalize (cls, style):
        try:
            sval = Style.names.index (style)
        except ValueError:
            try:
                sval = int (style)
            except (ValueError, TypeError):
                raise ValueError ('illegal display style %r' % (style,))

        if not (sval >= cls.pm and sval <= cls.typst):
            raise ValueError ('illegal display style %r' % (style,))
        return sval




@dataclass (frozen=True)
class DisplayConfig:
    default_style: int = Style.pm
    approximate_on_build: bool = False
    extra_digit_for_one: bool = False


CONFIG = DisplayConfig ()


def set_config (*, default_style=None, approximate_on_build=None, extra_digit_for_one=None):
    """Update the global CONFIG flags. Arguments left as None are unchanged.

    - *default_style*: the :class:`Style` used by ``str()``
    - *approximate_on_build*: whether the builders (:func:`from_pair`,
      :func:`from_samples`, ...) round their results by default
    - *extra_digit_for_one*: keep a second significant figure on errors of
      1 to 1.5 units in their leading place (0.15 stays 0.15)

    """
    global CONFIG
    changes = {}

    if default_style is not None:
        changes['default_style'] = Style.normalize (default_style)
    if approximate_on_build is not None:
        changes['approximate_on_build'] = bool (approximate_on_build)
    if extra_digit_for_one is not None:
        changes['extra_digit_for_one'] = bool (extra_digit_for_one)

    CONFIG = replace (CONFIG, **changes)


def reset_config ():
    """Restore the default CONFIG."""
    global CONFIG
    CONFIG = DisplayConfig ()




class Measure (MathlibDelegatingObject):
    """A value with an uncertainty.

    ``Measure (value, error)`` requires ``error >= 0``; anything else (NaN
    included) raises :exc:`msmtlab.InvalidUncertainty`. A NaN *value*
    raises :exc:`msmtlab.UndefinedPropagation`. The two numbers are exposed
    as read-only properties.

    The arithmetic operators work between Measures and between a Measure and
    a plain real number, which is treated as exact. The elementary functions
    are available both as methods (``m.sqrt ()``) and through
    :mod:`msmtlab.mathlib` (``mathlib.sqrt (m)``).

    Comparisons look at the central values only. Use :meth:`compatible` to
    ask whether two measurements agree within their uncertainties.

    """
    __slots__ = ('_value', '_error')

    def __init__ (self, value, error=0.):
        value = float (value)
        error = float (error)

        if np.isnan (value):
            raise UndefinedPropagation ('a measured value cannot be NaN')
        if not error >= 0:
            raise InvalidUncertainty ('uncertainty must be nonnegative; got %r', error)

        self._value = value
        self._error = error

    @classmethod
    def from_samples (cls, values, errors=None, dispersion=False):
        """Summarize repeated observations as a single Measure.

        The value is the mean of *values*. The uncertainty is the
        root-sum-of-squares of the per-observation *errors* divided by their
        number, which is the propagated uncertainty of the mean. If
        *dispersion* is true, the standard error of the mean (sample standard
        deviation over ``sqrt(n)``) is added in quadrature.

        *errors* may be None (exact observations), a single number applying
        to every observation, or a sequence as long as *values*.

        """
        values = np.asarray (values, dtype=np.double)
        if values.ndim != 1:
            raise ValueError ('observations must be a one-dimensional sequence; got shape %r'
                              % (values.shape,))

        errors = _paired_errors (values, errors)
        n = values.size

        if n == 0:
            raise EmptySample ('cannot aggregate an empty set of observations')
        if dispersion and n < 2:
            raise InsufficientSample ('the dispersion term needs at least 2 observations; got %d', n)
        if not np.all (np.isfinite (values)):
            raise ValueError ('observations must be finite; got %r' % values)

        mean = values.mean ()
        instrumental = np.sqrt (np.sum (errors**2)) / n

        if dispersion:
            statistical = values.std (ddof=1) / np.sqrt (n)
            error = np.hypot (instrumental, statistical)
        else:
            statistical = None
            error = instrumental

        logger.debug ('aggregated %d observations: mean=%r instrumental=%r statistical=%r',
                      n, mean, instrumental, statistical)
        return cls (mean, error)


    # Basic properties

    @property
    def value (self):
        return self._value

    @property
    def error (self):
        return self._error

    @property
    def relative_error (self):
        if self._value == 0:
            return np.inf
        return self._error / abs (self._value)

    def unpack (self):
        """Return the tuple ``(value, error)``."""
        return self._value, self._error


    # Comparisons. These only look at the central values.

    @staticmethod
    def _comparable_value (other):
        if isinstance (other, Measure):
            return other._value
        if isinstance (other, numbers.Real):
            return float (other)
        return None

    def _compare (self, op, other):
        v = self._comparable_value (other)
        if v is None:
            return NotImplemented
        return op (self._value, v)

    __lt__ = partialmethod (_compare, operator.lt)
    __le__ = partialmethod (_compare, operator.le)
    __eq__ = partialmethod (_compare, operator.eq)
    __ne__ = partialmethod (_compare, operator.ne)
    __gt__ = partialmethod (_compare, operator.gt)
    __ge__ = partialmethod (_compare, operator.ge)

    def __hash__ (self):
        return hash (self._value)

    def compatible (self, other, k=1.):
        """Return whether the intervals ``value ± k*error`` of *self* and
        *other* overlap. *other* may be a plain number.

        """
        other = self._msmt_mathlib_library_.coerce_one (other)
        return abs (self._value - other._value) <= k * (self._error + other._error)


    # Named arithmetic. The operators (``+``, ``*``, ...) go through the same
    # library calls via MathlibDelegatingObject.

    def add (self, other):
        return self._msmt_mathlib_library_.add (self, other)

    def sub (self, other):
        return self._msmt_mathlib_library_.subtract (self, other)

    def mul (self, other):
        return self._msmt_mathlib_library_.multiply (self, other)

    def div (self, other):
        return self._msmt_mathlib_library_.true_divide (self, other)

    def neg (self):
        return self._msmt_mathlib_library_.negative (self)

    def pow (self, exponent):
        return self._msmt_mathlib_library_.power (self, exponent)

    def _apply_unary (self, name):
        return getattr (self._msmt_mathlib_library_, name) (self)


    # Rounding and stringification

    def approx (self, extra_digit_for_one=None):
        """Return a copy rounded for presentation: the error to one significant
        figure, the value to the same decimal place. A zero error leaves the
        Measure unchanged.

        """
        if extra_digit_for_one is None:
            extra_digit_for_one = CONFIG.extra_digit_for_one

        value, error, _ = numutil.normalize (self._value, self._error, extra_digit_for_one)
        return self.__class__ (value, error)

    def round_to (self, decimals):
        """Return a copy with value and error both rounded to *decimals* places."""
        return self.__class__ (numutil.round_half_up (self._value, decimals),
                               numutil.round_half_up (self._error, decimals))

    def format (self, style=None, approximate=True):
        """Render as text in the given :class:`Style` (default from CONFIG).

        With *approximate*, the numbers are rounded as in :meth:`approx`
        and printed with matching decimal places; otherwise they are printed
        at full precision.

        """
        if style is None:
            style = CONFIG.default_style
        style = Style.normalize (style)

        if approximate:
            value, error, decimals = numutil.normalize (self._value, self._error,
                                                        CONFIG.extra_digit_for_one)
        else:
            value, error, decimals = self._value, self._error, None

        return Style.templates[style] % (numutil.format_fixed (value, decimals),
                                         numutil.format_fixed (error, decimals))

    def __str__ (self):
        return self.format ()

    def __repr__ (self):
        return 'Measure(%r, %r)' % (self._value, self._error)


for _name in unary_funcs:
    setattr (Measure, _name, partialmethod (Measure._apply_unary, _name))

Measure.abs = Measure.absolute
Measure.ln = Measure.log
Measure.rad = Measure.deg2rad
Measure.deg = Measure.rad2deg




def _paired_errors (values, errors):
    """Turn *errors* into an array matching the 1D array *values*."""
    if errors is None:
        return np.zeros (values.shape)

    errors = np.asarray (errors, dtype=np.double)
    if errors.ndim == 0:
        errors = np.full (values.shape, float (errors))
    elif errors.shape != values.shape:
        raise LengthMismatch ('got %d observations but %d uncertainties', values.size, errors.size)

    if not np.all (errors >= 0):
        raise InvalidUncertainty ('uncertainties must be nonnegative; got %r', errors)
    return errors




# The catalog. Each function is described by its value rule and its
# derivative(s); the propagation engine in mathlib does the rest. The rules
# receive Numpy float64 scalars.

_unary_rules = {
    'absolute': (np.absolute, lambda v: 1.),
    'arccos': (np.arccos, lambda v: -1. / np.sqrt (1. - v**2)),
    'arcsin': (np.arcsin, lambda v: 1. / np.sqrt (1. - v**2)),
    'arctan': (np.arctan, lambda v: 1. / (1. + v**2)),
    'cos': (np.cos, lambda v: -np.sin (v)),
    'cosh': (np.cosh, np.sinh),
    'deg2rad': (np.deg2rad, lambda v: np.pi / 180),
    'exp': (np.exp, np.exp),
    'log': (np.log, lambda v: 1. / v),
    'log10': (np.log10, lambda v: 1. / (v * np.log (10.))),
    'log2': (np.log2, lambda v: 1. / (v * np.log (2.))),
    'negative': (np.negative, lambda v: -1.),
    'positive': (np.positive, lambda v: 1.),
    'rad2deg': (np.rad2deg, lambda v: 180 / np.pi),
    'reciprocal': (lambda v: 1. / v, lambda v: -1. / v**2),
    'sin': (np.sin, np.cos),
    'sinh': (np.sinh, np.cosh),
    'sqrt': (np.sqrt, lambda v: 0.5 / np.sqrt (v)),
    'square': (np.square, lambda v: 2. * v),
    'tan': (np.tan, lambda v: 1. / np.cos (v)**2),
    'tanh': (np.tanh, lambda v: 1. / np.cosh (v)**2),
}
_unary_rules['degrees'] = _unary_rules['rad2deg']
_unary_rules['radians'] = _unary_rules['deg2rad']

_binary_rules = {
    'add': (np.add, lambda x, y: 1., lambda x, y: 1.),
    'subtract': (np.subtract, lambda x, y: 1., lambda x, y: -1.),
    'multiply': (np.multiply, lambda x, y: y, lambda x, y: x),
    'true_divide': (np.true_divide, lambda x, y: 1. / y, lambda x, y: -x / y**2),
    'arctan2': (np.arctan2,
                lambda x, y: y / (x**2 + y**2),
                lambda x, y: -x / (x**2 + y**2)),
    # The exponent derivative needs log(base); it is only evaluated when
    # the exponent is uncertain.
    'power': (np.power,
              lambda x, y: 0. if y == 0 else y * x**(y - 1.),
              lambda x, y: x**y * np.log (x)),
}
_binary_rules['divide'] = _binary_rules['true_divide']


class _MeasureFunctionLibraryBase (MathFunctionLibrary):
    def accepts (self, opname, other):
        return isinstance (other, (Measure, numbers.Real))

    def coerce_one (self, x):
        if isinstance (x, Measure):
            return x
        if isinstance (x, numbers.Real):
            return Measure (x, 0.)
        raise ValueError ('do not know how to handle operand %r' % (x,))

    def _propagate_unary (self, name, rule, x):
        func, deriv = rule
        x = self.coerce_one (x)
        return Measure (*propagate_unary (name, func, deriv, x._value, x._error))

    def _propagate_binary (self, name, rule, x, y):
        func, dfdx, dfdy = rule
        x = self.coerce_one (x)
        y = self.coerce_one (y)
        return Measure (*propagate_binary (name, func, dfdx, dfdy,
                                           x._value, x._error, y._value, y._error))

    def _delegate_unary (self, name, x):
        return self._propagate_unary (name, _unary_rules[name], x)

    def _delegate_binary (self, name, x, y):
        return self._propagate_binary (name, _binary_rules[name], x, y)


def _make_measure_library_type ():
    items = {}

    for name in _unary_rules:
        items[name] = partialmethod (_MeasureFunctionLibraryBase._delegate_unary, name)

    for name in _binary_rules:
        items[name] = partialmethod (_MeasureFunctionLibraryBase._delegate_binary, name)

    return type ('MeasureFunctionLibrary', (_MeasureFunctionLibraryBase,), items)

MeasureFunctionLibrary = _make_measure_library_type ()

measure_function_library = MeasureFunctionLibrary ()
Measure._msmt_mathlib_library_ = measure_function_library




# Builders. These are the supported ways to turn raw numbers into Measures.

def _maybe_approx (m, approximate):
    if approximate is None:
        approximate = CONFIG.approximate_on_build
    if approximate:
        return m.approx ()
    return m


def from_pair (value, error=0., approximate=None):
    """Build a Measure from a single value and its uncertainty."""
    return _maybe_approx (Measure (value, error), approximate)


def from_samples (values, errors=None, dispersion=False, approximate=None):
    """Build a Measure from repeated observations; see
    :meth:`Measure.from_samples`.

    """
    return _maybe_approx (Measure.from_samples (values, errors, dispersion), approximate)


aggregate = Measure.from_samples


def build (mode, values, errors=None, approximate=None):
    """Build a Measure according to *mode*, a :class:`Mode` value or name.

    ``Mode.single_pair``
      *values* is one number and *errors* its uncertainty (default 0).
    ``Mode.sample``
      *values* are repeated observations, *errors* their instrumental
      uncertainties; no dispersion term.
    ``Mode.sample_with_dispersion``
      Like ``Mode.sample``, plus the standard error of the mean.

    If *approximate* is None, ``CONFIG.approximate_on_build`` decides
    whether the result is rounded.

    """
    mode = Mode.normalize (mode)

    if mode == Mode.single_pair:
        return from_pair (values, 0. if errors is None else errors, approximate)

    return from_samples (values, errors, dispersion=(mode == Mode.sample_with_dispersion),
                         approximate=approximate)


def series (values, errors=None, approximate=None):
    """Build a list with one Measure per observation. *errors* works as in
    :meth:`Measure.from_samples`.

    """
    values = np.asarray (values, dtype=np.double)
    if values.ndim != 1:
        raise ValueError ('values must be a one-dimensional sequence; got shape %r'
                          % (values.shape,))

    errors = _paired_errors (values, errors)
    return [_maybe_approx (Measure (v, e), approximate) for v, e in zip (values, errors)]


def delta (measures):
    """Return the differences between consecutive Measures in *measures*."""
    measures = list (measures)
    return [b - a for a, b in zip (measures[:-1], measures[1:])]


def values_and_errors (measures):
    """Split a sequence of Measures into an array of values and an array of
    errors, e.g. for drawing error bars.

    """
    measures = list (measures)
    return (np.array ([m.value for m in measures], dtype=np.double),
            np.array ([m.error for m in measures], dtype=np.double))
