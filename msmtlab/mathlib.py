# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""Math functions that propagate uncertainties, dispatched by name.

There are two layers here. The bottom one is the propagation engine,
:func:`propagate_unary` and :func:`propagate_binary`, which apply the
first-order (linearized) propagation law given a function and its partial
derivatives. It knows nothing about any particular operation.

The top one is a dispatch mechanism. Every supported math function has a
name (``sqrt``, ``add``, ...) and a module-level function of that name in
this module. Plain numbers are handed to Numpy; objects that carry a
``_msmt_mathlib_library_`` attribute are handed to that library, which
implements the function in terms of the propagation engine. Inherit from
:class:`MathlibDelegatingObject` to get the Python operators wired into the
same mechanism.

"""

# __all__ is augmented below:
__all__ = '''
unary_funcs
binary_funcs
propagate_unary
propagate_binary
MathFunctionLibrary
NumpyFunctionLibrary
numpy_library
numpy_types
get_library_for
MathlibDelegatingObject
'''.split ()

import numbers
from functools import partial, partialmethod
import numpy as np

from . import UndefinedPropagation


unary_funcs = '''
absolute
arccos
arcsin
arctan
cos
cosh
deg2rad
degrees
exp
log
log10
log2
negative
positive
rad2deg
radians
reciprocal
sin
sinh
sqrt
square
tan
tanh
'''.split ()

binary_funcs = '''
add
arctan2
divide
multiply
power
subtract
true_divide
'''.split ()




# The propagation engine. Operands are promoted to Numpy float64 scalars so
# that the errstate below governs every floating-point operation, including
# the ones inside the caller-supplied derivative functions.

_strict_errstate = dict (divide='raise', invalid='raise', over='raise', under='ignore')


def _undefined (name, operands, detail):
    where = ', '.join ('%r' % float (v) for v in operands)
    return UndefinedPropagation ('%s is undefined at (%s): %s', name, where, detail)


def _finish (name, operands, value, error):
    if np.isnan (value) or np.isnan (error):
        raise _undefined (name, operands, 'result is not a number')
    return float (value), float (error)


def _partial_term (deriv, u, *operands):
    # An exact operand contributes nothing, so its derivative is never
    # evaluated.
    if u == 0:
        return 0.
    return deriv (*operands) * u


def propagate_unary (name, func, deriv, x, ux):
    """Propagate the uncertainty *ux* of *x* through ``func``.

    Returns ``(func(x), |deriv(x)| * ux)``. *name* is only used in error
    messages. Raises :exc:`msmtlab.UndefinedPropagation` if the function
    cannot be evaluated at *x*, or if *x* is uncertain and the derivative
    cannot be evaluated there.

    """
    x = np.float64 (x)

    try:
        with np.errstate (**_strict_errstate):
            value = func (x)
            error = np.abs (_partial_term (deriv, ux, x))
    except (FloatingPointError, ZeroDivisionError) as e:
        raise _undefined (name, (x,), e)

    return _finish (name, (x,), value, error)


def propagate_binary (name, func, dfdx, dfdy, x, ux, y, uy):
    """Propagate the uncertainties of two independent operands through
    ``func (x, y)``.

    The result uncertainty is the root-sum-of-squares of ``dfdx(x,y) * ux``
    and ``dfdy(x,y) * uy``. An exact operand is simply one with zero
    uncertainty; its partial derivative is not evaluated, so ``x ** 2``
    works for negative ``x`` even though ``d(x**y)/dy`` needs ``log (x)``.

    """
    x = np.float64 (x)
    y = np.float64 (y)

    try:
        with np.errstate (**_strict_errstate):
            value = func (x, y)
            error = np.hypot (_partial_term (dfdx, ux, x, y), _partial_term (dfdy, uy, x, y))
    except (FloatingPointError, ZeroDivisionError) as e:
        raise _undefined (name, (x, y), e)

    return _finish (name, (x, y), value, error)




class _MathFunctionLibraryBase (object):
    def accepts (self, opname, other):
        return False


def _unimplemented_unary_func (name, x):
    raise NotImplementedError ('math function "%s" not implemented for objects of type "%s"'
                               % (name, x.__class__.__name__))

def _unimplemented_binary_func (name, x, y):
    raise NotImplementedError ('math function "%s" not implemented for objects of type "%s"'
                               % (name, x.__class__.__name__))

def _make_base_library_type ():
    items = {}

    for name in unary_funcs:
        items[name] = partial (_unimplemented_unary_func, name)

    for name in binary_funcs:
        items[name] = partial (_unimplemented_binary_func, name)

    return type ('MathFunctionLibrary', (_MathFunctionLibraryBase,), items)

MathFunctionLibrary = _make_base_library_type ()




numpy_types = (numbers.Real, np.generic, np.ndarray, list, tuple)

class _NumpyFunctionLibraryBase (MathFunctionLibrary):
    def accepts (self, opname, other):
        return isinstance (other, numpy_types)


def _float_ufunc (ufunc):
    # np.reciprocal() and friends truncate integers, which we don't want.
    def impl (self, *args):
        return ufunc (*[np.asarray (a, dtype=np.double) for a in args])
    impl.__name__ = ufunc.__name__
    return impl


def _make_numpy_library_type ():
    items = {}

    for name in unary_funcs + binary_funcs:
        items[name] = _float_ufunc (getattr (np, name))

    return type ('NumpyFunctionLibrary', (_NumpyFunctionLibraryBase,), items)

NumpyFunctionLibrary = _make_numpy_library_type ()

numpy_library = NumpyFunctionLibrary ()




def get_library_for (x):
    if isinstance (x, numpy_types):
        return numpy_library

    library = getattr (x, '_msmt_mathlib_library_', None)
    if library is not None:
        return library

    raise ValueError ('cannot identify math function library for object '
                      '%r of type %s' % (x, x.__class__.__name__))


def _dispatch_unary_function (name, x):
    if isinstance (x, numpy_types):
        return getattr (numpy_library, name) (x)

    library = getattr (x, '_msmt_mathlib_library_', None)
    if library is not None:
        return getattr (library, name) (x)

    raise ValueError ('cannot determine how to apply math function "%s" to object '
                      '%r of type %s' % (name, x, x.__class__.__name__))


def _dispatch_binary_function (name, x, y):
    if isinstance (x, numpy_types) and isinstance (y, numpy_types):
        return getattr (numpy_library, name) (x, y)

    # If either object has a library, it can tell us how to combine the
    # operands.

    library = getattr (x, '_msmt_mathlib_library_', None)
    if library is not None and library.accepts (name, y):
        return getattr (library, name) (x, y)

    library = getattr (y, '_msmt_mathlib_library_', None)
    if library is not None and library.accepts (name, x):
        return getattr (library, name) (x, y)

    raise ValueError ('cannot determine how to apply math function "%s" to objects '
                      '%r (type %s) and %r (type %s)' % (name, x, x.__class__.__name__,
                                                         y, y.__class__.__name__))


def _create_wrappers (namespace):
    """This function populates the global namespace with functions dispatching the
    unary and binary math functions.

    """
    for name in unary_funcs:
        namespace[name] = partial (_dispatch_unary_function, name)

    for name in binary_funcs:
        namespace[name] = partial (_dispatch_binary_function, name)

_create_wrappers (globals ())
__all__ += unary_funcs
__all__ += binary_funcs




class MathlibDelegatingObject (object):
    """Inherit from this class to delegate the arithmetic operators to the
    mathlib dispatch mechanism. You must set the
    :attr:`_msmt_mathlib_library_` attribute to an instance of
    :class:`MathFunctionLibrary`.

    No in-place operators are defined, so ``a += b`` rebinds *a* to a new
    object and leaves the old one untouched. Setting ``__array_ufunc__`` to
    None makes Numpy scalars and arrays defer to our reflected operators
    instead of trying to wrap us in object arrays.

    """
    __slots__ = ()

    _msmt_mathlib_library_ = None
    __array_ufunc__ = None

    def __dispatch_binary (self, name, other):
        if not self._msmt_mathlib_library_.accepts (name, other):
            return NotImplemented
        return _dispatch_binary_function (name, self, other)

    __add__ = partialmethod (__dispatch_binary, 'add')
    __sub__ = partialmethod (__dispatch_binary, 'subtract')
    __mul__ = partialmethod (__dispatch_binary, 'multiply')
    __truediv__ = partialmethod (__dispatch_binary, 'true_divide')

    def __pow__ (self, other, modulo=None):
        if modulo is not None:
            raise NotImplementedError ()
        return self.__dispatch_binary ('power', other)

    def __dispatch_binary_reflected (self, name, other):
        if not self._msmt_mathlib_library_.accepts (name, other):
            return NotImplemented
        return _dispatch_binary_function (name, other, self)

    __radd__ = partialmethod (__dispatch_binary_reflected, 'add')
    __rsub__ = partialmethod (__dispatch_binary_reflected, 'subtract')
    __rmul__ = partialmethod (__dispatch_binary_reflected, 'multiply')
    __rtruediv__ = partialmethod (__dispatch_binary_reflected, 'true_divide')

    def __rpow__ (self, other, modulo=None):
        if modulo is not None:
            raise NotImplementedError ()
        return self.__dispatch_binary_reflected ('power', other)

    def __neg__ (self):
        return self._msmt_mathlib_library_.negative (self)

    def __pos__ (self):
        return self._msmt_mathlib_library_.positive (self)

    def __abs__ (self):
        return self._msmt_mathlib_library_.absolute (self)
