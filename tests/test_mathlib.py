# -*- mode: python; coding: utf-8 -*-
# Copyright 2016 Peter Williams <peter@newton.cx> and collaborators.
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT License.

"""Tests for msmtlab.mathlib."""

import numpy as np
from numpy import testing as nt
from msmtlab import UndefinedPropagation
from msmtlab import mathlib as ml
from msmtlab.msmt import Measure


def test_simple ():
    assert ml.add (1, 1) == 2
    assert ml.exp (2) == np.exp (2)


def test_numpy_ints_are_floated ():
    # np.reciprocal truncates integers; we shouldn't.
    assert ml.reciprocal (2) == 0.5
    nt.assert_array_equal (ml.reciprocal ([1, 2, 4]), [1., 0.5, 0.25])
    nt.assert_array_equal (ml.true_divide (np.arange (3), 2), [0., 0.5, 1.])


def test_library_lookup ():
    assert ml.get_library_for (1.) is ml.numpy_library
    assert ml.get_library_for (np.float32 (1.)) is ml.numpy_library
    assert ml.get_library_for (Measure (1., 0.1)) is Measure._msmt_mathlib_library_
    nt.assert_raises (ValueError, ml.get_library_for, 'abc')
    nt.assert_raises (ValueError, ml.sqrt, 'abc')
    nt.assert_raises (ValueError, ml.add, 'abc', object ())


def test_base_library_is_unimplemented ():
    lib = ml.MathFunctionLibrary ()
    assert not lib.accepts ('add', 1.)
    nt.assert_raises (NotImplementedError, lib.sqrt, 1.)
    nt.assert_raises (NotImplementedError, lib.add, 1., 2.)


def test_propagate_unary ():
    v, u = ml.propagate_unary ('square', lambda x: x**2, lambda x: 2 * x, 3., 0.1)
    assert v == 9.
    nt.assert_allclose (u, 0.6)

    # negative slopes still give nonnegative uncertainties
    v, u = ml.propagate_unary ('negative', lambda x: -x, lambda x: -1., 3., 0.1)
    assert v == -3.
    assert u == 0.1

    assert isinstance (v, float)
    assert isinstance (u, float)


def test_propagate_binary_adds_in_quadrature ():
    v, u = ml.propagate_binary ('add', np.add, lambda x, y: 1., lambda x, y: 1.,
                                1., 0.1, 2., 0.2)
    nt.assert_allclose (v, 3.)
    nt.assert_allclose (u, np.sqrt (0.1**2 + 0.2**2))


def test_exact_operand_contributes_nothing ():
    v, u = ml.propagate_binary ('multiply', np.multiply, lambda x, y: y, lambda x, y: x,
                                2., 0.1, -3., 0.)
    assert v == -6.
    assert u == abs (-3.) * 0.1


def test_exact_operand_derivative_not_evaluated ():
    def boom (*args):
        raise AssertionError ('derivative of an exact operand was evaluated')

    v, u = ml.propagate_binary ('power', np.power, lambda x, y: y * x**(y - 1.), boom,
                                -2., 0.1, 2., 0.)
    assert v == 4.
    nt.assert_allclose (u, 0.4)

    v, u = ml.propagate_binary ('power', np.power, boom, lambda x, y: x**y * np.log (x),
                                0.5, 0., 2., 0.1)
    assert v == 0.25
    nt.assert_allclose (u, 0.25 * np.log (0.5) * -0.1)

    v, u = ml.propagate_unary ('sqrt', np.sqrt, lambda x: 0.5 / np.sqrt (x), 0., 0.)
    assert (v, u) == (0., 0.)


def test_undefined_propagation ():
    # function undefined
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'log', np.log, lambda x: 1. / x, 0., 0.1)
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'log', np.log, lambda x: 1. / x, -1., 0.1)

    # function fine, derivative singular
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'sqrt', np.sqrt, lambda x: 0.5 / np.sqrt (x), 0., 0.1)

    # division by an exact zero
    nt.assert_raises (UndefinedPropagation, ml.propagate_binary,
                      'true_divide', np.true_divide, lambda x, y: 1. / y,
                      lambda x, y: -x / y**2, 1., 0.1, 0., 0.)

    # NaN without a floating-point exception
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'nan', lambda x: np.nan, lambda x: 1., 1., 0.1)

    # overflow
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'exp', np.exp, np.exp, 1000., 0.1)


def test_undefined_message_names_operation ():
    try:
        ml.propagate_unary ('log', np.log, lambda x: 1. / x, -2., 0.1)
    except UndefinedPropagation as e:
        assert 'log' in str (e)
        assert '-2.0' in str (e)
    else:
        assert False, 'expected UndefinedPropagation'


def test_errstate_is_restored ():
    before = np.geterr ()
    nt.assert_raises (UndefinedPropagation, ml.propagate_unary,
                      'log', np.log, lambda x: 1. / x, 0., 0.1)
    assert np.geterr () == before


def test_dispatch_to_measures ():
    m = ml.sqrt (Measure (4., 0.2))
    assert isinstance (m, Measure)
    nt.assert_allclose (m.unpack (), (2., 0.05))

    m = ml.add (1., Measure (2., 0.2))
    nt.assert_allclose (m.unpack (), (3., 0.2))

    m = ml.add (Measure (2., 0.2), 1.)
    nt.assert_allclose (m.unpack (), (3., 0.2))


def _try_different_flavors (v):
    yield v
    yield np.float64 (v)
    yield Measure (v, 0.)
    yield Measure (v, 0.5)


def _repval (x):
    return getattr (x, 'value', x)


def test_absolute ():
    for v in [0., -0., -5., 5., 2.5]:
        for f in _try_different_flavors (v):
            nt.assert_array_equal (_repval (ml.absolute (f)), abs (v))

    # |x| never changes the size of the uncertainty
    assert ml.absolute (Measure (-5., 0.5)).error == 0.5


def test_subtract ():
    # Operands must come through untouched, however they're passed in.
    x = np.linspace (3., 7., 8)
    y = np.ones (x.shape)
    t = x - y

    for xv, yv, tv in zip (x, y, t):
        for f in _try_different_flavors (xv):
            before = _repval (f)
            r = ml.subtract (f, yv)
            nt.assert_allclose (_repval (r), tv)
            assert _repval (f) == before
