# -*- mode: python; coding: utf-8 -*-
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT License.

"""Tests for msmtlab.numutil."""

import numpy as np
from numpy import testing as nt
from msmtlab import numutil as nu


def test_order10 ():
    assert nu.order10 (0.0234) == -2
    assert nu.order10 (0.0347) == -2
    assert nu.order10 (0.001) == -3
    assert nu.order10 (1.) == 0
    assert nu.order10 (999.) == 2
    assert nu.order10 (1000.) == 3
    assert nu.order10 (-42.) == 1
    assert nu.order10 (1e-5) == -5

    nt.assert_raises (ValueError, nu.order10, 0.)
    nt.assert_raises (ValueError, nu.order10, np.inf)
    nt.assert_raises (ValueError, nu.order10, np.nan)


def test_round_half_up ():
    assert nu.round_half_up (2.345, 2) == 2.35
    assert nu.round_half_up (0.0347, 2) == 0.03
    assert nu.round_half_up (8.7, 0) == 9.
    assert nu.round_half_up (2.5, 0) == 3.
    assert nu.round_half_up (-1.5, 0) == -2.
    assert nu.round_half_up (-1.49, 0) == -1.
    assert nu.round_half_up (1.9256, 1) == 1.9
    assert nu.round_half_up (1.9256, 3) == 1.926
    assert nu.round_half_up (1234.5, -1) == 1230.
    assert nu.round_half_up (2., 5) == 2.
    assert nu.round_half_up (np.inf, 2) == np.inf


def test_error_decimals ():
    assert nu.error_decimals (0.0347) == 2
    assert nu.error_decimals (0.0234) == 2
    assert nu.error_decimals (0.22) == 1
    assert nu.error_decimals (0.096) == 1 # rounds up to 0.1
    assert nu.error_decimals (23.) == -1
    assert nu.error_decimals (3.) == 0
    assert nu.error_decimals (0.) is None
    assert nu.error_decimals (np.inf) is None


def test_error_decimals_extra_digit_for_one ():
    assert nu.error_decimals (0.1, extra_digit_for_one=True) == 2
    assert nu.error_decimals (0.12, extra_digit_for_one=True) == 2
    assert nu.error_decimals (0.15, extra_digit_for_one=True) == 2
    assert nu.error_decimals (1.5, extra_digit_for_one=True) == 1

    # only errors that would be quoted as a bare 1 get the second digit
    assert nu.error_decimals (0.151, extra_digit_for_one=True) == 1
    assert nu.error_decimals (0.19, extra_digit_for_one=True) == 1
    assert nu.error_decimals (0.096, extra_digit_for_one=True) == 1
    assert nu.error_decimals (0.35, extra_digit_for_one=True) == 1
    assert nu.error_decimals (0.15) == 1


def test_normalize ():
    assert nu.normalize (1.23456, 0.0347) == (1.23, 0.03, 2)
    assert nu.normalize (10.14, 0.22) == (10.1, 0.2, 1)
    assert nu.normalize (1234.5, 23.) == (1230., 20., -1)
    assert nu.normalize (-0.5678, 0.096) == (-0.6, 0.1, 1)
    assert nu.normalize (10.05, 0.1, extra_digit_for_one=True) == (10.05, 0.1, 2)
    assert nu.normalize (10.14, 0.15, extra_digit_for_one=True) == (10.14, 0.15, 2)
    assert nu.normalize (10.14, 0.151, extra_digit_for_one=True) == (10.1, 0.2, 1)
    assert nu.normalize (1.23456, 0.19, extra_digit_for_one=True) == (1.2, 0.2, 1)
    assert nu.normalize (1.23456, 0.096, extra_digit_for_one=True) == (1.2, 0.1, 1)

    # no rounding target
    assert nu.normalize (12.3456789, 0.) == (12.3456789, 0., None)


def test_format_fixed ():
    assert nu.format_fixed (1.2, 2) == '1.20'
    assert nu.format_fixed (0.03, 2) == '0.03'
    assert nu.format_fixed (1230., -1) == '1230'
    assert nu.format_fixed (-0.001, 2) == '0.00'
    assert nu.format_fixed (-1.5, 1) == '-1.5'
    assert nu.format_fixed (12.3456789, None) == '12.3456789'
    assert nu.format_fixed (np.inf, 2) == 'inf'


def test_format_fixed_large_values ():
    assert nu.format_fixed (1e30, 1) == '1' + '0' * 30 + '.0'
    assert nu.format_fixed (1.5e22, -21) == '15' + '0' * 21
    assert nu.format_fixed (-2.5e20, 0) == '-25' + '0' * 19
