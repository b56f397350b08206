# -*- mode: python; coding: utf-8 -*-
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""Least-squares fits whose parameters come back as Measures.

:func:`linear_fit` handles straight lines in closed form;
:func:`curve_fit` fits an arbitrary model numerically.

"""

__all__ = '''
linear_fit
r_value
curve_fit
curve_r_value
'''.split ()

import inspect, logging
import numpy as np
from scipy import optimize

from . import InsufficientSample, LengthMismatch, UndefinedPropagation
from .msmt import Measure

logger = logging.getLogger (__name__)


def _as_1d (name, a):
    a = np.asarray (a, dtype=np.double)
    if a.ndim != 1:
        raise ValueError ('%s must be a one-dimensional sequence; got shape %r' % (name, a.shape))
    return a


def linear_fit (x, y, yerr=None):
    """Fit ``y = slope * x + intercept`` by least squares.

    Returns ``(slope, intercept)`` as :class:`~msmtlab.msmt.Measure` objects.

    Without *yerr*, this is an ordinary least-squares fit and the parameter
    uncertainties are derived from the scatter of the residuals, which
    requires at least three points. With *yerr*, each point is weighted by
    ``1 / yerr**2`` and the uncertainties follow from the weights alone.

    """
    x = _as_1d ('x', x)
    y = _as_1d ('y', y)

    if x.shape != y.shape:
        raise LengthMismatch ('got %d x values but %d y values', x.size, y.size)

    if yerr is None:
        if x.size < 3:
            raise InsufficientSample ('an unweighted linear fit needs at least 3 points; got %d', x.size)
        w = np.ones (x.shape)
    else:
        yerr = _as_1d ('yerr', yerr)
        if yerr.shape != x.shape:
            raise LengthMismatch ('got %d points but %d y uncertainties', x.size, yerr.size)
        if x.size < 2:
            raise InsufficientSample ('a linear fit needs at least 2 points; got %d', x.size)
        if not np.all (yerr > 0):
            raise UndefinedPropagation ('fit weights need strictly positive y uncertainties')
        w = yerr**-2

    sw = w.sum ()
    sx = (w * x).sum ()
    sy = (w * y).sum ()
    sxx = (w * x**2).sum ()
    sxy = (w * x * y).sum ()
    det = sw * sxx - sx**2

    if not det > 0:
        raise UndefinedPropagation ('cannot fit a line: the x values are all identical')

    slope = (sw * sxy - sx * sy) / det
    intercept = (sy * sxx - sx * sxy) / det

    if yerr is None:
        # Unit weights: scale by the residual variance with n - 2 dof.
        resid = y - (slope * x + intercept)
        scale = np.sqrt ((resid**2).sum () / (x.size - 2))
    else:
        scale = 1.

    slope_err = scale * np.sqrt (sw / det)
    intercept_err = scale * np.sqrt (sxx / det)

    logger.debug ('linear fit over %d points: slope=%r±%r intercept=%r±%r',
                  x.size, slope, slope_err, intercept, intercept_err)
    return Measure (slope, slope_err), Measure (intercept, intercept_err)


def r_value (x, y):
    """Return the Pearson correlation coefficient of *x* and *y*."""
    x = _as_1d ('x', x)
    y = _as_1d ('y', y)

    if x.shape != y.shape:
        raise LengthMismatch ('got %d x values but %d y values', x.size, y.size)
    if x.size < 2:
        raise InsufficientSample ('a correlation needs at least 2 points; got %d', x.size)

    dx = x - x.mean ()
    dy = y - y.mean ()
    denom = np.sqrt ((dx**2).sum () * (dy**2).sum ())

    if denom == 0:
        raise UndefinedPropagation ('correlation is undefined for constant data')
    return float ((dx * dy).sum () / denom)


def _model_values (model, x, params):
    return np.asarray (model (x, *params), dtype=np.double)


def curve_fit (model, x, y, yerr=None, p0=None, absolute_sigma=False,
               tolerance=None, max_iterations=None):
    """Fit ``y = model (x, *params)`` by nonlinear least squares.

    *model* is called with the array of abscissae and one float per
    parameter, and must return an array like *x*. *p0* is the starting
    point; if omitted, the parameter count is read from the signature of
    *model* and every parameter starts at 1.

    With *yerr*, residuals are weighted by ``1 / yerr``. The parameter
    uncertainties come from the covariance matrix of the fit, scaled by the
    reduced chi-squared unless *absolute_sigma* is true, in which case
    *yerr* is taken at face value.

    *tolerance* bounds the relative change in the parameters and in the sum
    of squares at convergence; *max_iterations* bounds the number of model
    evaluations.

    Returns a list of :class:`~msmtlab.msmt.Measure` objects, one per
    parameter.

    """
    x = _as_1d ('x', x)
    y = _as_1d ('y', y)

    if x.shape != y.shape:
        raise LengthMismatch ('got %d x values but %d y values', x.size, y.size)

    if p0 is None:
        nparams = len (inspect.signature (model).parameters) - 1
        if nparams < 1:
            raise ValueError ('cannot tell how many parameters %r takes; pass p0' % (model,))
        p0 = np.ones (nparams)
    else:
        p0 = _as_1d ('p0', p0)

    if x.size <= p0.size:
        raise InsufficientSample ('fitting %d parameters needs more than %d points',
                                  p0.size, x.size)

    if yerr is not None:
        yerr = _as_1d ('yerr', yerr)
        if yerr.shape != x.shape:
            raise LengthMismatch ('got %d points but %d y uncertainties', x.size, yerr.size)
        if not np.all (yerr > 0):
            raise UndefinedPropagation ('fit weights need strictly positive y uncertainties')

    kwargs = {}
    if tolerance is not None:
        kwargs['ftol'] = kwargs['xtol'] = tolerance
    if max_iterations is not None:
        kwargs['maxfev'] = max_iterations

    try:
        popt, pcov = optimize.curve_fit (model, x, y, p0=p0, sigma=yerr,
                                         absolute_sigma=absolute_sigma, **kwargs)
    except RuntimeError as e:
        raise UndefinedPropagation ('curve fit failed: %s', e) from e

    with np.errstate (invalid='ignore'):
        perr = np.sqrt (np.diag (pcov))

    if not np.all (np.isfinite (perr)):
        raise UndefinedPropagation ('cannot estimate the parameter uncertainties; '
                                    'the fit is degenerate at %r', popt)

    logger.debug ('curve fit over %d points: params=%r errors=%r', x.size, popt, perr)
    return [Measure (v, e) for v, e in zip (popt, perr)]


def curve_r_value (model, x, y, params):
    """Return the correlation coefficient ``sqrt (1 - SS_res / SS_tot)`` of
    *model* evaluated at *params* against the data. *params* may be the
    Measures returned by :func:`curve_fit` or plain numbers.

    """
    x = _as_1d ('x', x)
    y = _as_1d ('y', y)

    if x.shape != y.shape:
        raise LengthMismatch ('got %d x values but %d y values', x.size, y.size)

    params = [getattr (p, 'value', p) for p in params]
    ss_res = ((y - _model_values (model, x, params))**2).sum ()
    ss_tot = ((y - y.mean ())**2).sum ()

    if ss_tot == 0:
        raise UndefinedPropagation ('correlation is undefined for constant data')

    r2 = 1. - ss_res / ss_tot
    if r2 < 0:
        raise UndefinedPropagation ('the model fits worse than a constant (R^2 = %r)', r2)
    return float (np.sqrt (r2))
