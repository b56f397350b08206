# -*- mode: python; coding: utf-8 -*-
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""msmtlab - values with uncertainties for laboratory data.

The interesting code lives in the submodules:

- :mod:`msmtlab.msmt` -- the :class:`~msmtlab.msmt.Measure` type and helpers
- :mod:`msmtlab.mathlib` -- uncertainty propagation and math dispatch
- :mod:`msmtlab.numutil` -- significant-figure rounding
- :mod:`msmtlab.fit` -- straight-line fits
- :mod:`msmtlab.tables` -- LaTeX and Typst tables

This module only defines the exceptions shared by all of them.

"""

__all__ = '''
MsmtError
InvalidUncertainty
LengthMismatch
EmptySample
InsufficientSample
UndefinedPropagation
'''.split ()

__version__ = '0.1.0'


class MsmtError (Exception):
    """A generic base class for exceptions.

    All custom exceptions raised by :mod:`msmtlab` derive from this class.

    The constructor automatically applies old-fashioned printf-like
    (``%``-based) string formatting if more than one argument is given::

      MsmtError ('uncertainty %r is negative', -1.)
      # has text "uncertainty -1.0 is negative"

    """
    def __init__ (self, fmt, *args):
        if not len (args):
            msg = str (fmt)
        else:
            try:
                msg = fmt % args
            except Exception:
                msg = '%s %r' % (fmt, args)

        self.msmtmessage = msg
        super (MsmtError, self).__init__ (msg)

    def __str__ (self):
        return self.msmtmessage


class InvalidUncertainty (MsmtError, ValueError):
    """A negative (or NaN) uncertainty was supplied."""


class LengthMismatch (MsmtError, ValueError):
    """Two sequences that must pair up element by element differ in length."""


class EmptySample (MsmtError, ValueError):
    """An aggregation was requested over zero observations."""


class InsufficientSample (MsmtError, ValueError):
    """Too few observations for the requested statistic."""


class UndefinedPropagation (MsmtError, ValueError):
    """A function or one of its derivatives was evaluated outside its domain,
    so no meaningful value or uncertainty exists.

    """
