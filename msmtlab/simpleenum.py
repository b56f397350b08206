# -*- mode: python; coding: utf-8 -*-
# Copyright 2014 Peter Williams <peter@newton.cx> and collaborators.
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""msmtlab.simpleenum - Dead-simple enumerations.

"""

__all__ = ['enumeration']


def enumeration (cls):
    """A very simple decorator for creating enumerations. It just gives a way
    to use a class declaration to create an immutable object containing only
    the values specified in the class. The resulting object is an instance,
    not a class::

      @enumeration
      class Color (object):
          red = 0
          green = 1
          names = ['red', 'green']

      Color.red  # => 0
      Color.red = 3  # => AttributeError

    """
    name = cls.__name__

    def __str__ (self):
        return '<enumeration holder %s>' % name

    def getattr_error (self, attr):
        raise AttributeError ('enumeration %s does not contain attribute %s' % (name, attr))

    def modattr_error (self, *args, **kwargs):
        raise AttributeError ('modification of %s enumeration not allowed' % name)

    clsdict = {
        '__doc__': cls.__doc__,
        '__slots__': (),
        '__str__': __str__,
        '__repr__': __str__,
        '__getattr__': getattr_error,
        '__setattr__': modattr_error,
        '__delattr__': modattr_error,
    }

    for key in dir (cls):
        if not key.startswith ('_'):
            clsdict[key] = getattr (cls, key)

    enumcls = type (name, (object, ), clsdict)
    return enumcls ()
