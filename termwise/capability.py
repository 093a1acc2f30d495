# -*- coding: utf-8 -*-
"""Which types take part in termwise math.

A value is *math-enabled* if its type is either a registered concrete
container (an allow-list), or any lazy view. Everything else is a scalar,
as far as ``termwise`` is concerned; in particular strings, bytes, mappings
and sets are opaque leaf values.

The allow-list and the view family are both ABCs, so the check is just
``isinstance``/``issubclass``, and the ``abc`` machinery caches the answer
per type (invalidating its cache whenever something new is registered).

Registered by default:

  - ``list``: dynamic array
  - ``tuple``: fixed-size array
  - ``array.array``: typed dynamic array

Lazy views need no registration. Our own ``termwise.views.View`` subclasses
``LazyView``; additionally, any ``collections.abc.Iterator`` (generators,
``map`` objects, ``itertools`` stages...) and ``range`` count as views.

To admit a new concrete container family::

    @register_container
    class Polyline(list):
        ...

or ``register_container(SomeContainer)`` for a class you don't own.
"""

__all__ = ["MathContainer", "LazyView",
           "register_container",
           "ismathenabled", "ismathenabledtype"]

from abc import ABCMeta
from array import array
from collections.abc import Iterable, Iterator, Mapping
from warnings import warn

class MathContainer(metaclass=ABCMeta):
    """ABC: concrete container admitted to termwise math.

    No concrete container family participates automatically; use
    ``register_container`` to add one to the allow-list.
    """

class LazyView(metaclass=ABCMeta):
    """ABC: lazy sequence admitted to termwise math.

    Open-ended: subclasses and virtual subclasses of this ABC participate
    without being individually registered.
    """

for cls in (list, tuple, array):
    MathContainer.register(cls)
for cls in (Iterator, range):
    LazyView.register(cls)
del cls  # namespace cleanup

def register_container(cls):
    """Add the concrete container type ``cls`` to the allow-list.

    Can be used as a class decorator; returns ``cls``.

    ``cls`` must be iterable. Text and binary string types are refused, since
    their elements are strings again, so recursion into them never bottoms out.
    """
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {type(cls)} with value {repr(cls)}")
    if not issubclass(cls, Iterable):
        raise TypeError(f"{cls.__name__} is not iterable, cannot be a container")
    if issubclass(cls, (str, bytes, bytearray)):
        raise TypeError(f"{cls.__name__} is a string type, its elements are strings too; refusing to register")
    if issubclass(cls, Mapping):
        warn(f"registering mapping type {cls.__name__}; termwise operations will iterate over its keys", UserWarning)
    MathContainer.register(cls)
    return cls

def ismathenabledtype(cls):
    """Return whether values of type ``cls`` take part in termwise math."""
    return issubclass(cls, (MathContainer, LazyView))

def ismathenabled(x):
    """Return whether ``x`` takes part in termwise math.

    True for instances of registered concrete containers and for lazy views.
    """
    return isinstance(x, (MathContainer, LazyView))
