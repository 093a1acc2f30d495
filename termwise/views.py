# -*- coding: utf-8 -*-
"""Lazy views: borrowing, composable sequences with infix math (termwise).

A view never owns element storage. It holds a reference to its source (a
concrete container, another view, or a generator such as ``iota``), and
computes an element only when that element is requested. The source must
stay alive, and should not be mutated, while views derived from it are in use;
length changes of a concrete source are seen live.

Each view is classified by its *traversal capability*:

  - ``RandomAccessView``: supports ``v[k]`` directly. It may be unbounded
    (``size is None``), in which case it has no ``len``.
  - ``ForwardView``: supports iteration only.

The classification is structural. Count-preserving termwise stages over
random-access sources (``transform``, ``zip``, and the infix math operators),
as well as ``take``/``drop`` and slicing, stay random-access. Stages that may
change the count in a way that cannot be predicted without traversal
(``filter``, ``takewhile``, ``dropwhile``) demote the result to forward-only.

All views support infix math with the termwise semantics of ``termwise.ops``::

    v = 3 * iota(1)                     # 3, 6, 9, ... (unbounded, random-access)
    assert v[4] == 15
    assert tuple(takewhile(lambda x: x < 30, v)) == (3, 6, 9, 12, 15, 18, 21, 24, 27)

    vec = [1, 2, 3, 4, 5]
    w = mathify(vec) * 2                # lazy; vec is not copied
    assert materialize(w) == [2, 4, 6, 8, 10]

To apply a function termwise, use ``transform`` (one level) or
``termwise.mathfun.foreach`` (recursing into nested containers).
"""

__all__ = ["View", "ForwardView", "RandomAccessView",
           "mathify", "gmathify", "iota",
           "transform", "zip", "filter", "take", "drop", "takewhile", "dropwhile",
           "size", "israndomaccess", "materialize"]

from abc import abstractmethod
from builtins import map as stdlib_map, filter as stdlib_filter
from collections.abc import Iterable, Iterator, Mapping, Sized
from functools import wraps
from itertools import count, islice, takewhile as stdlib_takewhile, dropwhile as stdlib_dropwhile
from math import ceil
from operator import index

from .capability import LazyView, ismathenabled

# HACK: break dependency loop views -> ops -> views
sadd = ssub = smul = struediv = sfloordiv = smod = spow = sneg = None
def _init_module():  # called by termwise.__init__ when otherwise done
    global sadd, ssub, smul, struediv, sfloordiv, smod, spow, sneg
    from .ops import sadd, ssub, smul, struediv, sfloordiv, smod, spow, sneg

# -----------------------------------------------------------------------------

class View(LazyView):
    """ABC: lazy view of a sequence, with infix math support (termwise).

    The arithmetic operators delegate to the function versions in
    ``termwise.ops`` (``sadd`` etc.), so e.g. ``v * 2``, ``2 - v`` and
    ``v / w`` all return new lazy views. Operand order is preserved, and
    two containers are checked for equal size when combined.

    A raw ``list`` or ``tuple`` on the other side of the operator works too,
    because Python tries our reflected operator before falling back to
    sequence concatenation/repetition. Between two raw containers, use
    ``mathify`` on one of them, or the function versions.
    """
    @abstractmethod
    def __iter__(self):
        pass  # pragma: no cover

    @property
    def size(self):
        """Number of elements, or ``None`` if it can't be known without traversal."""
        return None

    def __add__(self, other):
        return sadd(self, other)
    def __radd__(self, other):
        return sadd(other, self)
    def __sub__(self, other):
        return ssub(self, other)
    def __rsub__(self, other):
        return ssub(other, self)
    def __neg__(self):
        return sneg(self)
    def __mul__(self, other):
        return smul(self, other)
    def __rmul__(self, other):
        return smul(other, self)
    def __truediv__(self, other):
        return struediv(self, other)
    def __rtruediv__(self, other):
        return struediv(other, self)
    def __floordiv__(self, other):
        return sfloordiv(self, other)
    def __rfloordiv__(self, other):
        return sfloordiv(other, self)
    def __mod__(self, other):
        return smod(self, other)
    def __rmod__(self, other):
        return smod(other, self)
    def __pow__(self, other):
        return spow(self, other)
    def __rpow__(self, other):
        return spow(other, self)

class ForwardView(View):
    """ABC: view that supports sequential traversal only."""

class RandomAccessView(View):
    """ABC: view that supports direct positional access.

    Subscripting with an int returns that element; negative indices count
    from the end, as usual, if the view is bounded. Subscripting with a slice
    returns a new lazy view (it does not copy).

    ``size is None`` means the view is unbounded, like ``iota(1)``. An unbounded
    view can be indexed with any non-negative index, but ``len()`` of it raises
    ``TypeError``.
    """
    @property
    @abstractmethod
    def size(self):
        pass  # pragma: no cover

    @abstractmethod
    def _getone(self, k):
        """Return the element at ``k``, where ``0 <= k < size`` is already checked."""

    def __iter__(self):
        n = self.size
        ks = count() if n is None else range(n)
        getone = self._getone
        def view_iterator():
            for k in ks:
                yield getone(k)
        return view_iterator()

    def __len__(self):
        n = self.size
        if n is None:
            raise TypeError(f"unbounded {self.__class__.__name__} has no len()")
        return n

    def __getitem__(self, k):
        if isinstance(k, slice):
            return SliceView(self, k)
        elif isinstance(k, tuple):
            raise TypeError(f"multidimensional subscripting not supported; got {repr(k)}")
        k = index(k)
        n = self.size
        if n is None:
            if k < 0:
                raise IndexError(f"unbounded view cannot be indexed from the end; got {k}")
            return self._getone(k)
        if k >= n or k < -n:
            raise IndexError("view index out of range")
        return self._getone(k % n)

# -----------------------------------------------------------------------------
# Sources

class RefView(RandomAccessView):
    """Borrowing random-access view of a whole concrete container.

    The container is not copied. Its current length is used on each access,
    so appends and deletions in the underlying container show up in the view.
    """
    def __init__(self, seq):
        self.seq = seq
    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}({self.seq!r})"
    @property
    def size(self):
        return len(self.seq)
    def _getone(self, k):
        return self.seq[k]
    def __iter__(self):
        return iter(self.seq)

class IterView(ForwardView):
    """Forward view of an arbitrary iterable.

    The original iterable is saved to an attribute, and ``__iter__`` redirects
    to it. No caching is performed, so if the iterable is consumable (for
    example a generator), so is the view.
    """
    def __init__(self, iterable):
        self._g = iterable
    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}({self._g!r})"
    def __iter__(self):
        return iter(self._g)
    @property
    def size(self):
        g = self._g
        if isinstance(g, Sized) and not isinstance(g, Iterator):
            return len(g)
        return None

class iota(RandomAccessView):
    """The arithmetic sequence ``start, start + step, start + 2 step, ...`` as a view.

    If ``stop`` is given, the sequence ends before reaching it, like ``range``;
    otherwise it is unbounded. Note ``iota(5)`` means "5, 6, 7, ...", not
    ``range(5)``.

    Float input is fine. Each term is computed from the closed-form formula
    ``start + k * step``, so nothing is accumulated and roundoff does not build up.

    Examples::

        assert tuple(iota(1, 10)) == (1, 2, 3, 4, 5, 6, 7, 8, 9)
        assert tuple(iota(10, 0, -3)) == (10, 7, 4, 1)
        assert tuple(take(3, iota(1))) == (1, 2, 3)
        assert iota(1)[999] == 1000
    """
    def __init__(self, start=0, stop=None, step=1):
        if step == 0:
            raise ValueError("iota step cannot be zero")
        self.start = start
        self.stop = stop
        self.step = step
    def __repr__(self):  # pragma: no cover
        return f"iota({self.start!r}, {self.stop!r}, {self.step!r})"
    @property
    def size(self):
        start, stop, step = self.start, self.stop, self.step
        if stop is None:
            return None
        if all(isinstance(x, int) for x in (start, stop, step)):
            return len(range(start, stop, step))
        return max(0, ceil((stop - start) / step))
    def _getone(self, k):
        return self.start + k * self.step

# -----------------------------------------------------------------------------
# Stages

class SliceView(RandomAccessView):
    """Lazy slice of a random-access view.

    For a bounded source, the slice is resolved against the current size of the
    source on each access. An unbounded source can only be sliced with
    non-negative ``start`` and ``stop``, and a positive ``step``.
    """
    def __init__(self, source, s):
        if s.step == 0:
            raise ValueError("slice step cannot be zero")  # message copied from range(5)[0:4:0]
        if source.size is None:
            if any(x is not None and x < 0 for x in (s.start, s.stop, s.step)):
                raise ValueError(f"unbounded view can only be sliced with non-negative start, stop and step; got {s}")
        self.source = source
        self.slice = s

    def _range(self):  # indices of self in the source; None if unbounded
        n = self.source.size
        s = self.slice
        if n is not None:
            return range(n)[s]
        if s.stop is None:
            return None
        return range(s.start or 0, s.stop, s.step or 1)

    @property
    def size(self):
        r = self._range()
        return None if r is None else len(r)

    def _getone(self, k):
        r = self._range()
        if r is None:
            s = self.slice
            return self.source._getone((s.start or 0) + k * (s.step or 1))
        return self.source._getone(r[k])

    def __iter__(self):
        r = self._range()
        if r is None:
            return super().__iter__()
        getone = self.source._getone
        return (getone(j) for j in r)

class TransformView(RandomAccessView):
    """Random-access view of ``func`` applied termwise over random-access sources.

    With several sources, elements are paired by position, and the view ends
    when the shortest source does (like ``zip``). An element is recomputed
    each time it is accessed; nothing is cached.
    """
    def __init__(self, func, *sources):
        self.func = func
        self.sources = sources
    @property
    def size(self):
        sizes = [s.size for s in self.sources if s.size is not None]
        return min(sizes) if sizes else None
    def _getone(self, k):
        return self.func(*(s._getone(k) for s in self.sources))
    def __iter__(self):
        return stdlib_map(self.func, *self.sources)

class ForwardTransformView(ForwardView):
    """Forward-only cousin of ``TransformView``, for when any source is forward-only."""
    def __init__(self, func, *sources):
        self.func = func
        self.sources = sources
    @property
    def size(self):
        sizes = []
        for s in self.sources:
            n = s.size
            if n is None:
                if isinstance(s, RandomAccessView):  # unbounded, doesn't limit the pairing
                    continue
                return None
            sizes.append(n)
        return min(sizes) if sizes else None
    def __iter__(self):
        return stdlib_map(self.func, *self.sources)

class IsliceView(ForwardView):
    """Forward view of ``source[start:stop]``, for sources without random access."""
    def __init__(self, source, start, stop):
        self.source = source
        self.start = start
        self.stop = stop
    @property
    def size(self):
        n = self.source.size
        if n is None:
            return None
        return len(range(n)[self.start:self.stop])
    def __iter__(self):
        return islice(self.source, self.start, self.stop)

class FilterView(ForwardView):
    """Forward view of the elements of ``source`` for which ``pred`` is truthy."""
    def __init__(self, pred, source):
        self.pred = pred
        self.source = source
    def __iter__(self):
        return stdlib_filter(self.pred, self.source)

class TakeWhileView(ForwardView):
    """Forward view of the leading elements of ``source`` for which ``pred`` holds.

    Stops at the first element that fails ``pred``; nothing past it is evaluated.
    """
    def __init__(self, pred, source):
        self.pred = pred
        self.source = source
    def __iter__(self):
        return stdlib_takewhile(self.pred, self.source)

class DropWhileView(ForwardView):
    """Forward view of ``source``, minus the leading elements for which ``pred`` holds."""
    def __init__(self, pred, source):
        self.pred = pred
        self.source = source
    def __iter__(self):
        return stdlib_dropwhile(self.pred, self.source)

# -----------------------------------------------------------------------------

def mathify(iterable):
    """Endow any iterable with infix math support (termwise), as a view.

    A view is returned as-is. A sized, indexable container (``list``, ``tuple``,
    ``array.array``, ``range``, ...) gets a borrowing random-access view. Anything
    else (a generator, a set, ...) gets a forward view.

    This is also how you opt in a type that is not math-enabled by itself; the
    explicit ``mathify`` call is the permission. Note however that the elements
    of the view are still classified as usual, so e.g. ``mathify("abc")`` is a
    view of one-character strings, each of them a scalar.

    Examples::

        vec = [1, 2, 3]
        assert tuple(mathify(vec) + 10) == (11, 12, 13)
        assert tuple(vec - mathify(vec)) == (0, 0, 0)
    """
    if isinstance(iterable, View):
        return iterable
    if not isinstance(iterable, Iterable) and not hasattr(iterable, "__getitem__"):
        raise TypeError(f"expected an iterable, got {type(iterable)} with value {repr(iterable)}")
    if isinstance(iterable, (Mapping, Iterator)):
        return IterView(iterable)
    if hasattr(iterable, "__getitem__") and hasattr(iterable, "__len__"):
        return RefView(iterable)
    return IterView(iterable)

def gmathify(gfunc):
    """Decorator: make gfunc mathify() the returned generator instances.

    Return a new gfunc, which passes all its arguments to the original ``gfunc``.

    Example::

        @gmathify
        def naturals():
            n = 1
            while True:
                yield n
                n += 1
        assert tuple(take(3, 2 * naturals())) == (2, 4, 6)
    """
    @wraps(gfunc)
    def mathified(*args, **kwargs):
        return mathify(gfunc(*args, **kwargs))
    return mathified

def _validate_count(n):
    if not isinstance(n, int):
        raise TypeError(f"expected integer n, got {type(n)} with value {repr(n)}")
    if n < 0:
        raise ValueError(f"expected n >= 0, got {n}")

def transform(func, iterable0, *iterables):
    """Lazily apply ``func`` termwise, pairing the inputs by position.

    Like the builtin ``map``, but returns a view. If all inputs have random
    access, so does the result; otherwise the result is forward-only.
    The result ends when the shortest input does. No size check is made here;
    for that, see the operators in ``termwise.ops``.

    This does not recurse into nested containers; ``func`` gets the elements
    as they are. For recursion, see ``termwise.mathfun.foreach``.
    """
    sources = [mathify(x) for x in (iterable0,) + iterables]
    if all(isinstance(s, RandomAccessView) for s in sources):
        return TransformView(func, *sources)
    return ForwardTransformView(func, *sources)

def _pack(*xs):
    return xs

def zip(iterable0, *iterables):
    """Like the builtin ``zip``, but return a view (random-access if all inputs are)."""
    return transform(_pack, iterable0, *iterables)

def filter(pred, iterable):
    """Like the builtin ``filter``, but return a view. Always forward-only."""
    return FilterView(pred, mathify(iterable))

def takewhile(pred, iterable):
    """Like ``itertools.takewhile``, but return a view. Always forward-only."""
    return TakeWhileView(pred, mathify(iterable))

def dropwhile(pred, iterable):
    """Like ``itertools.dropwhile``, but return a view. Always forward-only."""
    return DropWhileView(pred, mathify(iterable))

def take(n, iterable):
    """Return a view of the first ``n`` items of ``iterable``.

    Stops earlier if ``iterable`` has fewer than ``n`` items. Random access is
    preserved.
    """
    _validate_count(n)
    source = mathify(iterable)
    if isinstance(source, RandomAccessView):
        return SliceView(source, slice(None, n))
    return IsliceView(source, 0, n)

def drop(n, iterable):
    """Return a view of ``iterable`` with the first ``n`` items skipped.

    Random access is preserved.
    """
    _validate_count(n)
    source = mathify(iterable)
    if isinstance(source, RandomAccessView):
        return SliceView(source, slice(n, None))
    return IsliceView(source, n, None)

# -----------------------------------------------------------------------------

def size(x):
    """Return the number of elements in ``x``, or ``None``.

    ``None`` means the count is not known without traversal (forward views,
    iterators), or that ``x`` is an unbounded random-access view.
    """
    if isinstance(x, View):
        return x.size
    if isinstance(x, Sized) and not isinstance(x, Iterator):
        return len(x)
    return None

def israndomaccess(x):
    """Return whether the math-enabled ``x`` supports direct positional access."""
    if isinstance(x, View):
        return isinstance(x, RandomAccessView)
    return (ismathenabled(x) and not isinstance(x, Iterator) and
            hasattr(x, "__getitem__") and hasattr(x, "__len__"))

def materialize(x, ctor=list):
    """Collect ``x`` into concrete containers, recursively.

    Every math-enabled level (including concrete containers, which are copied)
    becomes a ``ctor`` instance; anything else is passed through as-is. This is
    the explicit point where a lazy computation actually runs, so ``x`` must be
    finite.

    Example::

        m = [[1, 2], [3, 4]]
        assert materialize(mathify(m) * 10) == [[10, 20], [30, 40]]
        assert materialize(mathify(m) * 10, tuple) == ((10, 20), (30, 40))
    """
    if not ismathenabled(x):
        return x
    return ctor(materialize(elt, ctor) for elt in x)
