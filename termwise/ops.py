# -*- coding: utf-8 -*-
"""Termwise arithmetic for math-enabled containers and views.

These are the function versions of the infix operators of
``termwise.views.View``, à la the ``operator`` module. The **s** prefix is
short for mathematical **sequence**, because in Python the **i** prefix
(which could stand for *iterable*) is already used to denote the in-place
operators.

Each binary operation accepts three shapes of input:

  - container ⊕ scalar: a view of ``elt ⊕ scalar`` for each element.
  - scalar ⊕ container: a view of ``scalar ⊕ elt``. Order is kept, so
    ``ssub(2, vec)`` is ``2 - vec[k]``, not ``vec[k] - 2``.
  - container ⊕ container: the two are paired by position, giving a view of
    ``a[k] ⊕ b[k]``. Their sizes must be equal; this is checked right away,
    when the operation is called, and ``ShapeMismatch`` is raised if not.
    Only the size matters, not the concrete kind (a ``list`` and a ``tuple``
    of the same length combine fine).

When neither input is math-enabled (see ``termwise.capability``), the plain
scalar operation is performed. The operations recurse, so nested containers
broadcast at every level::

    m = [[1, 2], [3, 4], [5, 6]]
    assert materialize(smul(m, 2)) == [[2, 4], [6, 8], [10, 12]]

The result is always lazy. Nothing is computed until an element is pulled, so
a scalar error such as ``ZeroDivisionError`` surfaces only then.

Comparing sizes needs both to be known in advance. A forward-only view of
unknown length (e.g. a generator, or the output of ``filter``) can be combined
with a scalar, but not with another container; that raises ``TypeError``.
Two unbounded random-access views (e.g. two ``iota``) are both infinite, so
they combine fine.
"""

__all__ = ["ShapeMismatch",
           "sadd", "ssub", "sneg", "smul", "struediv", "sfloordiv", "smod", "spow"]

from operator import (add as primitive_add, sub as primitive_sub,
                      neg as primitive_neg, mul as primitive_mul,
                      truediv as primitive_truediv, floordiv as primitive_floordiv,
                      mod as primitive_mod, pow as primitive_pow)

from .capability import ismathenabled
from .views import RandomAccessView, size, transform

class ShapeMismatch(ValueError):
    """Raised when two containers of different sizes are combined termwise.

    The sizes that were compared are available in the ``sizes`` attribute.
    An unbounded view counts as ``float("inf")``.
    """
    def __init__(self, sizes):
        super().__init__("Sizes of operands must be equal for element-wise operation")
        self.sizes = sizes

_infty = float("inf")
def _extent(x):  # int, inf for an unbounded random-access view, None if unknown
    if isinstance(x, RandomAccessView) and x.size is None:
        return _infty
    return size(x)

def _check_size_equal(a, b):
    sizes = (_extent(a), _extent(b))
    if any(n is None for n in sizes):
        raise TypeError(f"termwise operation between two containers requires both sizes known in advance; got {type(a)} of size {sizes[0]}, {type(b)} of size {sizes[1]}")
    if sizes[0] != sizes[1]:
        raise ShapeMismatch(sizes)

# These are recursive to support containers containing containers (e.g. a matrix as a list of rows).
def _make_termwise_unop(op):
    def termwise_op(a):
        if ismathenabled(a):
            return transform(termwise_op, a)
        return op(a)
    return termwise_op
def _make_termwise_binop(op):
    def termwise_op(a, b):
        enabled = [ismathenabled(x) for x in (a, b)]
        if all(enabled):
            _check_size_equal(a, b)
            return transform(termwise_op, a, b)
        elif enabled[0]:
            c = b
            return transform(lambda x: termwise_op(x, c), a)
        elif enabled[1]:
            c = a
            return transform(lambda y: termwise_op(c, y), b)  # careful; op might not be commutative
        else:  # not any(enabled):
            return op(a, b)
    return termwise_op

sadd = _make_termwise_binop(primitive_add)
sadd.__doc__ = """Termwise a + b when one or both are containers."""
ssub = _make_termwise_binop(primitive_sub)
ssub.__doc__ = """Termwise a - b when one or both are containers."""
sneg = _make_termwise_unop(primitive_neg)
sneg.__doc__ = """Termwise -a for a container."""
smul = _make_termwise_binop(primitive_mul)
smul.__doc__ = """Termwise a * b when one or both are containers."""
struediv = _make_termwise_binop(primitive_truediv)
struediv.__doc__ = """Termwise a / b when one or both are containers."""
sfloordiv = _make_termwise_binop(primitive_floordiv)
sfloordiv.__doc__ = """Termwise a // b when one or both are containers."""
smod = _make_termwise_binop(primitive_mod)
smod.__doc__ = """Termwise a % b when one or both are containers."""
spow = _make_termwise_binop(primitive_pow)
spow.__doc__ = """Termwise a ** b when one or both are containers.

This is the ``**`` operator, with Python's semantics for it. For a power with a
fixed exponent that follows the library math function (always a float, unless
both are integers and the exponent is non-negative), see ``termwise.mathfun.pow``.
"""
