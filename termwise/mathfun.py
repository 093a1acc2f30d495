# -*- coding: utf-8 -*-
"""Elementary math functions, lifted to act termwise on containers.

The lifting primitive is ``foreach``, which applies a scalar function to every
leaf of a (possibly nested) math-enabled container, lazily. The functions
``pow``, ``exp``, ``log``, ``log10``, ``sqrt``, ``sin``, ``cos`` and ``tan``
are just ``foreach`` with the corresponding scalar function.

For a scalar input, they return a scalar::

    assert pow(2, 3) == 8
    assert exp(1) == math.exp(1)

For a container or view, they return a view::

    vec = [1, 2, 3, 4, 5]
    assert abs(pow(vec, 3.5)[1] - 11.3137) < 1e-4
    assert materialize(sqrt([[1, 4], [9, 16]])) == [[1.0, 2.0], [3.0, 4.0]]

Numeric (int, float, mpmath) and symbolic (SymPy) formats are supported. An
``mpmath.mpf`` leaf goes to the ``mpmath`` function, and a SymPy expression
goes to the ``sympy`` one; both libraries are optional.

For ``int`` and ``float``, the semantics are those of the ``math`` module: the
result is a float (except ``pow`` of an int with a non-negative int exponent,
which stays exact), NaN and infinities propagate, and nothing is trapped here.
In particular, a domain error (e.g. ``sqrt(-1)``, ``log(0)``) raises
``ValueError`` from ``math`` when that element is pulled, and a result too
large for a float (e.g. ``exp(1000.0)``) raises ``OverflowError``, instead of
producing a NaN or an infinity. An infinite input still gives an infinite
output, e.g. ``exp(float("inf"))``.

**CAUTION**: Some of these names shadow builtins (``pow``) or are the same
as those in ``math``. Import the module, or the names you need, accordingly.
"""

__all__ = ["foreach",
           "pow", "exp", "log", "log10", "sqrt", "sin", "cos", "tan"]

import math

from .capability import ismathenabled
from .views import transform

class _NoSuchType:
    pass

# stuff to support float, mpf and SymPy expressions transparently
#
try:
    import mpmath
    from mpmath import mpf
except ImportError:  # pragma: no cover, optional at runtime, but installed at development time.
    # Can't use a gensym here since `mpf` must be a unique *type*.
    mpmath = None
    mpf = _NoSuchType

try:
    import sympy
    from sympy import Expr as _symExpr
except ImportError:  # pragma: no cover, optional at runtime, but installed at development time.
    sympy = None
    _symExpr = _NoSuchType

def foreach(func, x):
    """Apply ``func`` to every leaf of ``x``, lazily, at any depth.

    If ``x`` is not math-enabled, it is a leaf, and the result is ``func(x)``.

    Otherwise, the result is a view of ``foreach(func, elt)`` for each ``elt``
    in ``x``. Hence nested containers are descended into, until a leaf is
    reached. Random access is preserved.

    ``func`` is called only for the leaves the caller actually pulls out of the
    result; each pull calls it again (no caching).

    Example::

        m = [[1, 2], [3, 4], [5, 6]]
        assert materialize(foreach(lambda x: x * x, m)) == [[1, 4], [9, 16], [25, 36]]
    """
    if not ismathenabled(x):
        return func(x)
    return transform(lambda elt: foreach(func, elt), x)

def _make_scalar_func(numeric, arbitrary=None, symbolic=None):
    """Make a one-argument scalar function that accepts float, mpmath.mpf and SymPy inputs."""
    def scalar_func(x):
        if symbolic is not None and isinstance(x, _symExpr):
            return symbolic(x)
        if arbitrary is not None and isinstance(x, mpf):
            return arbitrary(x)
        return numeric(x)
    scalar_func.__name__ = numeric.__name__
    return scalar_func

def _sympy_log10(x):
    return sympy.log(x, 10)

_exp = _make_scalar_func(math.exp, mpmath and mpmath.exp, sympy and sympy.exp)
_log = _make_scalar_func(math.log, mpmath and mpmath.log, sympy and sympy.log)
_log10 = _make_scalar_func(math.log10, mpmath and mpmath.log10, sympy and _sympy_log10)
_sqrt = _make_scalar_func(math.sqrt, mpmath and mpmath.sqrt, sympy and sympy.sqrt)
_sin = _make_scalar_func(math.sin, mpmath and mpmath.sin, sympy and sympy.sin)
_cos = _make_scalar_func(math.cos, mpmath and mpmath.cos, sympy and sympy.cos)
_tan = _make_scalar_func(math.tan, mpmath and mpmath.tan, sympy and sympy.tan)

def _pow(x, p):
    if isinstance(x, _symExpr) or isinstance(p, _symExpr):
        return x**p
    if isinstance(x, mpf) or isinstance(p, mpf):
        return mpmath.power(x, p)
    if isinstance(x, int) and isinstance(p, int) and p >= 0:
        return x**p  # exact
    return math.pow(x, p)

def pow(x, p):
    """Raise each leaf of ``x`` to the power ``p``.

    The exponent ``p`` is a scalar, and the same for every leaf at every depth.
    For a termwise exponent, use the ``**`` operator (``termwise.ops.spow``).

    An ``int`` raised to a non-negative ``int`` stays an ``int``. Other real
    inputs go through ``math.pow``, so e.g. a fractional power gives a float.
    """
    return foreach(lambda elt: _pow(elt, p), x)

def exp(x):
    """Termwise exponential function."""
    return foreach(_exp, x)

def log(x):
    """Termwise natural logarithm."""
    return foreach(_log, x)

def log10(x):
    """Termwise base-10 logarithm."""
    return foreach(_log10, x)

def sqrt(x):
    """Termwise square root."""
    return foreach(_sqrt, x)

def sin(x):
    """Termwise sine."""
    return foreach(_sin, x)

def cos(x):
    """Termwise cosine."""
    return foreach(_cos, x)

def tan(x):
    """Termwise tangent."""
    return foreach(_tan, x)
