# -*- coding: utf-8 -*-

import pytest

from ..views import (View, ForwardView, RandomAccessView,
                     mathify, gmathify, iota,
                     transform, zip, filter, take, drop, takewhile, dropwhile,
                     size, israndomaccess, materialize)

def test_ranges_views():
    vec = [1, 2, 3, 4, 5]
    transformed = transform(lambda x: x * 2, vec)
    assert tuple(transformed) == (2, 4, 6, 8, 10)
    assert transformed[0] == 2

    # Drop the first 2 elements from the transformed view
    dropped = drop(2, transformed)
    assert dropped[0] == 6

    tw = takewhile(lambda x: x >= 3, dropped)
    assert tuple(tw) == (6, 8, 10)

def test_iota():
    assert tuple(iota(1, 10)) == (1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert tuple(iota(0, 10, 3)) == (0, 3, 6, 9)
    assert tuple(iota(10, 0, -3)) == (10, 7, 4, 1)
    assert tuple(iota(5, 5)) == ()
    assert tuple(iota(5, 1)) == ()
    assert len(iota(1, 10)) == 9
    assert iota(1, 10)[-1] == 9

    # unbounded
    a = iota(1)
    assert a.size is None
    assert size(a) is None
    assert a[0] == 1
    assert a[999] == 1000
    assert tuple(take(5, a)) == (1, 2, 3, 4, 5)
    assert tuple(take(5, a)) == (1, 2, 3, 4, 5)  # re-iterable
    with pytest.raises(TypeError):
        len(a)
    with pytest.raises(IndexError):
        a[-1]

    # floats; closed-form terms, no accumulated roundoff
    b = iota(0.0, 1.0, 0.25)
    assert tuple(b) == (0.0, 0.25, 0.5, 0.75)
    c = iota(0.0, None, 0.1)
    assert c[1000] == 1000 * 0.1

    with pytest.raises(ValueError):
        iota(0, 10, 0)

def test_traversal_capability():
    vec = [1, 2, 3, 4, 5]
    assert israndomaccess(vec)
    assert israndomaccess((1, 2))
    assert not israndomaccess(x for x in vec)
    assert not israndomaccess(42)

    # pure termwise stages over a random-access source stay random-access
    v = 3 * take(9, iota(1))
    assert isinstance(v, RandomAccessView)
    assert israndomaccess(v)
    assert len(v) == 9
    assert v[4] == 15
    assert v[-1] == 27
    assert tuple(v) == (3, 6, 9, 12, 15, 18, 21, 24, 27)

    w = transform(lambda xy: xy[0] * xy[1], zip(vec, vec))
    assert israndomaccess(w)
    assert w[2] == 9
    assert zip(vec, vec)[2] == (3, 3)

    # filtering demotes to forward-only
    f = filter(lambda x: x % 2 == 0, v)
    assert isinstance(f, ForwardView)
    assert not israndomaccess(f)
    with pytest.raises(TypeError):
        f[0]
    assert tuple(f) == (6, 12, 18, 24)
    assert size(f) is None

    assert not israndomaccess(takewhile(lambda x: x < 10, vec))
    assert not israndomaccess(dropwhile(lambda x: x < 10, vec))

    # a forward source makes the whole stage forward-only
    g = transform(lambda x, y: x + y, vec, (x for x in vec))
    assert isinstance(g, ForwardView)
    assert tuple(g) == (2, 4, 6, 8, 10)
    assert isinstance(g, View)

def test_slicing():
    vec = list(range(10))
    v = mathify(vec)
    s = v[2:8:2]
    assert isinstance(s, RandomAccessView)
    assert tuple(s) == (2, 4, 6)
    assert len(s) == 3
    assert s[-1] == 6
    assert tuple(s[::-1]) == (6, 4, 2)  # slice of a slice
    assert tuple(v[::-3]) == (9, 6, 3, 0)

    with pytest.raises(IndexError):
        v[10]
    with pytest.raises(IndexError):
        v[-11]
    with pytest.raises(TypeError):
        v[1, 2]  # multidimensional subscripting not supported
    with pytest.raises(ValueError):
        v[::0]

    a = iota(0)
    assert tuple(a[3:6]) == (3, 4, 5)
    assert a[10::5][2] == 20
    assert size(a[10:]) is None
    with pytest.raises(ValueError):
        a[-3:]
    with pytest.raises(ValueError):
        a[::-1]

def test_views_borrow():
    vec = [1, 2, 3]
    v = mathify(vec)
    assert v.seq is vec  # not copied
    w = v * 10
    vec[0] = 100
    assert w[0] == 1000
    vec.append(4)  # length changes show up live
    assert len(w) == 4
    assert tuple(w) == (1000, 20, 30, 40)

def test_take_and_drop():
    vec = [1, 2, 3, 4, 5]
    assert tuple(take(3, vec)) == (1, 2, 3)
    assert tuple(take(10, vec)) == (1, 2, 3, 4, 5)
    assert tuple(drop(3, vec)) == (4, 5)
    assert tuple(drop(10, vec)) == ()
    assert israndomaccess(take(3, vec))
    assert drop(1, iota(1))[0] == 2

    # forward sources
    assert tuple(take(2, (x for x in vec))) == (1, 2)
    assert tuple(drop(2, (x for x in vec))) == (3, 4, 5)
    assert size(take(2, filter(None, vec))) is None
    assert size(take(2, {1, 2, 3})) == 2
    assert size(drop(2, {1, 2, 3})) == 1

    with pytest.raises(TypeError):
        take(1.5, vec)
    with pytest.raises(ValueError):
        take(-1, vec)
    with pytest.raises(TypeError):
        drop("2", vec)
    with pytest.raises(ValueError):
        drop(-1, vec)

def test_laziness():
    calls = []
    def traced(x):
        calls.append(x)
        return x

    v = takewhile(lambda x: x < 30, 3 * transform(traced, iota(1)))
    assert calls == []  # composing computes nothing
    assert tuple(v) == (3, 6, 9, 12, 15, 18, 21, 24, 27)
    # 30 fails the predicate, and nothing past it is evaluated
    assert calls == list(range(1, 11))

    calls.clear()
    w = transform(traced, [1, 2, 3, 4, 5])
    assert w[3] == 4
    assert calls == [4]  # random access evaluates only what was asked for

def test_mathify():
    vec = [1, 2, 3]
    v = mathify(vec)
    assert mathify(v) is v
    assert isinstance(v, RandomAccessView)
    assert israndomaccess(mathify(range(5)))
    assert isinstance(mathify({1, 2, 3}), ForwardView)
    assert size(mathify({1, 2, 3})) == 3

    # a generator stays consumable
    g = mathify(x for x in vec)
    assert isinstance(g, ForwardView)
    assert size(g) is None
    assert tuple(g) == (1, 2, 3)
    assert tuple(g) == ()

    with pytest.raises(TypeError):
        mathify(42)

def test_gmathify():
    @gmathify
    def naturals():
        n = 1
        while True:
            yield n
            n += 1
    assert isinstance(naturals(), View)
    assert tuple(take(3, 2 * naturals())) == (2, 4, 6)
    assert naturals.__name__ == "naturals"

def test_size():
    assert size([1, 2, 3]) == 3
    assert size(()) == 0
    assert size(iota(1, 4)) == 3
    assert size(iota(1)) is None
    assert size(iter([1, 2])) is None
    assert size(zip([1, 2, 3], iota(1))) == 3  # ends with the shortest
    assert tuple(zip([1, 2, 3], iota(10))) == ((1, 10), (2, 11), (3, 12))

def test_materialize():
    m = [[1, 2], [3, 4]]
    assert materialize(mathify(m) * 10) == [[10, 20], [30, 40]]
    assert materialize(mathify(m) * 10, tuple) == ((10, 20), (30, 40))
    assert materialize(42) == 42
    assert materialize(take(3, iota(1))) == [1, 2, 3]
    # strings are leaves
    assert materialize(mathify(["ab", "cd"])) == ["ab", "cd"]
    # the copy is independent of the source
    out = materialize(m)
    assert out == m and out is not m and out[0] is not m[0]
