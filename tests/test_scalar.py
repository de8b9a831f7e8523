import math

import numpy as np
import pytest

from trivec.core.scalar import ScalarKind

FLOAT_KINDS = [ScalarKind.F32, ScalarKind.F64]
INT_KINDS = [k for k in ScalarKind if not k.is_float]


@pytest.mark.parametrize("spec, expected", [
    (ScalarKind.U16, ScalarKind.U16),
    ("f32", ScalarKind.F32),
    ("usize", ScalarKind.USIZE),
    (np.float32, ScalarKind.F32),
    (np.dtype("int8"), ScalarKind.I8),
    (np.uint64, ScalarKind.U64),
    (int, ScalarKind.I64),
    (float, ScalarKind.F64),
])
def test_of_resolves_kind(spec, expected):
    assert ScalarKind.of(spec) is expected


@pytest.mark.parametrize("spec", [np.float16, np.complex128, "f16", bool, None, object])
def test_of_rejects_unsupported(spec):
    with pytest.raises(TypeError):
        ScalarKind.of(spec)


def test_infer():
    assert ScalarKind.infer(3) is ScalarKind.I64
    assert ScalarKind.infer(3.5) is ScalarKind.F64
    assert ScalarKind.infer(np.uint8(3)) is ScalarKind.U8
    assert ScalarKind.infer(np.float32(3)) is ScalarKind.F32
    for value in (True, np.bool_(False), "3", None):
        with pytest.raises(TypeError):
            ScalarKind.infer(value)


def test_classification_is_exclusive():
    assert [k for k in ScalarKind if k.is_float] == FLOAT_KINDS
    for kind in ScalarKind:
        assert kind.has_zero and kind.has_one


@pytest.mark.parametrize("kind", list(ScalarKind))
def test_zero_and_one_values(kind):
    assert kind.zero() == 0
    assert kind.one() == 1
    assert type(kind.zero()) is kind.scalar_type
    assert type(kind.one()) is kind.scalar_type


def test_coerce_keeps_values_of_the_kind():
    value = np.int16(7)
    assert ScalarKind.I16.coerce(value) is value
    assert type(ScalarKind.F32.coerce(0.5)) is np.float32
    assert type(ScalarKind.F64.coerce(3)) is np.float64


@pytest.mark.parametrize("kind", INT_KINDS)
def test_coerce_accepts_the_integer_range(kind):
    info = np.iinfo(kind.scalar_type)
    assert kind.coerce(info.min) == info.min
    assert kind.coerce(info.max) == info.max
    with pytest.raises(OverflowError):
        kind.coerce(info.max + 1)
    with pytest.raises(OverflowError):
        kind.coerce(info.min - 1)


@pytest.mark.parametrize("value", [1.5, 2.0, np.float64(0.5), True, np.bool_(True), None])
def test_coerce_to_integer_kind_rejects_non_integers(value):
    with pytest.raises(TypeError):
        ScalarKind.I32.coerce(value)


def test_coerce_to_float_kind_rejects_bool():
    with pytest.raises(TypeError):
        ScalarKind.F64.coerce(True)


def test_pointer_sized_types_resolve_by_dtype():
    assert ScalarKind.of(np.intp) is ScalarKind.of(np.dtype(np.intp))
    assert ScalarKind.of(np.intp) is not ScalarKind.ISIZE
    assert ScalarKind.of(np.uintp) is not ScalarKind.USIZE
    assert ScalarKind.of("isize") is ScalarKind.ISIZE
    assert ScalarKind.of("usize") is ScalarKind.USIZE


@pytest.mark.parametrize("a, b, expected", [
    (7, 2, 3),
    (-7, 2, -3),
    (7, -2, -3),
    (-7, -2, 3),
    (6, -3, -2),
    (1, 2, 0),
    (-1, 2, 0),
])
def test_integer_division_truncates(a, b, expected):
    kind = ScalarKind.I32
    assert kind.div(kind.coerce(a), kind.coerce(b)) == expected


@pytest.mark.parametrize("kind", INT_KINDS)
def test_integer_division_by_zero(kind):
    with pytest.raises(ZeroDivisionError):
        kind.div(kind.one(), kind.zero())


def test_integer_arithmetic_wraps():
    u8 = ScalarKind.U8
    assert u8.add(np.uint8(255), np.uint8(1)) == 0
    assert u8.sub(np.uint8(0), np.uint8(1)) == 255
    i8 = ScalarKind.I8
    assert i8.sub(np.int8(-128), np.int8(1)) == 127
    assert i8.mul(np.int8(64), np.int8(2)) == -128


@pytest.mark.parametrize("kind", FLOAT_KINDS)
def test_float_division_is_ieee(kind):
    one, zero = kind.one(), kind.zero()
    assert math.isinf(kind.div(one, zero))
    assert kind.div(-one, zero) < 0
    assert math.isnan(kind.div(zero, zero))


def test_operators_keep_the_kind():
    for kind in ScalarKind:
        a, b = kind.coerce(6), kind.coerce(3)
        for op in (kind.add, kind.sub, kind.mul, kind.div):
            assert type(op(a, b)) is kind.scalar_type
