# core/scalar.py
import enum
import operator
from typing import Any, Union

import numpy as np


def _true_div(a, b):
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return a / b


def _trunc_div(a, b):
    """
    Integer division truncating toward zero.
    """
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    with np.errstate(over='ignore'):
        q, r = divmod(a, b)
        # divmod floors; step back toward zero when the signs differ.
        if r != 0 and (a < 0) != (b < 0):
            q = q + 1
    return q


def _quiet(op):
    def apply(a, b):
        with np.errstate(over='ignore', invalid='ignore'):
            return op(a, b)
    apply.__name__ = op.__name__
    return apply


class ScalarKind(enum.Enum):
    """
    The closed set of scalar kinds a vector can be built over.

    Each kind is backed by a numpy scalar type and declares its
    capabilities: whether it has a zero-value, a one-value, and whether it
    is a floating-point kind. The floating-point flag selects the equality
    policy of vectors built over the kind.
    """
    F32 = ("f32", np.float32)
    F64 = ("f64", np.float64)
    I8 = ("i8", np.int8)
    U8 = ("u8", np.uint8)
    I16 = ("i16", np.int16)
    U16 = ("u16", np.uint16)
    I32 = ("i32", np.int32)
    U32 = ("u32", np.uint32)
    I64 = ("i64", np.int64)
    U64 = ("u64", np.uint64)
    ISIZE = ("isize", np.intp)
    USIZE = ("usize", np.uintp)

    def __init__(self, label: str, scalar_type: type):
        self.label = label
        self.scalar_type = scalar_type

    @property
    def is_float(self) -> bool:
        return issubclass(self.scalar_type, np.floating)

    @property
    def has_zero(self) -> bool:
        return True

    @property
    def has_one(self) -> bool:
        return True

    def zero(self):
        return self.scalar_type(0)

    def one(self):
        return self.scalar_type(1)

    def coerce(self, value):
        """
        Convert a value to this kind's scalar type. Values already of the
        kind are returned unchanged.

        Integer kinds only take integers that fit their range; anything
        else raises instead of being truncated or wrapped.
        """
        if type(value) is self.scalar_type:
            return value
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("bool is not a numeric scalar value")
        if self.is_float:
            return self.scalar_type(value)
        if not isinstance(value, (int, np.integer)):
            raise TypeError(f"Scalar kind {self} takes integers, got {value!r}")
        info = np.iinfo(self.scalar_type)
        if not info.min <= int(value) <= info.max:
            raise OverflowError(f"{value!r} is out of range for scalar kind {self}")
        return self.scalar_type(int(value))

    @property
    def add(self):
        return _OPERATORS[self.is_float][0]

    @property
    def sub(self):
        return _OPERATORS[self.is_float][1]

    @property
    def mul(self):
        return _OPERATORS[self.is_float][2]

    @property
    def div(self):
        return _OPERATORS[self.is_float][3]

    @classmethod
    def of(cls, spec: Union["ScalarKind", str, type, np.dtype]) -> "ScalarKind":
        """
        Resolve a kind from a ScalarKind, a kind label ("f32", "u8", ...),
        a numpy scalar type or dtype, or the builtin int/float types.

        Types are matched by dtype, so np.intp and np.uintp resolve to the
        fixed-width kind of the same size (I64/U64 on 64-bit platforms).
        ISIZE and USIZE are reached by their labels or members only.
        """
        if isinstance(spec, ScalarKind):
            return spec
        if isinstance(spec, str):
            for kind in cls:
                if kind.label == spec:
                    return kind
            raise TypeError(f"Unknown scalar kind: {spec!r}")
        if spec is bool:
            raise TypeError("bool is not a numeric scalar kind")
        if spec is None:
            raise TypeError("A scalar kind is required")
        if spec is int:
            return cls.I64
        if spec is float:
            return cls.F64
        try:
            dtype = np.dtype(spec)
        except (TypeError, ValueError):
            raise TypeError(f"Unsupported scalar kind: {spec!r}") from None
        for kind in cls:
            if np.dtype(kind.scalar_type) == dtype:
                return kind
        raise TypeError(f"Unsupported scalar kind: {spec!r}")

    @classmethod
    def infer(cls, value: Any) -> "ScalarKind":
        """
        Return the kind of a single scalar value.
        """
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("bool is not a numeric scalar kind")
        if isinstance(value, np.generic):
            return cls.of(type(value))
        if isinstance(value, int):
            return cls.I64
        if isinstance(value, float):
            return cls.F64
        raise TypeError(f"Unsupported scalar value: {value!r}")

    def __repr__(self) -> str:
        return f"ScalarKind.{self.name}"

    def __str__(self) -> str:
        return self.label


# Indexed by ScalarKind.is_float: (add, sub, mul, div).
_OPERATORS = {
    True: (_quiet(operator.add), _quiet(operator.sub), _quiet(operator.mul), _true_div),
    False: (_quiet(operator.add), _quiet(operator.sub), _quiet(operator.mul), _trunc_div),
}
