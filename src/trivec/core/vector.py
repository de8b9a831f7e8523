# core/vector.py
import logging
import threading
from typing import Iterator

from trivec.core.eq import almost_equal, equal
from trivec.core.scalar import ScalarKind

logger = logging.getLogger(__name__)


class Vec3:
    """
    A generic three-component vector.

    Vec3 is parameterized by a scalar kind: Vec3[np.float32], Vec3["u8"] and
    Vec3[ScalarKind.I64] are each a class whose components all share that
    kind. Calling Vec3(x, y, z) directly infers the kind from the components.

    The equality operator (==) depends on the kind. For floating-point kinds
    equality is near-equality within EPSILON (see trivec.core.eq). For the
    signed and unsigned integer kinds it is exact comparison.
    """
    __slots__ = ("x", "y", "z")

    kind: ScalarKind = None

    def __class_getitem__(cls, spec) -> type:
        return _specialize(ScalarKind.of(spec))

    def __new__(cls, x, y, z):
        if cls.kind is None:
            cls = _specialize(_infer_kind(x, y, z))
        return object.__new__(cls)

    def __init__(self, x, y, z):
        kind = self.kind
        self.x = kind.coerce(x)
        self.y = kind.coerce(y)
        self.z = kind.coerce(z)

    @classmethod
    def new(cls, x, y, z) -> "Vec3":
        """
        Returns a new vector with the given components.

        >>> Vec3.new(1, 5, 2)
        Vec3[i64](1, 5, 2)
        """
        return cls(x, y, z)

    @classmethod
    def zero(cls) -> "Vec3":
        """
        Returns the vector with every component set to the kind's zero-value.
        """
        kind = _require_kind(cls)
        if not kind.has_zero:
            raise TypeError(f"Scalar kind {kind} has no zero value")
        zero = kind.zero()
        return cls(zero, zero, zero)

    @classmethod
    def one(cls) -> "Vec3":
        """
        Returns the vector with every component set to the kind's one-value.
        """
        kind = _require_kind(cls)
        if not kind.has_one:
            raise TypeError(f"Scalar kind {kind} has no one value")
        one = kind.one()
        return cls(one, one, one)

    def is_zero(self) -> bool:
        """
        Tests if the vector equals zero() under the kind's equality. For
        floating-point kinds this is a tolerance comparison.
        """
        return self == type(self).zero()

    def _componentwise(self, other: "Vec3", op) -> "Vec3":
        return type(self)(op(self.x, other.x), op(self.y, other.y), op(self.z, other.z))

    def __add__(self, other: "Vec3") -> "Vec3":
        if type(other) is not type(self):
            return NotImplemented
        return self._componentwise(other, self.kind.add)

    def __sub__(self, other: "Vec3") -> "Vec3":
        if type(other) is not type(self):
            return NotImplemented
        return self._componentwise(other, self.kind.sub)

    def __mul__(self, other: "Vec3") -> "Vec3":
        if type(other) is not type(self):
            return NotImplemented
        return self._componentwise(other, self.kind.mul)

    def __truediv__(self, other: "Vec3") -> "Vec3":
        # Floats divide per IEEE (inf/nan propagate); integers truncate
        # toward zero and raise ZeroDivisionError on a zero divisor.
        if type(other) is not type(self):
            return NotImplemented
        return self._componentwise(other, self.kind.div)

    def __iter__(self) -> Iterator:
        yield self.x
        yield self.y
        yield self.z

    def __reduce__(self):
        return _rebuild, (self.kind.label, self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vec3[{self.kind}]({self.x}, {self.y}, {self.z})"


class _TolerancePolicy:
    """
    Equality for floating-point kinds: component-wise near-equality.

    The relation is reflexive and symmetric but not transitive, so these
    vectors are unhashable.
    """
    __slots__ = ()

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (equal(self.x, other.x) and
                equal(self.y, other.y) and
                equal(self.z, other.z))

    __hash__ = None

    def almost_equal(self, other: "Vec3", abs_tol: float) -> bool:
        """
        Tells if this vector is equal to the other given an absolute
        tolerance value, component by component.

        >>> a = Vec3["f32"](1.0, 1.0, 1.0)
        >>> b = Vec3["f32"](0.9, 0.9, 0.9)
        >>> a.almost_equal(b, 0.1000001), a.almost_equal(b, 0.1)
        (True, False)
        """
        if type(other) is not type(self):
            raise TypeError(f"Cannot compare {self!r} with {other!r}")
        return (almost_equal(self.x, other.x, abs_tol) and
                almost_equal(self.y, other.y, abs_tol) and
                almost_equal(self.z, other.z, abs_tol))


class _ExactPolicy:
    """
    Equality for integer kinds: component-wise exact comparison.
    """
    __slots__ = ()

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z)

    def __hash__(self) -> int:
        return hash((self.kind, int(self.x), int(self.y), int(self.z)))


_specialized: dict[ScalarKind, type] = {}
_specialize_lock = threading.Lock()


def _specialize(kind: ScalarKind) -> type:
    """
    Returns the Vec3 class for a scalar kind, creating it on first use.
    """
    cls = _specialized.get(kind)
    if cls is not None:
        return cls
    with _specialize_lock:
        cls = _specialized.get(kind)
        if cls is None:
            policy = _TolerancePolicy if kind.is_float else _ExactPolicy
            cls = type(f"Vec3[{kind}]", (policy, Vec3), {
                "__slots__": (),
                "__module__": __name__,
                "__qualname__": f"Vec3[{kind}]",
                "kind": kind,
            })
            _specialized[kind] = cls
            logger.debug("Specialized Vec3 for %s with %s", kind, policy.__name__)
    return cls


def _require_kind(cls) -> ScalarKind:
    if cls.kind is None:
        raise TypeError("Vec3 needs a scalar kind here, e.g. Vec3[np.float32]")
    return cls.kind


def _infer_kind(x, y, z) -> ScalarKind:
    kinds = {ScalarKind.infer(x), ScalarKind.infer(y), ScalarKind.infer(z)}
    if len(kinds) != 1:
        names = ", ".join(sorted(str(k) for k in kinds))
        raise TypeError(f"Vector components must share one scalar kind, got {names}")
    return kinds.pop()


def _rebuild(label: str, x, y, z) -> Vec3:
    return Vec3[label](x, y, z)
