from trivec.core.eq import EPSILON, almost_equal, equal
from trivec.core.scalar import ScalarKind
from trivec.core.vector import Vec3

__all__ = ["EPSILON", "ScalarKind", "Vec3", "almost_equal", "equal"]
