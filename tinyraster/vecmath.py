import math
from dataclasses import dataclass
from typing import List, Optional, Sequence


# ============================================================
#  Vectors
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions and directions.

    Used in:
      - triangle vertices (object space and camera space)
      - face normals
      - edge vectors for the normal cross product

    Note:
      - Immutable (frozen), operations return new objects. Triangles that
        share a vertex share an immutable value, never a mutable record.
    """
    x: float
    y: float
    z: float

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> "Vec3":
        return Vec3(self.x * scale, self.y * scale, self.z * scale)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """Right-handed: x.cross(y) == z, so a CCW screen triangle faces +Z."""
        ax, ay, az = self
        bx, by, bz = other
        return Vec3(ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)

    def norm(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def normalize(self):
        """
        Unit vector in the same direction.

        Edge vectors of a collinear triangle cross to (almost) nothing;
        that case comes back as the zero vector, which the pipeline reads
        as "degenerate, skip".
        """
        n = self.norm()
        if n <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return Vec3(self.x / n, self.y / n, self.z / n)


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return a.cross(b)


def length(a: Vec3) -> float:
    return a.norm()


def normalize(a: Vec3) -> Vec3:
    return a.normalize()


# ============================================================
#  Matrices
# ============================================================

class Mat3:
    """
    3x3 matrix (row-major), a linear map on Vec3.

    Convention:
      - vectors are columns: transform(M, v)[r] = sum_c M[r][c] * v[c]
      - therefore (A @ B).transform(v) == A.transform(B.transform(v)),
        i.e. B is applied first, then A.

    Multiplication:
      - Matrix @ Matrix => Mat3
      - Matrix.transform(Vec3) => Vec3
    """
    __slots__ = ('m',)

    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0, 0.0, 0.0] for _ in range(3)]

    @staticmethod
    def identity():
        """The no-op rotation, what heading = pitch = 0 composes to."""
        return Mat3.rows((1, 0, 0), (0, 1, 0), (0, 0, 1))

    @staticmethod
    def rows(r0: Sequence[float], r1: Sequence[float], r2: Sequence[float]):
        """Build a matrix from three rows."""
        return Mat3([[float(c) for c in r] for r in (r0, r1, r2)])

    def __matmul__(self, o: "Mat3") -> "Mat3":
        """Row of self against column of o; the result applies o first."""
        cols = list(zip(*o.m))
        return Mat3([[sum(a * b for a, b in zip(row, col)) for col in cols]
                     for row in self.m])

    def __eq__(self, o) -> bool:
        if not isinstance(o, Mat3):
            return NotImplemented
        return self.m == o.m

    def __repr__(self) -> str:
        return f"Mat3({self.m!r})"

    def transform(self, v: Vec3) -> Vec3:
        """Multiply matrix by a Vec3 (Mat3 * v)."""
        m = self.m
        x = m[0][0]*v.x + m[0][1]*v.y + m[0][2]*v.z
        y = m[1][0]*v.x + m[1][1]*v.y + m[1][2]*v.z
        z = m[2][0]*v.x + m[2][1]*v.y + m[2][2]*v.z
        return Vec3(x, y, z)


def multiply(a: Mat3, b: Mat3) -> Mat3:
    """Standard product a·b; applying it to a vector applies b, then a."""
    return a @ b


def transform(m: Mat3, v: Vec3) -> Vec3:
    return m.transform(v)
