"""
Dense Complex Matrix Algebra — Vectors, Matrices & Decompositions

Small dense linear algebra over ComplexNumber entries:
- ComplexVector: element-wise algebra, Hermitian inner product, norms
- DenseComplexMatrix: algebra, structural predicates (Hermitian, unitary)
- LU decomposition with partial pivoting, determinant, linear solve
- Gauss-Jordan inverse
- QR decomposition by modified Gram-Schmidt (rank-deficient columns completed
  from the standard basis so Q is always unitary)
- Kronecker and outer products

CRITICAL INVARIANTS:
1. Vectors and matrices are immutable and non-empty; matrices are rectangular
2. Shape mismatches raise DimensionMismatchError
3. Pivots with magnitude < EPS_PIVOT raise SingularMatrixError (inverse, solve)
4. Structural checks (Hermitian, unitary) and norms run in double precision
"""

import logging
import math
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from quantum_core.core.math.big_number import BigNumberLike
from quantum_core.core.math.complex_number import ComplexLike, ComplexNumber
from quantum_core.core.math.numerical_safeguards import (
    EPS_NORM,
    EPS_PIVOT,
    EPS_STRUCTURE,
    DimensionMismatchError,
    DomainError,
    SingularMatrixError,
    require_same_length,
    require_square,
)
from quantum_core.core.math.precision import Precision, RoundingMode

logger = logging.getLogger("QuantumCore.Matrix")

# Standard-basis candidates below this residual norm are rejected during QR completion
QR_COMPLETION_THRESHOLD = 1e-8

# Rounding applied when a decomposition is asked to keep a bounded number of places
_ROUNDING = RoundingMode.ROUND_HALF_EVEN


# =============================================================================
# VECTOR
# =============================================================================


class ComplexVector:
    """
    Immutable vector of ComplexNumber entries.

    Examples:
        >>> v = ComplexVector([3, 4])
        >>> v.norm()
        5.0
        >>> str(ComplexVector([1, 1j]).inner(ComplexVector([1, 1j])))
        '2'
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ComplexLike]):
        values = tuple(ComplexNumber.coerce(e) for e in entries)
        if not values:
            raise DimensionMismatchError("Vector must have at least one entry")
        object.__setattr__(self, "_entries", values)

    def __setattr__(self, name, value):
        raise AttributeError("ComplexVector is immutable")

    @classmethod
    def zeros(cls, size: int) -> "ComplexVector":
        return cls([0] * size)

    @classmethod
    def ones(cls, size: int) -> "ComplexVector":
        return cls([1] * size)

    @classmethod
    def unit(cls, size: int, index: int) -> "ComplexVector":
        """Standard basis vector e_index."""
        if not 0 <= index < size:
            raise IndexError(f"Unit index {index} out of range for size {size}")
        return cls([1 if k == index else 0 for k in range(size)])

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[ComplexNumber, ...]:
        return self._entries

    def get(self, index: int) -> ComplexNumber:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"Index {index} out of range for vector of size {self.size}")
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ComplexNumber]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ComplexNumber:
        return self._entries[index]

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def add(self, other: "ComplexVector") -> "ComplexVector":
        require_same_length(self, other, "Vector addition")
        return ComplexVector(a.add(b) for a, b in zip(self._entries, other._entries))

    def subtract(self, other: "ComplexVector") -> "ComplexVector":
        require_same_length(self, other, "Vector subtraction")
        return ComplexVector(a.subtract(b) for a, b in zip(self._entries, other._entries))

    def scale(self, scalar: ComplexLike) -> "ComplexVector":
        scalar = ComplexNumber.coerce(scalar)
        return ComplexVector(e.multiply(scalar) for e in self._entries)

    def inner(self, other: "ComplexVector") -> ComplexNumber:
        """Hermitian inner product <self|other> = Σ conj(self_k)·other_k."""
        require_same_length(self, other, "Inner product")
        total = ComplexNumber.zero()
        for a, b in zip(self._entries, other._entries):
            total = total.add(a.conjugate().multiply(b))
        return total

    def dot(self, other: "ComplexVector") -> ComplexNumber:
        """Bilinear product Σ self_k·other_k (no conjugation)."""
        require_same_length(self, other, "Dot product")
        total = ComplexNumber.zero()
        for a, b in zip(self._entries, other._entries):
            total = total.add(a.multiply(b))
        return total

    def norm(self) -> float:
        """Euclidean norm sqrt(Σ|v_k|²) in double precision."""
        return math.sqrt(math.fsum(e.abs_squared().to_number() for e in self._entries))

    def normalize(self) -> "ComplexVector":
        """
        Unit vector in the direction of self.

        Raises:
            DomainError: If the norm is numerically zero
        """
        magnitude = self.norm()
        if magnitude < EPS_NORM:
            raise DomainError("Cannot normalize a zero vector")
        return self.scale(1.0 / magnitude)

    def cross(self, other: "ComplexVector") -> "ComplexVector":
        """
        3-D cross product.

        Raises:
            DimensionMismatchError: If either vector is not 3-dimensional
        """
        if self.size != 3 or other.size != 3:
            raise DimensionMismatchError(
                f"Cross product requires 3-D vectors, got {self.size} and {other.size}"
            )
        a, b = self._entries, other._entries
        return ComplexVector(
            [
                a[1].multiply(b[2]).subtract(a[2].multiply(b[1])),
                a[2].multiply(b[0]).subtract(a[0].multiply(b[2])),
                a[0].multiply(b[1]).subtract(a[1].multiply(b[0])),
            ]
        )

    def conjugate(self) -> "ComplexVector":
        return ComplexVector(e.conjugate() for e in self._entries)

    def round(
        self, decimal_places: int, rounding_mode: Optional[RoundingMode] = None
    ) -> "ComplexVector":
        return ComplexVector(e.round(decimal_places, rounding_mode) for e in self._entries)

    def equals(self, other: "ComplexVector", epsilon: Optional[BigNumberLike] = None) -> bool:
        if self.size != other.size:
            return False
        return all(a.equals(b, epsilon) for a, b in zip(self._entries, other._entries))

    def to_list(self) -> list[complex]:
        return [complex(e) for e in self._entries]

    def __eq__(self, other) -> bool:
        if isinstance(other, ComplexVector):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __neg__(self):
        return self.scale(-1)

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self._entries) + "]"

    def __repr__(self) -> str:
        return f"ComplexVector({self})"


# =============================================================================
# DECOMPOSITION RESULTS
# =============================================================================


class LUDecomposition(NamedTuple):
    """PA = LU with P given as a row permutation."""

    lower: "DenseComplexMatrix"
    upper: "DenseComplexMatrix"
    permutation: tuple[int, ...]
    swaps: int


class QRDecomposition(NamedTuple):
    """A = QR with Q unitary (columns orthonormal) and R = Q^H A."""

    q: "DenseComplexMatrix"
    r: "DenseComplexMatrix"


# =============================================================================
# MATRIX
# =============================================================================


class DenseComplexMatrix:
    """
    Immutable dense matrix of ComplexNumber entries.

    Real and builtin complex entries are promoted to ComplexNumber.

    Examples:
        >>> m = DenseComplexMatrix([[2, 1], [4, 3]])
        >>> str(m.determinant())
        '2'
        >>> m.multiply(DenseComplexMatrix.identity(2)).equals(m)
        True
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Iterable[Iterable[ComplexLike]]):
        grid = tuple(tuple(ComplexNumber.coerce(e) for e in row) for row in rows)

        if not grid or not grid[0]:
            raise DimensionMismatchError("Matrix must have at least one row and one column")

        width = len(grid[0])
        for index, row in enumerate(grid):
            if len(row) != width:
                raise DimensionMismatchError(
                    f"Ragged matrix: row {index} has {len(row)} entries, expected {width}"
                )

        object.__setattr__(self, "_rows", grid)

    def __setattr__(self, name, value):
        raise AttributeError("DenseComplexMatrix is immutable")

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "DenseComplexMatrix":
        return cls([[0] * cols for _ in range(rows)])

    @classmethod
    def ones(cls, rows: int, cols: int) -> "DenseComplexMatrix":
        return cls([[1] * cols for _ in range(rows)])

    @classmethod
    def identity(cls, size: int) -> "DenseComplexMatrix":
        return cls([[1 if r == c else 0 for c in range(size)] for r in range(size)])

    @classmethod
    def diagonal(cls, values: Sequence[ComplexLike]) -> "DenseComplexMatrix":
        size = len(values)
        return cls([[values[r] if r == c else 0 for c in range(size)] for r in range(size)])

    @classmethod
    def from_rows(cls, vectors: Sequence[ComplexVector]) -> "DenseComplexMatrix":
        return cls([list(v) for v in vectors])

    @classmethod
    def from_columns(cls, vectors: Sequence[ComplexVector]) -> "DenseComplexMatrix":
        if not vectors:
            raise DimensionMismatchError("from_columns requires at least one vector")
        height = vectors[0].size
        for v in vectors:
            if v.size != height:
                raise DimensionMismatchError("All column vectors must have the same size")
        return cls([[v[r] for v in vectors] for r in range(height)])

    @classmethod
    def from_complex_rows(cls, rows: Sequence[Sequence[complex]]) -> "DenseComplexMatrix":
        return cls([[ComplexNumber.from_complex(complex(e)) for e in row] for row in rows])

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self._rows)

    @property
    def cols(self) -> int:
        return len(self._rows[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def entries(self) -> tuple[tuple[ComplexNumber, ...], ...]:
        return self._rows

    def get(self, row: int, col: int) -> ComplexNumber:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Index ({row}, {col}) out of range for {self.rows}x{self.cols} matrix")
        return self._rows[row][col]

    def get_row(self, row: int) -> ComplexVector:
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range")
        return ComplexVector(self._rows[row])

    def get_col(self, col: int) -> ComplexVector:
        if not 0 <= col < self.cols:
            raise IndexError(f"Column {col} out of range")
        return ComplexVector(row[col] for row in self._rows)

    def to_complex_rows(self) -> list[list[complex]]:
        return [[complex(e) for e in row] for row in self._rows]

    def to_list(self) -> list[list[complex]]:
        return self.to_complex_rows()

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_symmetric(self) -> bool:
        if not self.is_square():
            return False
        return all(
            self._rows[r][c].equals(self._rows[c][r])
            for r in range(self.rows)
            for c in range(r + 1, self.cols)
        )

    def is_hermitian(self, tol: float = EPS_STRUCTURE) -> bool:
        """A == A^H within tol (entry-wise, double precision)."""
        if not self.is_square():
            return False
        grid = self.to_complex_rows()
        n = self.rows
        return all(
            abs(grid[r][c] - grid[c][r].conjugate()) <= tol for r in range(n) for c in range(r, n)
        )

    def is_unitary(self, tol: float = EPS_STRUCTURE) -> bool:
        """U U^H == I within tol (entry-wise, double precision)."""
        if not self.is_square():
            return False
        grid = self.to_complex_rows()
        n = self.rows
        for r in range(n):
            for c in range(n):
                value = sum(grid[r][k] * grid[c][k].conjugate() for k in range(n))
                expected = 1.0 if r == c else 0.0
                if abs(value - expected) > tol:
                    return False
        return True

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def _require_same_shape(self, other: "DenseComplexMatrix", operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"{operation}: shape mismatch {self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

    def add(self, other: "DenseComplexMatrix") -> "DenseComplexMatrix":
        self._require_same_shape(other, "Matrix addition")
        return DenseComplexMatrix(
            [a.add(b) for a, b in zip(ra, rb)] for ra, rb in zip(self._rows, other._rows)
        )

    def subtract(self, other: "DenseComplexMatrix") -> "DenseComplexMatrix":
        self._require_same_shape(other, "Matrix subtraction")
        return DenseComplexMatrix(
            [a.subtract(b) for a, b in zip(ra, rb)] for ra, rb in zip(self._rows, other._rows)
        )

    def scale(self, scalar: ComplexLike) -> "DenseComplexMatrix":
        scalar = ComplexNumber.coerce(scalar)
        return DenseComplexMatrix([e.multiply(scalar) for e in row] for row in self._rows)

    def hadamard(self, other: "DenseComplexMatrix") -> "DenseComplexMatrix":
        """Entry-wise product."""
        self._require_same_shape(other, "Hadamard product")
        return DenseComplexMatrix(
            [a.multiply(b) for a, b in zip(ra, rb)] for ra, rb in zip(self._rows, other._rows)
        )

    def multiply(self, other: "DenseComplexMatrix") -> "DenseComplexMatrix":
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"Matrix product: {self.rows}x{self.cols} cannot multiply {other.rows}x{other.cols}"
            )

        columns = [[row[c] for row in other._rows] for c in range(other.cols)]
        result = []
        for row in self._rows:
            out = []
            for column in columns:
                total = ComplexNumber.zero()
                for a, b in zip(row, column):
                    if not (a.is_zero() or b.is_zero()):
                        total = total.add(a.multiply(b))
                out.append(total)
            result.append(out)
        return DenseComplexMatrix(result)

    def multiply_vector(self, vector: ComplexVector) -> ComplexVector:
        if self.cols != vector.size:
            raise DimensionMismatchError(
                f"Matrix-vector product: {self.rows}x{self.cols} with vector of size {vector.size}"
            )

        result = []
        for row in self._rows:
            total = ComplexNumber.zero()
            for a, b in zip(row, vector):
                if not (a.is_zero() or b.is_zero()):
                    total = total.add(a.multiply(b))
            result.append(total)
        return ComplexVector(result)

    def pow(self, n: int) -> "DenseComplexMatrix":
        """
        Non-negative integer power by repeated squaring.

        Raises:
            DomainError: If n is negative or not an integer
        """
        require_square(self.rows, self.cols, "Matrix power")
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise DomainError(f"Matrix power requires a non-negative integer, got {n!r}")

        result = DenseComplexMatrix.identity(self.rows)
        base = self
        while n > 0:
            if n % 2 == 1:
                result = result.multiply(base)
            n //= 2
            if n:
                base = base.multiply(base)
        return result

    def transpose(self) -> "DenseComplexMatrix":
        return DenseComplexMatrix([row[c] for row in self._rows] for c in range(self.cols))

    def conjugate(self) -> "DenseComplexMatrix":
        return DenseComplexMatrix([e.conjugate() for e in row] for row in self._rows)

    def conjugate_transpose(self) -> "DenseComplexMatrix":
        return DenseComplexMatrix(
            [row[c].conjugate() for row in self._rows] for c in range(self.cols)
        )

    def trace(self) -> ComplexNumber:
        require_square(self.rows, self.cols, "Trace")
        total = ComplexNumber.zero()
        for k in range(self.rows):
            total = total.add(self._rows[k][k])
        return total

    def norm(self) -> float:
        """Frobenius norm in double precision."""
        return math.sqrt(
            math.fsum(e.abs_squared().to_number() for row in self._rows for e in row)
        )

    def round(
        self, decimal_places: int, rounding_mode: Optional[RoundingMode] = None
    ) -> "DenseComplexMatrix":
        return DenseComplexMatrix(
            [e.round(decimal_places, rounding_mode) for e in row] for row in self._rows
        )

    def equals(self, other: "DenseComplexMatrix", epsilon: Optional[BigNumberLike] = None) -> bool:
        if self.shape != other.shape:
            return False
        return all(
            a.equals(b, epsilon) for ra, rb in zip(self._rows, other._rows) for a, b in zip(ra, rb)
        )

    # -------------------------------------------------------------------------
    # Decompositions
    # -------------------------------------------------------------------------

    def lu_decomposition(
        self,
        precision: Optional[Precision] = None,
        decimal_places: Optional[int] = None,
    ) -> LUDecomposition:
        """
        Doolittle LU with partial pivoting: PA = LU.

        The pivot of column k is the remaining row with the largest magnitude;
        swaps are mirrored in L, U and the permutation. Columns whose pivot is
        numerically zero are left uneliminated (U then has a zero diagonal).
        With decimal_places set, every eliminated row is rounded to that many
        places (half-even); otherwise elimination is exact.
        """
        require_square(self.rows, self.cols, "LU decomposition")
        n = self.rows

        upper = [list(row) for row in self._rows]
        lower = [[ComplexNumber.zero() for _ in range(n)] for _ in range(n)]
        permutation = list(range(n))
        swaps = 0

        for k in range(n):
            pivot_row = max(range(k, n), key=lambda r: upper[r][k].magnitude())

            if pivot_row != k:
                upper[k], upper[pivot_row] = upper[pivot_row], upper[k]
                lower[k], lower[pivot_row] = lower[pivot_row], lower[k]
                permutation[k], permutation[pivot_row] = permutation[pivot_row], permutation[k]
                swaps += 1

            pivot = upper[k][k]
            if pivot.magnitude() < EPS_PIVOT:
                continue

            for r in range(k + 1, n):
                if upper[r][k].is_zero():
                    continue
                factor = upper[r][k].divide(pivot, precision)
                lower[r][k] = factor
                upper[r] = [
                    upper[r][c].subtract(factor.multiply(upper[k][c])) if c >= k else upper[r][c]
                    for c in range(n)
                ]
                upper[r][k] = ComplexNumber.zero()
                if decimal_places is not None:
                    upper[r] = [e.round(decimal_places, _ROUNDING) for e in upper[r]]

        for k in range(n):
            lower[k][k] = ComplexNumber.one()

        return LUDecomposition(
            lower=DenseComplexMatrix(lower),
            upper=DenseComplexMatrix(upper),
            permutation=tuple(permutation),
            swaps=swaps,
        )

    def determinant(self, precision: Optional[Precision] = None) -> ComplexNumber:
        """Product of U's diagonal, negated for an odd number of row swaps."""
        require_square(self.rows, self.cols, "Determinant")
        lu = self.lu_decomposition(precision)

        result = ComplexNumber.one()
        for k in range(self.rows):
            result = result.multiply(lu.upper.get(k, k))

        return result.negate() if lu.swaps % 2 == 1 else result

    def inverse(
        self,
        precision: Optional[Precision] = None,
        decimal_places: Optional[int] = None,
    ) -> "DenseComplexMatrix":
        """
        Gauss-Jordan elimination on [A | I] with partial pivoting.

        With decimal_places set, every updated row is rounded to that many
        places (half-even).

        Raises:
            DimensionMismatchError: If the matrix is not square
            SingularMatrixError: If a pivot magnitude falls below EPS_PIVOT
        """
        require_square(self.rows, self.cols, "Inverse")
        n = self.rows

        augmented = [
            list(row) + [ComplexNumber.one() if r == c else ComplexNumber.zero() for c in range(n)]
            for r, row in enumerate(self._rows)
        ]

        for k in range(n):
            pivot_row = max(range(k, n), key=lambda r: augmented[r][k].magnitude())
            if augmented[pivot_row][k].magnitude() < EPS_PIVOT:
                logger.debug("Singular pivot at column %d during inversion", k)
                raise SingularMatrixError(f"Matrix is singular (pivot {k} is numerically zero)")

            augmented[k], augmented[pivot_row] = augmented[pivot_row], augmented[k]

            pivot = augmented[k][k]
            augmented[k] = [e.divide(pivot, precision) for e in augmented[k]]

            for r in range(n):
                if r == k or augmented[r][k].is_zero():
                    continue
                factor = augmented[r][k]
                augmented[r] = [
                    a.subtract(factor.multiply(b)) for a, b in zip(augmented[r], augmented[k])
                ]
                if decimal_places is not None:
                    augmented[r] = [e.round(decimal_places, _ROUNDING) for e in augmented[r]]

        return DenseComplexMatrix(row[n:] for row in augmented)

    def qr_decomposition(self, decimal_places: Optional[int] = None) -> QRDecomposition:
        """
        Modified Gram-Schmidt QR.

        Column norms and normalization use double precision; projections use
        the Hermitian inner product. When a column is (numerically) linearly
        dependent on earlier ones, it is replaced by the first standard basis
        vector whose orthogonal residual is significant, so Q stays unitary.

        With decimal_places set, each projection step, each normalized column
        and R are rounded to that many places (half-even), so repeated
        decompositions keep a bounded number of digits.

        Raises:
            DimensionMismatchError: If rows < cols
        """
        if self.rows < self.cols:
            raise DimensionMismatchError(
                f"QR decomposition requires rows >= cols, got {self.rows}x{self.cols}"
            )

        basis: list[ComplexVector] = []

        for c in range(self.cols):
            vector = self._orthogonalize(self.get_col(c), basis, decimal_places)

            if vector.norm() < QR_COMPLETION_THRESHOLD * max(1.0, self.get_col(c).norm()):
                vector = self._complete_basis(basis, decimal_places)

            column = vector.normalize()
            if decimal_places is not None:
                column = column.round(decimal_places, _ROUNDING)
            basis.append(column)

        q = DenseComplexMatrix.from_columns(basis)
        r = q.conjugate_transpose().multiply(self)
        if decimal_places is not None:
            r = r.round(decimal_places, _ROUNDING)
        return QRDecomposition(q=q, r=r)

    @staticmethod
    def _orthogonalize(
        vector: ComplexVector,
        basis: Sequence[ComplexVector],
        decimal_places: Optional[int] = None,
    ) -> ComplexVector:
        for q in basis:
            projection = q.inner(vector)
            if not projection.is_zero():
                vector = vector.subtract(q.scale(projection))
                if decimal_places is not None:
                    vector = vector.round(decimal_places, _ROUNDING)
        return vector

    def _complete_basis(
        self, basis: Sequence[ComplexVector], decimal_places: Optional[int] = None
    ) -> ComplexVector:
        for k in range(self.rows):
            candidate = self._orthogonalize(ComplexVector.unit(self.rows, k), basis, decimal_places)
            if candidate.norm() > QR_COMPLETION_THRESHOLD:
                return candidate
        raise DomainError("Unable to complete orthonormal basis")

    # -------------------------------------------------------------------------
    # Protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if isinstance(other, DenseComplexMatrix):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._rows)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __matmul__(self, other):
        if isinstance(other, ComplexVector):
            return self.multiply_vector(other)
        return self.multiply(other)

    def __neg__(self):
        return self.scale(-1)

    def __str__(self) -> str:
        return "\n".join("[" + ", ".join(str(e) for e in row) + "]" for row in self._rows)

    def __repr__(self) -> str:
        return f"DenseComplexMatrix({self.rows}x{self.cols})"


Matrix = DenseComplexMatrix
Vector = ComplexVector


# =============================================================================
# MODULE FUNCTIONS
# =============================================================================


def solve(
    a: DenseComplexMatrix,
    b: Union[ComplexVector, Sequence[ComplexLike]],
    precision: Optional[Precision] = None,
    decimal_places: Optional[int] = None,
) -> ComplexVector:
    """
    Solve A x = b via LU: apply the permutation to b, forward-substitute
    L y = Pb, back-substitute U x = y. With decimal_places set, the
    factorization and both substitutions are rounded to that many places.

    Raises:
        DimensionMismatchError: If A is not square or b has the wrong size
        SingularMatrixError: If a diagonal entry of U is numerically zero
    """
    if not isinstance(b, ComplexVector):
        b = ComplexVector(b)

    require_square(a.rows, a.cols, "Linear solve")
    if b.size != a.rows:
        raise DimensionMismatchError(
            f"Linear solve: {a.rows}x{a.cols} system with right-hand side of size {b.size}"
        )

    n = a.rows
    lu = a.lu_decomposition(precision, decimal_places)
    lower, upper = lu.lower.entries, lu.upper.entries

    y: list[ComplexNumber] = []
    for r in range(n):
        total = b[lu.permutation[r]]
        for c in range(r):
            if not lower[r][c].is_zero():
                total = total.subtract(lower[r][c].multiply(y[c]))
        if decimal_places is not None:
            total = total.round(decimal_places, _ROUNDING)
        y.append(total)

    x = [ComplexNumber.zero()] * n
    for r in range(n - 1, -1, -1):
        pivot = upper[r][r]
        if pivot.magnitude() < EPS_PIVOT:
            raise SingularMatrixError(f"Matrix is singular (pivot {r} is numerically zero)")
        total = y[r]
        for c in range(r + 1, n):
            if not upper[r][c].is_zero():
                total = total.subtract(upper[r][c].multiply(x[c]))
        if decimal_places is not None:
            total = total.round(decimal_places, _ROUNDING)
        x[r] = total.divide(pivot, precision)

    return ComplexVector(x)


def kronecker(a: DenseComplexMatrix, b: DenseComplexMatrix) -> DenseComplexMatrix:
    """Kronecker (tensor) product A ⊗ B."""
    return DenseComplexMatrix(
        [
            a.get(ra, ca).multiply(b.get(rb, cb))
            for ca in range(a.cols)
            for cb in range(b.cols)
        ]
        for ra in range(a.rows)
        for rb in range(b.rows)
    )


def outer_product(u: ComplexVector, v: ComplexVector) -> DenseComplexMatrix:
    """u vᵀ (no conjugation)."""
    return DenseComplexMatrix([ui.multiply(vj) for vj in v] for ui in u)
