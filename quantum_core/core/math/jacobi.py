"""
Jacobi Rotation — Real Symmetric Eigendecomposition

Classical Jacobi method on native floats:
1. Pick the largest off-diagonal entry a_pq
2. Annihilate it with a plane rotation (Numerical Recipes formulation)
3. Accumulate the rotation into V, whose columns become the eigenvectors

Rotation for pivot (p, q):
    θ = (a_qq - a_pp) / (2 a_pq)
    t = sgn(θ) / (|θ| + sqrt(θ² + 1))     (sgn(0) = +1)
    c = 1 / sqrt(t² + 1),  s = t·c

CRITICAL INVARIANTS:
1. Input must be square and symmetric (within EPS_STRUCTURE)
2. V stays orthogonal (product of rotations)
3. Iteration is capped; the best estimate is returned with converged=False
"""

import math
from typing import NamedTuple, Sequence

from quantum_core.core.math.numerical_safeguards import (
    EPS_STRUCTURE,
    DomainError,
    require_square,
)


class JacobiDecomposition(NamedTuple):
    """Eigenvalues with eigenvectors[k] paired to eigenvalues[k]."""

    eigenvalues: list[float]
    eigenvectors: list[list[float]]
    iterations: int
    converged: bool
    off_diagonal: float


def _largest_off_diagonal(a: list[list[float]]) -> tuple[int, int, float]:
    n = len(a)
    best = (0, 1, 0.0) if n > 1 else (0, 0, 0.0)
    for p in range(n):
        for q in range(p + 1, n):
            if abs(a[p][q]) > best[2]:
                best = (p, q, abs(a[p][q]))
    return best


def _rotate(a: list[list[float]], v: list[list[float]], p: int, q: int) -> None:
    """Annihilate a[p][q] in place and accumulate the rotation into v."""
    n = len(a)
    apq = a[p][q]

    theta = (a[q][q] - a[p][p]) / (2.0 * apq)
    sign = 1.0 if theta >= 0.0 else -1.0
    t = sign / (abs(theta) + math.sqrt(theta * theta + 1.0))
    c = 1.0 / math.sqrt(t * t + 1.0)
    s = t * c

    a[p][p] -= t * apq
    a[q][q] += t * apq
    a[p][q] = a[q][p] = 0.0

    for k in range(n):
        if k == p or k == q:
            continue
        akp, akq = a[k][p], a[k][q]
        a[k][p] = a[p][k] = c * akp - s * akq
        a[k][q] = a[q][k] = s * akp + c * akq

    for k in range(n):
        vkp, vkq = v[k][p], v[k][q]
        v[k][p] = c * vkp - s * vkq
        v[k][q] = s * vkp + c * vkq


def jacobi_eigen(
    matrix: Sequence[Sequence[float]],
    tolerance: float = 1e-10,
    max_iterations: int = 1000,
) -> JacobiDecomposition:
    """
    Eigendecomposition of a real symmetric matrix by Jacobi rotations.

    Args:
        matrix: Square symmetric matrix of floats
        tolerance: Stop when the largest |off-diagonal| is at most this
        max_iterations: Rotation cap

    Returns:
        JacobiDecomposition (eigenvalues in diagonal order, not sorted)

    Raises:
        DimensionMismatchError: If matrix is not square
        DomainError: If matrix is not symmetric

    Examples:
        >>> result = jacobi_eigen([[2.0, 1.0], [1.0, 2.0]])
        >>> sorted(round(x, 10) for x in result.eigenvalues)
        [1.0, 3.0]
    """
    n = len(matrix)
    for row in matrix:
        require_square(n, len(row), "Jacobi eigendecomposition")

    a = [[float(x) for x in row] for row in matrix]

    for p in range(n):
        for q in range(p + 1, n):
            if abs(a[p][q] - a[q][p]) > EPS_STRUCTURE * max(1.0, abs(a[p][q])):
                raise DomainError(f"Jacobi requires a symmetric matrix (entry {p},{q} differs)")

    v = [[1.0 if r == c else 0.0 for c in range(n)] for r in range(n)]

    iterations = 0
    converged = False
    off_diagonal = 0.0

    while True:
        p, q, off_diagonal = _largest_off_diagonal(a)
        if off_diagonal <= tolerance:
            converged = True
            break
        if iterations >= max_iterations:
            break
        _rotate(a, v, p, q)
        iterations += 1

    eigenvalues = [a[k][k] for k in range(n)]
    eigenvectors = [[v[r][k] for r in range(n)] for k in range(n)]

    return JacobiDecomposition(
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors,
        iterations=iterations,
        converged=converged,
        off_diagonal=off_diagonal,
    )
