"""
EigenSolver — Eigenvalues & Eigenvectors of Small Dense Complex Matrices

Algorithms:
- Power iteration (dominant pair, Rayleigh-quotient estimate)
- Rayleigh quotient iteration (shift-and-invert with an approximate inner
  solve: 50 relaxed fixed-point sweeps, relaxation 0.1)
- Jacobi rotations (Hermitian; complex input through the real embedding
  [[Re, -Im], [Im, Re]])
- Shifted QR iteration (Wilkinson shift, deflation) with eigenvectors from
  inverse iteration

Full spectra from power/rayleigh are built by repeating the single-pair
algorithm on the orthogonal complement of the eigenvectors already found.

CRITICAL INVARIANTS:
1. Input is square and non-empty
2. Every EigenResult carries exactly n eigenvalues and n eigenvectors
3. Random start vectors derive from SolverConfig.seed (reproducible runs)
4. Non-convergence is logged at WARNING and reported via converged=False
5. Eigenvalues in EigenResult are ordered by real part, then imaginary part
"""

import cmath
import logging
import random
from typing import Optional, Sequence, Union

from quantum_core.core.domain.configs import EigenMethod, SolverConfig
from quantum_core.core.domain.results import Diagonalization, EigenPair, EigenResult
from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix, solve
from quantum_core.core.math.complex_number import ComplexLike, ComplexNumber
from quantum_core.core.math.integrity import integrity_hash
from quantum_core.core.math.jacobi import jacobi_eigen
from quantum_core.core.math.numerical_safeguards import (
    EPS_CALC,
    EPS_NORM,
    EPS_STRUCTURE,
    SingularMatrixError,
    require_square,
)
from quantum_core.core.math.precision import Precision, RoundingMode

logger = logging.getLogger("QuantumCore.EigenSolver")

# Inner fixed-point sweeps approximating (A - μI)⁻¹ in Rayleigh iteration
RAYLEIGH_INNER_SWEEPS = 50
RAYLEIGH_RELAXATION = "0.1"

# Relative perturbation applied to an eigenvalue before inverse iteration
INVERSE_ITERATION_OFFSET = 1e-10
INVERSE_ITERATION_SOLVES = 2

# Eigenvalues closer than this (relative) share an eigenspace cluster
CLUSTER_TOLERANCE = 1e-6

# Orthogonalized candidates below this norm are rejected
ACCEPTANCE_NORM = 1e-6

_ROUNDING = RoundingMode.ROUND_HALF_EVEN


class EigenSolver:
    """
    Eigen-decomposition of a square complex matrix.

    Examples:
        >>> solver = EigenSolver(DenseComplexMatrix.diagonal([2, 1]))
        >>> [str(z) for z in solver.get_spectrum()]
        ['1', '2']
    """

    def __init__(
        self,
        matrix: DenseComplexMatrix,
        config: Optional[SolverConfig] = None,
    ):
        if not isinstance(matrix, DenseComplexMatrix):
            matrix = DenseComplexMatrix(matrix)
        require_square(matrix.rows, matrix.cols, "EigenSolver")

        self._matrix = matrix
        self._config = config or SolverConfig()
        self._places = self._config.working_decimal_places
        self._precision = Precision(
            digits=self._places + 4,
            rounding_mode=_ROUNDING,
            native_division=False,
        )
        self._integrity_hash = self._compute_hash()

        logger.debug(
            "EigenSolver created: %dx%d, method=%s",
            matrix.rows,
            matrix.cols,
            self._config.method.value,
        )

    # -------------------------------------------------------------------------
    # Properties & integrity
    # -------------------------------------------------------------------------

    @property
    def matrix(self) -> DenseComplexMatrix:
        return self._matrix

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def size(self) -> int:
        return self._matrix.rows

    @property
    def integrity_hash(self) -> str:
        return self._integrity_hash

    def _compute_hash(self) -> str:
        return integrity_hash(
            {"matrix": self._matrix, "config": self._config.model_dump(mode="json")}
        )

    def verify_hash(self) -> bool:
        """Recompute the fingerprint of matrix + config and compare."""
        return self._compute_hash() == self._integrity_hash

    def is_hermitian(self) -> bool:
        return self._matrix.is_hermitian(EPS_STRUCTURE)

    def is_unitary(self) -> bool:
        return self._matrix.is_unitary(EPS_STRUCTURE)

    # -------------------------------------------------------------------------
    # Shared helpers
    # -------------------------------------------------------------------------

    def _round(self, vector: ComplexVector) -> ComplexVector:
        return vector.round(self._places, _ROUNDING)

    def _start_vector(self, index: int) -> ComplexVector:
        """Seeded pseudo-random real start vector (6 decimal places)."""
        rng = random.Random(f"{self._config.seed}:{index}")
        return ComplexVector(round(rng.uniform(-1.0, 1.0), 6) for _ in range(self.size))

    def _rayleigh_quotient(self, vector: ComplexVector) -> ComplexNumber:
        """<v|A v> / <v|v>."""
        numerator = vector.inner(self._matrix.multiply_vector(vector))
        denominator = vector.inner(vector)
        return numerator.divide(denominator, self._precision).round(self._places, _ROUNDING)

    @staticmethod
    def _project_out(vector: ComplexVector, basis: Sequence[ComplexVector]) -> ComplexVector:
        """Remove components along an orthonormal basis."""
        for q in basis:
            overlap = q.inner(vector)
            if not overlap.is_zero():
                vector = vector.subtract(q.scale(overlap))
        return vector

    def _complement_start(self, index: int, basis: Sequence[ComplexVector]) -> ComplexVector:
        """Seeded start vector restricted to the orthogonal complement of basis."""
        candidates = [self._start_vector(index)] + [
            ComplexVector.unit(self.size, k) for k in range(self.size)
        ]
        for candidate in candidates:
            projected = self._project_out(candidate, basis)
            if projected.norm() > ACCEPTANCE_NORM:
                return self._round(projected.normalize())
        raise SingularMatrixError("No start vector left in the orthogonal complement")

    def _canonical_phase(self, vector: ComplexVector) -> ComplexVector:
        """Rotate the global phase so the largest component is real and positive."""
        values = vector.to_list()
        largest = max(abs(v) for v in values)
        pivot = next(v for v in values if abs(v) >= largest * (1.0 - 1e-9))
        if abs(pivot.imag) <= EPS_CALC * largest and pivot.real > 0:
            return self._round(vector)
        phase = ComplexNumber.from_complex(pivot.conjugate() / abs(pivot))
        return self._round(vector.scale(phase))

    @staticmethod
    def _direction_change(previous: ComplexVector, current: ComplexVector) -> float:
        """1 - |<previous|current>| for unit vectors (0 when parallel up to phase)."""
        return abs(1.0 - abs(complex(previous.inner(current))))

    def _condition_number(self, eigenvalues: Sequence[ComplexNumber]) -> Optional[float]:
        magnitudes = [z.magnitude() for z in eigenvalues if z.magnitude() > EPS_CALC]
        if not magnitudes:
            return None
        return max(max(magnitudes) / min(magnitudes), 1.0)

    def _build_result(
        self,
        eigenvalues: Sequence[ComplexNumber],
        eigenvectors: Sequence[ComplexVector],
        method: EigenMethod,
        iterations: int,
        converged: bool,
    ) -> EigenResult:
        order = sorted(
            range(len(eigenvalues)),
            key=lambda k: (eigenvalues[k].real.to_number(), eigenvalues[k].imag.to_number()),
        )
        values = [eigenvalues[k].round(self._places, _ROUNDING) for k in order]
        return EigenResult(
            eigenvalues=values,
            eigenvectors=[self._canonical_phase(eigenvectors[k]) for k in order],
            is_hermitian=self.is_hermitian(),
            is_unitary=self.is_unitary(),
            condition_number=self._condition_number(values),
            method=method,
            iterations=iterations,
            converged=converged,
        )

    # -------------------------------------------------------------------------
    # Power iteration
    # -------------------------------------------------------------------------

    def power_iteration(self) -> EigenPair:
        """
        Dominant eigenpair by power iteration.

        The iterate is renormalized every step; the eigenvalue estimate is the
        Rayleigh quotient. Converged when successive estimates and directions
        agree within tolerance.
        """
        return self._power_pair(self._round(self._start_vector(0).normalize()), ())

    def _power_pair(self, vector: ComplexVector, exclude: Sequence[ComplexVector]) -> EigenPair:
        tolerance = self._config.tolerance
        estimate = self._rayleigh_quotient(vector)
        converged = False
        iterations = 0

        for iterations in range(1, self._config.max_iterations + 1):
            image = self._project_out(self._matrix.multiply_vector(vector), exclude)

            if image.norm() < EPS_NORM:
                # vector lies in the null space of A (restricted to the complement)
                estimate = ComplexNumber.zero()
                converged = True
                break

            updated = self._round(image.normalize())
            refined = self._rayleigh_quotient(updated)

            value_change = abs(complex(refined) - complex(estimate))
            direction_change = self._direction_change(vector, updated)
            vector, estimate = updated, refined

            if value_change <= tolerance and direction_change <= tolerance:
                converged = True
                break

        if not converged:
            logger.warning(
                "Power iteration did not converge in %d iterations (estimate %s)",
                self._config.max_iterations,
                estimate,
            )

        return EigenPair(
            eigenvalue=estimate,
            eigenvector=vector,
            iterations=iterations,
            converged=converged,
        )

    # -------------------------------------------------------------------------
    # Rayleigh quotient iteration
    # -------------------------------------------------------------------------

    def rayleigh_iteration(
        self,
        initial_guess: Optional[ComplexLike] = None,
        start_vector: Optional[Union[ComplexVector, Sequence[ComplexLike]]] = None,
    ) -> EigenPair:
        """
        Rayleigh quotient iteration with an approximate shift-and-invert step.

        initial_guess is the first shift μ (default: the Rayleigh quotient of
        the start vector); start_vector defaults to the seeded random vector.
        The inner system (A - μI) w = v is not solved exactly: it is
        approximated by RAYLEIGH_INNER_SWEEPS relaxed fixed-point sweeps
        w ← w + 0.1 (v - (A - μI) w). Those sweeps favour eigenvalues at or
        below μ, so a shift just below the wanted eigenvalue selects it.
        """
        if start_vector is None:
            start = self._start_vector(0)
        elif isinstance(start_vector, ComplexVector):
            start = start_vector
        else:
            start = ComplexVector(start_vector)

        shift = None
        if initial_guess is not None:
            shift = ComplexNumber.coerce(initial_guess).round(self._places, _ROUNDING)

        return self._rayleigh_pair(self._round(start.normalize()), (), shift)

    def _relaxed_inverse_step(self, vector: ComplexVector, shift: ComplexNumber) -> ComplexVector:
        relaxation = ComplexNumber(RAYLEIGH_RELAXATION)
        iterate = vector
        for _ in range(RAYLEIGH_INNER_SWEEPS):
            shifted = self._matrix.multiply_vector(iterate).subtract(iterate.scale(shift))
            iterate = self._round(iterate.add(vector.subtract(shifted).scale(relaxation)))
        return iterate

    def _rayleigh_pair(
        self,
        vector: ComplexVector,
        exclude: Sequence[ComplexVector],
        shift: Optional[ComplexNumber] = None,
    ) -> EigenPair:
        tolerance = self._config.tolerance
        if shift is None:
            shift = self._rayleigh_quotient(vector)
        converged = False
        iterations = 0

        for iterations in range(1, self._config.max_iterations + 1):
            image = self._project_out(self._relaxed_inverse_step(vector, shift), exclude)

            if image.norm() < EPS_NORM:
                converged = True
                break

            updated = self._round(image.normalize())
            refined = self._rayleigh_quotient(updated)

            value_change = abs(complex(refined) - complex(shift))
            direction_change = self._direction_change(vector, updated)
            vector, shift = updated, refined

            if value_change <= tolerance and direction_change <= tolerance:
                converged = True
                break

        if not converged:
            logger.warning(
                "Rayleigh iteration did not converge in %d iterations (estimate %s)",
                self._config.max_iterations,
                shift,
            )

        return EigenPair(
            eigenvalue=shift,
            eigenvector=vector,
            iterations=iterations,
            converged=converged,
        )

    # -------------------------------------------------------------------------
    # Jacobi
    # -------------------------------------------------------------------------

    def jacobi_eigen(self) -> EigenResult:
        """
        Hermitian eigen-decomposition by Jacobi rotations.

        Real symmetric input is rotated directly. Complex Hermitian input H
        goes through the 2n x 2n real embedding [[Re H, -Im H], [Im H, Re H]],
        whose spectrum is H's with every eigenvalue doubled; one complex
        eigenvector x + iy is kept per eigenvalue pair. Non-Hermitian input
        is replaced by (A + A^H) / 2.
        """
        n = self.size
        grid = self._matrix.to_complex_rows()

        if not self.is_hermitian():
            logger.warning("Jacobi method applied to non-Hermitian matrix; using (A + A^H)/2")
            grid = [[(grid[r][c] + grid[c][r].conjugate()) / 2 for c in range(n)] for r in range(n)]

        real_only = all(abs(grid[r][c].imag) <= EPS_STRUCTURE for r in range(n) for c in range(n))

        if real_only:
            decomposition = jacobi_eigen(
                [[grid[r][c].real for c in range(n)] for r in range(n)],
                tolerance=self._config.tolerance,
                max_iterations=self._config.max_iterations,
            )
            eigenvalues = decomposition.eigenvalues
            eigenvectors = [[complex(x) for x in v] for v in decomposition.eigenvectors]
        else:
            embedding = [
                [grid[r][c].real for c in range(n)] + [-grid[r][c].imag for c in range(n)]
                for r in range(n)
            ] + [
                [grid[r][c].imag for c in range(n)] + [grid[r][c].real for c in range(n)]
                for r in range(n)
            ]
            decomposition = jacobi_eigen(
                embedding,
                tolerance=self._config.tolerance,
                max_iterations=self._config.max_iterations,
            )
            eigenvalues, eigenvectors = self._select_embedded_pairs(
                decomposition.eigenvalues, decomposition.eigenvectors, n
            )

        if not decomposition.converged:
            logger.warning(
                "Jacobi did not converge in %d rotations (off-diagonal %.3e)",
                decomposition.iterations,
                decomposition.off_diagonal,
            )

        return self._build_result(
            [ComplexNumber(value) for value in eigenvalues],
            [ComplexVector(ComplexNumber.from_complex(x) for x in v) for v in eigenvectors],
            EigenMethod.JACOBI,
            decomposition.iterations,
            decomposition.converged,
        )

    @staticmethod
    def _select_embedded_pairs(
        values: Sequence[float], vectors: Sequence[Sequence[float]], n: int
    ) -> tuple[list[float], list[list[complex]]]:
        """Keep n mutually orthogonal complex eigenvectors x + iy from the 2n embedded ones."""
        order = sorted(range(len(values)), key=lambda k: values[k])
        accepted_values: list[float] = []
        accepted_vectors: list[list[complex]] = []

        for k in order:
            candidate = [complex(vectors[k][r], vectors[k][r + n]) for r in range(n)]
            for q in accepted_vectors:
                overlap = sum(a.conjugate() * b for a, b in zip(q, candidate))
                candidate = [b - overlap * a for a, b in zip(q, candidate)]

            norm = sum(abs(x) ** 2 for x in candidate) ** 0.5
            if norm > ACCEPTANCE_NORM:
                accepted_values.append(values[k])
                accepted_vectors.append([x / norm for x in candidate])
            if len(accepted_vectors) == n:
                break

        return accepted_values, accepted_vectors

    # -------------------------------------------------------------------------
    # QR algorithm
    # -------------------------------------------------------------------------

    @staticmethod
    def _wilkinson_shift(a: complex, b: complex, c: complex, d: complex) -> complex:
        """Eigenvalue of [[a, b], [c, d]] closest to d."""
        half_trace = (a + d) / 2
        discriminant = cmath.sqrt(((a - d) / 2) ** 2 + b * c)
        first, second = half_trace + discriminant, half_trace - discriminant
        return first if abs(first - d) <= abs(second - d) else second

    def qr_algorithm(self) -> EigenResult:
        """
        Shifted QR iteration with deflation.

        The active leading block is iterated as A - μI = QR, A ← RQ + μI with
        the Wilkinson shift μ of its trailing 2x2 block. Once the last row of
        the block left of the diagonal is negligible relative to the trailing
        diagonal entries, the bottom eigenvalue is locked and the block shrinks.
        Eigenvectors come from inverse iteration.
        """
        n = self.size
        tolerance = self._config.tolerance
        work = [list(row) for row in self._matrix.round(self._places, _ROUNDING).entries]
        eigenvalues: list[Optional[ComplexNumber]] = [None] * n

        active = n
        iterations = 0

        while active > 1 and iterations < self._config.max_iterations:
            last = active - 1
            sub_diagonal = max(work[last][c].magnitude() for c in range(last))
            scale = work[last][last].magnitude() + work[last - 1][last - 1].magnitude()

            if sub_diagonal <= tolerance * max(1.0, scale):
                eigenvalues[last] = work[last][last]
                active -= 1
                continue

            shift = ComplexNumber.from_complex(
                self._wilkinson_shift(
                    complex(work[last - 1][last - 1]),
                    complex(work[last - 1][last]),
                    complex(work[last][last - 1]),
                    complex(work[last][last]),
                )
            ).round(self._places, _ROUNDING)

            block = DenseComplexMatrix(
                [
                    work[r][c].subtract(shift) if r == c else work[r][c]
                    for c in range(active)
                ]
                for r in range(active)
            )
            q, r = block.qr_decomposition(self._places)
            updated = r.multiply(q).round(self._places, _ROUNDING).entries

            for row in range(active):
                for col in range(active):
                    value = updated[row][col]
                    work[row][col] = value.add(shift) if row == col else value

            iterations += 1

        converged = active <= 1
        if not converged:
            logger.warning(
                "QR algorithm did not converge in %d iterations (%d eigenvalues unresolved)",
                iterations,
                active,
            )
        for k in range(n):
            if eigenvalues[k] is None:
                eigenvalues[k] = work[k][k]

        eigenvectors = self._inverse_iteration_vectors(eigenvalues)

        logger.debug("QR algorithm finished after %d iterations", iterations)

        return self._build_result(eigenvalues, eigenvectors, EigenMethod.QR, iterations, converged)

    def _inverse_iteration_vectors(self, eigenvalues: Sequence[ComplexNumber]) -> list[ComplexVector]:
        """
        Eigenvector per eigenvalue by inverse iteration on A - (λ + δ)I.

        Vectors of eigenvalues in the same cluster are Gram-Schmidt
        orthogonalized against each other, retrying other seeded starts when
        a candidate collapses onto the ones already found.
        """
        vectors: list[ComplexVector] = []

        for k, value in enumerate(eigenvalues):
            cluster = [
                vectors[j]
                for j in range(k)
                if abs(complex(eigenvalues[j]) - complex(value))
                <= CLUSTER_TOLERANCE * max(1.0, value.magnitude())
            ]

            vector = None
            for attempt in range(self.size + 1):
                candidate = self._inverse_iterate(value, self._start_vector(k * (self.size + 1) + attempt))
                candidate = self._project_out(candidate, cluster)
                if candidate.norm() > ACCEPTANCE_NORM:
                    vector = self._round(candidate.normalize())
                    break

            if vector is None:
                vector = self._complement_start(k, cluster)

            vectors.append(vector)

        return vectors

    def _inverse_iterate(self, value: ComplexNumber, start: ComplexVector) -> ComplexVector:
        offset = INVERSE_ITERATION_OFFSET * (1.0 + value.magnitude())
        vector = start.normalize()

        for _ in range(INVERSE_ITERATION_SOLVES):
            while True:
                shift = value.add(offset)
                shifted = DenseComplexMatrix(
                    [
                        entry.subtract(shift) if r == c else entry
                        for c, entry in enumerate(row)
                    ]
                    for r, row in enumerate(self._matrix.entries)
                )
                try:
                    solution = solve(shifted, vector, self._precision, self._precision.digits)
                    break
                except SingularMatrixError:
                    offset *= 1000.0
            vector = self._round(solution.normalize())

        return vector

    # -------------------------------------------------------------------------
    # Full spectrum
    # -------------------------------------------------------------------------

    def _deflated_spectrum(self, method: EigenMethod) -> EigenResult:
        """
        Full spectrum by repeating power or Rayleigh iteration on the
        orthogonal complement of the eigenvectors found so far.

        Power iteration cannot separate eigenvalues of equal magnitude (e.g.
        the ±1 spectra of Pauli matrices or Hadamard): the iterate keeps
        oscillating and the reported pair is a mixture. Such pairs come back
        with converged=False and a dedicated warning; use qr or jacobi there.
        """
        grid = self._matrix.to_complex_rows()
        adjoint = self._matrix.conjugate_transpose().to_complex_rows()
        n = self.size
        normal = all(
            abs(
                sum(grid[r][k] * adjoint[k][c] for k in range(n))
                - sum(adjoint[r][k] * grid[k][c] for k in range(n))
            )
            <= EPS_STRUCTURE
            for r in range(n)
            for c in range(n)
        )
        if not normal:
            logger.warning(
                "Matrix is not normal; %s deflation on orthogonal complements is approximate",
                method.value,
            )

        basis: list[ComplexVector] = []
        eigenvalues: list[ComplexNumber] = []
        iterations = 0
        converged = True

        for k in range(n):
            start = self._complement_start(k, basis)
            if method is EigenMethod.POWER:
                pair = self._power_pair(start, basis)
                if not pair.converged:
                    logger.warning(
                        "Power iteration could not isolate eigenpair %d; eigenvalues of "
                        "equal magnitude cannot be separated by deflated power iteration "
                        "(use qr or jacobi)",
                        k,
                    )
            else:
                pair = self._rayleigh_pair(start, basis)

            eigenvalues.append(pair.eigenvalue)
            iterations += pair.iterations
            converged = converged and pair.converged

            residual = self._project_out(pair.eigenvector, basis)
            if residual.norm() > ACCEPTANCE_NORM:
                basis.append(self._round(residual.normalize()))
            else:
                basis.append(self._complement_start(k, basis))

        return self._build_result(eigenvalues, basis, method, iterations, converged)

    def solve(self) -> EigenResult:
        """Full eigen-decomposition with the configured method."""
        method = self._config.method
        logger.info("Solving %dx%d eigenproblem with %s", self.size, self.size, method.value)

        if method is EigenMethod.QR:
            return self.qr_algorithm()
        if method is EigenMethod.JACOBI:
            return self.jacobi_eigen()
        return self._deflated_spectrum(method)

    # -------------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------------

    def get_spectrum(self) -> list[ComplexNumber]:
        """Eigenvalues sorted by real part, then imaginary part."""
        return list(self.solve().eigenvalues)

    def spectral_radius(self) -> float:
        return max(z.magnitude() for z in self.solve().eigenvalues)

    def is_positive_definite(self) -> bool:
        """Hermitian with every eigenvalue strictly above tolerance."""
        if not self.is_hermitian():
            return False
        return all(z.real.to_number() > self._config.tolerance for z in self.solve().eigenvalues)

    def diagonalize(self) -> Diagonalization:
        """
        A = P D P⁻¹ with P's columns the eigenvectors.

        Raises:
            SingularMatrixError: If the eigenvectors are linearly dependent
                (defective matrix)
        """
        result = self.solve()
        p = DenseComplexMatrix.from_columns(result.eigenvectors)
        return Diagonalization(
            p=p,
            d=DenseComplexMatrix.diagonal(result.eigenvalues),
            p_inverse=p.inverse(self._precision, self._precision.digits).round(
                self._places, _ROUNDING
            ),
        )
