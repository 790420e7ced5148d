"""
TimeEvolution — Schrödinger Evolution under a Time-Independent Hamiltonian

i d|ψ>/dt = H|ψ>   (ħ = 1)

Methods:
- exact: |ψ(t)> = U(t)|ψ(0)>, U(t) = P diag(e^{-iλt}) P⁻¹
- euler: ψ ← ψ - i H ψ h, renormalized every step
- rk4: classical fourth-order Runge-Kutta on f(ψ) = -i H ψ
- crank-nicolson: ψ ← (I + iHh/2)⁻¹ (I - iHh/2) ψ

CRITICAL INVARIANTS:
1. Initial states are always renormalized (zero state is a DomainError)
2. Stepping methods take ceil(|t| / dt) steps of size t / steps, so the final
   time is exactly t; t = 0 takes no steps
3. The eigendecomposition is computed lazily, at most once per instance
4. States are rounded to state_decimal_places after every step
"""

import cmath
import logging
import math
from typing import NamedTuple, Optional, Sequence, Union

from quantum_core.core.domain.configs import EvolutionConfig, EvolutionMethod, SolverConfig
from quantum_core.core.domain.results import (
    EnergyConservationReport,
    EnergyEigenbasis,
    EvolutionResult,
    GroundState,
    Propagator,
)
from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexLike, ComplexNumber
from quantum_core.core.math.integrity import integrity_hash
from quantum_core.core.math.numerical_safeguards import (
    EPS_NORM,
    EPS_STRUCTURE,
    DimensionMismatchError,
    DomainError,
    require_square,
    validate_finite,
)
from quantum_core.core.math.precision import Precision, RoundingMode
from quantum_core.schrodinger.eigen_solver import EigenSolver

logger = logging.getLogger("QuantumCore.TimeEvolution")

HBAR = 1.0

# U U^H deviating from I beyond this is reported as non-unitary
UNITARITY_TOLERANCE = 1e-8

# Step ratios |t| / dt are rounded to this many places before ceil()
STEP_RATIO_PLACES = 9

_ROUNDING = RoundingMode.ROUND_HALF_EVEN

StateLike = Union[ComplexVector, Sequence[ComplexLike]]


class _SpectralCache(NamedTuple):
    eigenvalues: tuple[ComplexNumber, ...]
    eigenvectors: tuple[ComplexVector, ...]
    p: DenseComplexMatrix
    p_inverse: DenseComplexMatrix


class TimeEvolution:
    """
    Evolves quantum states under a fixed Hamiltonian.

    Examples:
        >>> evolution = TimeEvolution(DenseComplexMatrix.diagonal([1, 2]))
        >>> result = evolution.evolve([1, 0], 1.0)
        >>> round(result.probability, 9)
        1.0
    """

    def __init__(
        self,
        hamiltonian: DenseComplexMatrix,
        config: Optional[EvolutionConfig] = None,
        solver_config: Optional[SolverConfig] = None,
    ):
        if not isinstance(hamiltonian, DenseComplexMatrix):
            hamiltonian = DenseComplexMatrix(hamiltonian)
        require_square(hamiltonian.rows, hamiltonian.cols, "TimeEvolution")

        self._hamiltonian = hamiltonian
        self._config = config or EvolutionConfig()
        self._solver_config = solver_config or SolverConfig()
        self._places = self._config.state_decimal_places
        self._precision = Precision(
            digits=self._places + 4,
            rounding_mode=_ROUNDING,
            native_division=False,
        )
        self._spectral: Optional[_SpectralCache] = None

        if not hamiltonian.is_hermitian(EPS_STRUCTURE):
            logger.warning("Hamiltonian is not Hermitian; evolution will not conserve probability")

        self._integrity_hash = self._compute_hash()

    # -------------------------------------------------------------------------
    # Properties & integrity
    # -------------------------------------------------------------------------

    @property
    def hamiltonian(self) -> DenseComplexMatrix:
        return self._hamiltonian

    @property
    def config(self) -> EvolutionConfig:
        return self._config

    @property
    def size(self) -> int:
        return self._hamiltonian.rows

    @property
    def integrity_hash(self) -> str:
        return self._integrity_hash

    def _compute_hash(self) -> str:
        return integrity_hash(
            {
                "hamiltonian": self._hamiltonian,
                "config": self._config.model_dump(mode="json"),
                "solver_config": self._solver_config.model_dump(mode="json"),
            }
        )

    def verify_hash(self) -> bool:
        return self._compute_hash() == self._integrity_hash

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _round(self, state: ComplexVector) -> ComplexVector:
        return state.round(self._places, _ROUNDING)

    def _prepare_state(self, state: StateLike) -> ComplexVector:
        """
        Coerce, size-check and normalize a state vector.

        Raises:
            DimensionMismatchError: If the size differs from the Hamiltonian's
            DomainError: If the state is (numerically) zero
        """
        if not isinstance(state, ComplexVector):
            state = ComplexVector(state)

        if state.size != self.size:
            raise DimensionMismatchError(
                f"State of size {state.size} does not match {self.size}x{self.size} Hamiltonian"
            )
        if state.norm() < EPS_NORM:
            raise DomainError("Cannot evolve a zero state")

        return self._round(state.normalize())

    def _spectrum(self) -> _SpectralCache:
        if self._spectral is None:
            solver = EigenSolver(self._hamiltonian, self._solver_config)
            result = solver.solve()
            p = DenseComplexMatrix.from_columns(result.eigenvectors)
            self._spectral = _SpectralCache(
                eigenvalues=result.eigenvalues,
                eigenvectors=result.eigenvectors,
                p=p,
                p_inverse=p.inverse(self._precision, self._precision.digits).round(
                    self._places, _ROUNDING
                ),
            )
            logger.debug("Cached eigendecomposition of %dx%d Hamiltonian", self.size, self.size)
        return self._spectral

    def _energy(self, state: ComplexVector) -> ComplexNumber:
        """<ψ|H|ψ> / <ψ|ψ>."""
        numerator = state.inner(self._hamiltonian.multiply_vector(state))
        return numerator.divide(state.inner(state), self._precision).round(self._places, _ROUNDING)

    @staticmethod
    def _probability(state: ComplexVector) -> float:
        return math.fsum(e.abs_squared().to_number() for e in state)

    def _step_count(self, t: float) -> int:
        if t == 0:
            return 0

        ratio = round(abs(t) / self._config.time_step, STEP_RATIO_PLACES)
        steps = max(math.ceil(ratio), 1)

        if steps > self._config.max_steps:
            raise DomainError(
                f"Evolution to t={t} needs {steps} steps, exceeding max_steps={self._config.max_steps}"
            )
        return steps

    def _derivative(self, state: ComplexVector) -> ComplexVector:
        """f(ψ) = -i H ψ."""
        return self._hamiltonian.multiply_vector(state).scale(ComplexNumber(0, -1))

    # -------------------------------------------------------------------------
    # Propagator
    # -------------------------------------------------------------------------

    def compute_propagator(self, t: float) -> Propagator:
        """
        U(t) = P diag(e^{-iλt}) P⁻¹.

        Unitarity is checked diagnostically; violations are logged, never raised.
        """
        validate_finite(t, "Propagator time")
        spectral = self._spectrum()

        phases = [
            ComplexNumber.from_complex(cmath.exp(-1j * complex(value) * t / HBAR))
            for value in spectral.eigenvalues
        ]
        scaled = DenseComplexMatrix(
            [entry.multiply(phases[c]) for c, entry in enumerate(row)]
            for row in spectral.p.entries
        )
        matrix = scaled.multiply(spectral.p_inverse).round(self._places, _ROUNDING)

        is_unitary = matrix.is_unitary(UNITARITY_TOLERANCE)
        if not is_unitary:
            logger.warning("Propagator at t=%s is not unitary", t)

        return Propagator(matrix=matrix, time=t, is_unitary=is_unitary)

    # -------------------------------------------------------------------------
    # Evolution
    # -------------------------------------------------------------------------

    def evolve(self, initial_state: StateLike, t: float) -> EvolutionResult:
        """
        Evolve a state to time t with the configured method.

        Raises:
            DimensionMismatchError: If the state size is wrong
            DomainError: For a zero state, non-finite t, or more than
                max_steps steps
        """
        validate_finite(t, "Evolution time")
        method = self._config.method
        state = self._prepare_state(initial_state)

        logger.info("Evolving %d-dim state to t=%s with %s", self.size, t, method.value)

        if method is EvolutionMethod.EXACT:
            state = self._round(self.compute_propagator(t).matrix.multiply_vector(state))
            steps = 1
        else:
            steps = self._step_count(t)
            if steps:
                state = self._step(state, t / steps, steps, method)

        return EvolutionResult(
            final_state=state,
            time=t,
            steps=steps,
            energy=self._energy(state),
            probability=self._probability(state),
            method=method,
        )

    def _step(
        self, state: ComplexVector, h: float, steps: int, method: EvolutionMethod
    ) -> ComplexVector:
        if method is EvolutionMethod.EULER:
            factor = ComplexNumber(0, -h)
            for _ in range(steps):
                update = self._hamiltonian.multiply_vector(state).scale(factor)
                state = self._round(state.add(update).normalize())
            return state

        if method is EvolutionMethod.RK4:
            half = ComplexNumber(h / 2)
            full = ComplexNumber(h)
            sixth = ComplexNumber(h / 6)
            for _ in range(steps):
                k1 = self._derivative(state)
                k2 = self._derivative(state.add(k1.scale(half)))
                k3 = self._derivative(state.add(k2.scale(half)))
                k4 = self._derivative(state.add(k3.scale(full)))
                increment = k1.add(k2.scale(2)).add(k3.scale(2)).add(k4)
                state = self._round(state.add(increment.scale(sixth)))
            return state

        # Crank-Nicolson: (I + iHh/2)⁻¹ (I - iHh/2), inverted once
        identity = DenseComplexMatrix.identity(self.size)
        generator = self._hamiltonian.scale(ComplexNumber(0, h / 2))
        implicit = identity.add(generator).inverse(self._precision, self._precision.digits)
        transfer = implicit.multiply(identity.subtract(generator)).round(self._places, _ROUNDING)

        for _ in range(steps):
            state = self._round(transfer.multiply_vector(state))
        return state

    # -------------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------------

    def expectation_value(
        self, state: StateLike, observable: DenseComplexMatrix, t: float
    ) -> ComplexNumber:
        """<ψ(t)|O|ψ(t)> for the normalized evolved state."""
        if not isinstance(observable, DenseComplexMatrix):
            observable = DenseComplexMatrix(observable)
        if observable.shape != self._hamiltonian.shape:
            raise DimensionMismatchError(
                f"Observable {observable.rows}x{observable.cols} does not match "
                f"{self.size}x{self.size} Hamiltonian"
            )

        evolved = self.evolve(state, t).final_state
        value = evolved.inner(observable.multiply_vector(evolved))
        return value.divide(evolved.inner(evolved), self._precision).round(self._places, _ROUNDING)

    def probability_amplitude(self, initial: StateLike, final: StateLike, t: float) -> ComplexNumber:
        """<final|ψ(t)> with ψ(0) = initial (both normalized)."""
        target = self._prepare_state(final)
        evolved = self.evolve(initial, t).final_state
        return target.inner(evolved).round(self._places, _ROUNDING)

    def transition_probability(self, initial: StateLike, final: StateLike, t: float) -> float:
        return self.probability_amplitude(initial, final, t).abs_squared().to_number()

    def solve_time_independent(self) -> EnergyEigenbasis:
        """Stationary states H|n> = E_n|n>, ordered by energy."""
        spectral = self._spectrum()
        return EnergyEigenbasis(
            energies=[value.real.to_number() for value in spectral.eigenvalues],
            states=spectral.eigenvectors,
        )

    def ground_state(self) -> GroundState:
        spectral = self._spectrum()
        index = min(
            range(len(spectral.eigenvalues)),
            key=lambda k: spectral.eigenvalues[k].real.to_number(),
        )
        return GroundState(
            energy=spectral.eigenvalues[index].real.to_number(),
            state=spectral.eigenvectors[index],
        )

    def energy_spectrum(self) -> list[float]:
        return sorted(value.real.to_number() for value in self._spectrum().eigenvalues)

    def check_energy_conservation(
        self, state: StateLike, times: Sequence[float]
    ) -> EnergyConservationReport:
        """
        Compare Re<H> at each time against t = 0.

        Conserved iff the largest deviation is below config.tolerance.
        """
        initial_energy = self._energy(self._prepare_state(state)).real.to_number()

        max_deviation = 0.0
        for t in times:
            deviation = abs(self.evolve(state, t).energy.real.to_number() - initial_energy)
            max_deviation = max(max_deviation, deviation)

        return EnergyConservationReport(
            conserved=max_deviation < self._config.tolerance,
            max_deviation=max_deviation,
            initial_energy=initial_energy,
            times=list(times),
        )
