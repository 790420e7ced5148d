"""
Schrödinger solvers: eigen-decomposition, time evolution and standard operators.
"""

from quantum_core.schrodinger import operators
from quantum_core.schrodinger.eigen_solver import EigenSolver
from quantum_core.schrodinger.time_evolution import HBAR, TimeEvolution

__all__ = [
    "EigenSolver",
    "HBAR",
    "TimeEvolution",
    "operators",
]
