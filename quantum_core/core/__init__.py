"""
Core layers of quantum_core: math primitives, domain models, contracts.
"""
