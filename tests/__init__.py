"""
Test suite for quantum_core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
