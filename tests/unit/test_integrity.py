"""
Tests for canonical payloads and SHA-256 integrity fingerprints
"""

import pytest

from quantum_core.core.domain import EigenMethod, GroundState
from quantum_core.core.math.big_number import BigNumber
from quantum_core.core.math.complex_matrix import ComplexVector, DenseComplexMatrix
from quantum_core.core.math.complex_number import ComplexNumber
from quantum_core.core.math.integrity import canonical_payload, integrity_hash


class TestCanonicalPayload:
    def test_big_number_is_canonical_string(self) -> None:
        assert canonical_payload(BigNumber("1.50")) == "1.5"
        assert canonical_payload(BigNumber("-0.000")) == "0"

    def test_complex_number(self) -> None:
        assert canonical_payload(ComplexNumber(1, "-0.5")) == {"real": "1", "imag": "-0.5"}

    def test_vector_and_matrix(self) -> None:
        assert canonical_payload(ComplexVector([1, 2])) == [
            {"real": "1", "imag": "0"},
            {"real": "2", "imag": "0"},
        ]
        assert canonical_payload(DenseComplexMatrix([[ComplexNumber(0, 1)]])) == [
            [{"real": "0", "imag": "1"}]
        ]

    def test_enum_uses_value(self) -> None:
        assert canonical_payload(EigenMethod.RAYLEIGH) == "rayleigh"

    def test_containers_are_recursive(self) -> None:
        payload = canonical_payload({1: (BigNumber(2), [ComplexNumber(3)])})
        assert payload == {"1": ["2", [{"real": "3", "imag": "0"}]]}

    def test_builtin_complex(self) -> None:
        assert canonical_payload(1.5 - 2j) == {"real": "1.5", "imag": "-2.0"}

    def test_plain_values_pass_through(self) -> None:
        assert canonical_payload(3) == 3
        assert canonical_payload(None) is None
        assert canonical_payload("text") == "text"

    def test_models_delegate_to_payload(self) -> None:
        state = GroundState(energy=-1.0, state=ComplexVector([0, 1]))
        assert canonical_payload(state) == {
            "energy": -1.0,
            "state": [{"real": "0", "imag": "0"}, {"real": "1", "imag": "0"}],
        }


class TestIntegrityHash:
    def test_sha256_hex_digest(self) -> None:
        digest = integrity_hash(BigNumber(1))
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    def test_equal_values_hash_equally(self) -> None:
        assert integrity_hash(BigNumber("1.0")) == integrity_hash(BigNumber(1))
        assert integrity_hash(ComplexVector(["0.50", 1])) == integrity_hash(ComplexVector(["0.5", 1]))

    def test_key_order_does_not_matter(self) -> None:
        assert integrity_hash({"a": 1, "b": 2}) == integrity_hash({"b": 2, "a": 1})

    @pytest.mark.parametrize(
        "left,right",
        [
            (BigNumber("1"), BigNumber("1.0000000001")),
            (ComplexNumber(1, 2), ComplexNumber(2, 1)),
            (DenseComplexMatrix([[1, 0]]), DenseComplexMatrix([[1], [0]])),
        ],
    )
    def test_different_values_hash_differently(self, left, right) -> None:
        assert integrity_hash(left) != integrity_hash(right)

    def test_hashing_does_not_mutate(self) -> None:
        state = GroundState(energy=0.5, state=ComplexVector([1]))
        before = state.to_payload()
        first = state.integrity_hash
        assert state.integrity_hash == first
        assert state.to_payload() == before
