"""Tests for algorithm identifier parsing and digest parameters."""

import dataclasses

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from jwasig import SUPPORTED_ALGORITHMS, InvalidAlgorithmError, jwa
from jwasig.algorithms import (
    DIGEST_PARAMS,
    AlgorithmFamily,
    DigestParams,
    canonical_name,
    digest_params,
    parse_algorithm,
)


class TestParseAlgorithm:
    """Test identifier validation."""

    @pytest.mark.parametrize("name", SUPPORTED_ALGORITHMS)
    def test_supported_names_resolve(self, name):
        assert jwa(name).name == name

    @pytest.mark.parametrize("name", ["hs256", "Rs384", "pS512", "es256", "NONE", "None"])
    def test_case_insensitive(self, name):
        algorithm = jwa(name)
        assert algorithm.name.lower() == name.lower()

    def test_parse_returns_family_and_bits(self):
        assert parse_algorithm("es384") == (AlgorithmFamily.ES, 384)
        assert parse_algorithm("HS512") == (AlgorithmFamily.HS, 512)
        assert parse_algorithm("none") == (AlgorithmFamily.NONE, None)

    def test_canonical_name(self):
        assert canonical_name(AlgorithmFamily.PS, 256) == "PS256"
        assert canonical_name(AlgorithmFamily.NONE, None) == "none"

    def test_supported_algorithms_list(self):
        assert len(SUPPORTED_ALGORITHMS) == 13
        assert "none" in SUPPORTED_ALGORITHMS
        assert "ES512" in SUPPORTED_ALGORITHMS

    def test_family_is_asymmetric(self):
        assert AlgorithmFamily.RS.is_asymmetric
        assert AlgorithmFamily.ES.is_asymmetric
        assert not AlgorithmFamily.HS.is_asymmetric
        assert not AlgorithmFamily.NONE.is_asymmetric


class TestInvalidAlgorithm:
    """Garbage, superstrings and partial strings must all be rejected."""

    def test_garbage(self):
        with pytest.raises(InvalidAlgorithmError, match="valid algorithm"):
            jwa("something bogus")

    @pytest.mark.parametrize("name", ["ahs256b", "hs256b", "anoneb", "none256", "rsnone", " hs256", "hs256\n"])
    def test_superstrings(self, name):
        with pytest.raises(InvalidAlgorithmError, match="valid algorithm"):
            jwa(name)

    @pytest.mark.parametrize("name", ["rs", "ps", "es", "hs", "hs25", "non"])
    def test_partial_strings(self, name):
        with pytest.raises(InvalidAlgorithmError, match="valid algorithm"):
            jwa(name)

    @pytest.mark.parametrize("name", ["hs128", "rs1024", "es521", "ed25519", ""])
    def test_unsupported_combinations(self, name):
        with pytest.raises(InvalidAlgorithmError):
            jwa(name)

    @pytest.mark.parametrize("name", [None, 256, b"HS256"])
    def test_non_string_identifier(self, name):
        with pytest.raises(InvalidAlgorithmError, match="valid algorithm"):
            jwa(name)

    def test_is_type_error(self):
        with pytest.raises(TypeError):
            jwa("rs")

    def test_message_lists_supported_algorithms(self):
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            jwa("bogus")
        assert '"HS256"' in str(exc_info.value)
        assert '"none"' in str(exc_info.value)


class TestDigestParams:
    """Test the bit depth parameter table."""

    def test_table(self):
        assert DIGEST_PARAMS[256].hash_algorithm is hashes.SHA256
        assert DIGEST_PARAMS[384].hash_name == "sha384"
        assert DIGEST_PARAMS[512].curve is ec.SECP521R1

    def test_digest_size(self):
        for bits in (256, 384, 512):
            assert digest_params(bits).digest_size == bits // 8

    def test_unknown_bits(self):
        with pytest.raises(InvalidAlgorithmError):
            digest_params(1024)

    def test_invalid_bits_rejected(self):
        with pytest.raises(ValueError, match="bits"):
            DigestParams(128, "sha256", hashes.SHA256, ec.SECP256R1)

    def test_mismatched_hash_rejected(self):
        with pytest.raises(ValueError, match="digest size"):
            DigestParams(256, "sha384", hashes.SHA384, ec.SECP256R1)

    def test_params_immutable(self):
        params = digest_params(256)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.bits = 384
