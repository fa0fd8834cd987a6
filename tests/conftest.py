"""Pytest configuration and shared fixtures."""

import datetime
import string

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from jwasig.algorithms import AlgorithmFamily, parse_algorithm


BIT_DEPTHS = (256, 384, 512)

CURVES = {
    256: ec.SECP256R1(),
    384: ec.SECP384R1(),
    512: ec.SECP521R1(),
}

HMAC_SECRET = "shhhhhhhhhh"
WRONG_HMAC_SECRET = "incorrect"
PASSPHRASE = "test_pass"

B64URL_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


def private_pem(key, passphrase: str | None = None) -> str:
    """Serialize a private key as PKCS#8 PEM, optionally encrypted."""
    if passphrase is None:
        encryption = serialization.NoEncryption()
    else:
        encryption = serialization.BestAvailableEncryption(passphrase.encode("utf-8"))
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        encryption,
    ).decode("ascii")


def public_pem(key) -> str:
    """Serialize the public half of a private key as SubjectPublicKeyInfo PEM."""
    return key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def self_signed_certificate(key) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "jwasig test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


def mutate(signature: str, index: int) -> str:
    """Replace one character of a signature with a different base64url character."""
    original = signature[index]
    replacement = next(c for c in B64URL_ALPHABET if c != original)
    chars = list(signature)
    chars[index] = replacement
    return "".join(chars)


@pytest.fixture(scope="session")
def rsa_keys():
    """
    RSA key material shared by the whole test session.

    Key generation is the slowest part of the suite, so it is done once.
    """
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    wrong = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    certificate = self_signed_certificate(key)
    return {
        "private_key": key,
        "wrong_private_key": wrong,
        "private": private_pem(key),
        "public": public_pem(key),
        "wrong_public": public_pem(wrong),
        "encrypted_private": private_pem(key, PASSPHRASE),
        "certificate": certificate,
        "certificate_pem": certificate.public_bytes(serialization.Encoding.PEM).decode("ascii"),
    }


@pytest.fixture(scope="session")
def ec_keys():
    """EC key material for each bit depth: P-256, P-384 and P-521."""
    keys = {}
    for bits, curve in CURVES.items():
        key = ec.generate_private_key(curve)
        wrong = ec.generate_private_key(curve)
        keys[bits] = {
            "private_key": key,
            "wrong_private_key": wrong,
            "private": private_pem(key),
            "public": public_pem(key),
            "wrong_public": public_pem(wrong),
            "encrypted_private": private_pem(key, PASSPHRASE),
        }
    return keys


@pytest.fixture(scope="session")
def keys_for(rsa_keys, ec_keys):
    """
    Return a function mapping an algorithm name to
    (signing key, verifying key, wrong verifying key).
    """

    def _keys_for(name: str):
        family, bits = parse_algorithm(name)
        if family is AlgorithmFamily.HS:
            return HMAC_SECRET, HMAC_SECRET, WRONG_HMAC_SECRET
        if family in (AlgorithmFamily.RS, AlgorithmFamily.PS):
            return rsa_keys["private"], rsa_keys["public"], rsa_keys["wrong_public"]
        if family is AlgorithmFamily.ES:
            keys = ec_keys[bits]
            return keys["private"], keys["public"], keys["wrong_public"]
        return None, None, None

    return _keys_for


@pytest.fixture(scope="session")
def key_dir(tmp_path_factory, rsa_keys, ec_keys):
    """Write the session keys to PEM files for the openssl command line."""
    path = tmp_path_factory.mktemp("keys")
    (path / "rsa-private.pem").write_text(rsa_keys["private"])
    (path / "rsa-public.pem").write_text(rsa_keys["public"])
    (path / "rsa-wrong-public.pem").write_text(rsa_keys["wrong_public"])
    for bits, keys in ec_keys.items():
        (path / f"ec{bits}-private.pem").write_text(keys["private"])
        (path / f"ec{bits}-public.pem").write_text(keys["public"])
        (path / f"ec{bits}-wrong-public.pem").write_text(keys["wrong_public"])
    return path
