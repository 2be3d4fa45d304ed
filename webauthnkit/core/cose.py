"""
COSE algorithm identifiers and COSE_Key decoding.

https://www.iana.org/assignments/cose/cose.xhtml#algorithms
"""
import logging
from enum import IntEnum
from typing import Optional, Union

import cbor2
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from pydantic import BaseModel, ConfigDict

from webauthnkit.core.exceptions import InvalidEncodingError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

PublicKeyTypes = Union[ec.EllipticCurvePublicKey, ed25519.Ed25519PublicKey, rsa.RSAPublicKey]


class CoseAlgorithm(IntEnum):
    ES256 = -7
    EdDSA = -8
    ES384 = -35
    ES512 = -36
    PS256 = -37
    RS256 = -257


class CoseKeyType(IntEnum):
    OKP = 1
    EC2 = 2
    RSA = 3


class KeyAlgorithm(BaseModel):
    """Verification parameters for a COSE algorithm, named after their WebCrypto counterparts."""
    model_config = ConfigDict(frozen=True)

    name: str
    named_curve: Optional[str] = None
    hash: Optional[str] = None


COSE_ALGORITHMS = {
    CoseAlgorithm.ES256: KeyAlgorithm(name="ECDSA", named_curve="P-256", hash="SHA-256"),
    CoseAlgorithm.EdDSA: KeyAlgorithm(name="Ed25519"),
    CoseAlgorithm.ES384: KeyAlgorithm(name="ECDSA", named_curve="P-384", hash="SHA-384"),
    CoseAlgorithm.ES512: KeyAlgorithm(name="ECDSA", named_curve="P-521", hash="SHA-512"),
    CoseAlgorithm.PS256: KeyAlgorithm(name="RSA-PSS", hash="SHA-256"),
    CoseAlgorithm.RS256: KeyAlgorithm(name="RSASSA-PKCS1-v1_5", hash="SHA-256"),
}

# named curve -> (cryptography curve, DER component size)
CURVES = {
    "P-256": (ec.SECP256R1, 32),
    "P-384": (ec.SECP384R1, 48),
    "P-521": (ec.SECP521R1, 66),
}

HASHES = {
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}

# COSE_Key EC2 "crv" values
_COSE_CURVES = {1: "P-256", 2: "P-384", 3: "P-521"}
_COSE_CRV_ED25519 = 6


def resolve_algorithm(alg: Optional[int]) -> KeyAlgorithm:
    """
    Maps a COSE algorithm identifier to its verification parameters.

    Raises:
        UnsupportedAlgorithmError: if the identifier is not mapped.
    """
    try:
        return COSE_ALGORITHMS[CoseAlgorithm(alg)]
    except (ValueError, KeyError) as e:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {alg}", algorithm=alg) from e


def ensure_key_matches(algorithm: KeyAlgorithm, key: PublicKeyTypes) -> None:
    """Raises InvalidEncodingError when the key type (or curve) is not the one the algorithm signs with."""
    if algorithm.name == "ECDSA":
        curve_cls, _ = CURVES[algorithm.named_curve]
        if not isinstance(key, ec.EllipticCurvePublicKey) or not isinstance(key.curve, curve_cls):
            raise InvalidEncodingError(f"Public key is not an {algorithm.named_curve} ECDSA key")
    elif algorithm.name == "Ed25519":
        if not isinstance(key, ed25519.Ed25519PublicKey):
            raise InvalidEncodingError("Public key is not an Ed25519 key")
    elif algorithm.name in ("RSASSA-PKCS1-v1_5", "RSA-PSS"):
        if not isinstance(key, rsa.RSAPublicKey):
            raise InvalidEncodingError("Public key is not an RSA key")


class CredentialPublicKey:
    """
    An imported credential public key together with the algorithm it verifies with.
    """

    def __init__(self, cose_algorithm: CoseAlgorithm, key: PublicKeyTypes):
        self.cose_algorithm = CoseAlgorithm(cose_algorithm)
        self.algorithm = resolve_algorithm(self.cose_algorithm)
        ensure_key_matches(self.algorithm, key)
        self.key = key

    def public_bytes(self) -> bytes:
        """
        Exports the key as DER SubjectPublicKeyInfo, the form `response.publicKey` uses.
        """
        return self.key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def __repr__(self):
        return f"CredentialPublicKey(cose_algorithm={self.cose_algorithm.name}, algorithm={self.algorithm.name!r})"


def _cose_bytes(cose_key: dict, label: int) -> bytes:
    value = cose_key.get(label)
    if not isinstance(value, bytes):
        raise InvalidEncodingError(f"COSE key parameter {label} must be a byte string")
    return value


def decode_cose_key(data: bytes) -> CredentialPublicKey:
    """
    Decodes a COSE_Key (as found in attestedCredentialData.credentialPublicKey).

    Supports EC2 (P-256, P-384, P-521), OKP (Ed25519) and RSA keys.
    """
    try:
        cose_key = cbor2.loads(data)
    except cbor2.CBORDecodeError as e:
        raise InvalidEncodingError(f"COSE key is not valid CBOR: {e}") from e
    if not isinstance(cose_key, dict):
        raise InvalidEncodingError("COSE key must be a CBOR map")

    key_type, alg = cose_key.get(1), cose_key.get(3)
    algorithm = resolve_algorithm(alg)

    try:
        if key_type == CoseKeyType.EC2:
            crv = _COSE_CURVES.get(cose_key.get(-1))
            if crv is None or crv != algorithm.named_curve:
                raise InvalidEncodingError(f"Unsupported EC curve/alg: {cose_key.get(-1)}/{alg}")
            curve_cls, _ = CURVES[crv]
            x, y = _cose_bytes(cose_key, -2), _cose_bytes(cose_key, -3)
            key = ec.EllipticCurvePublicNumbers(
                int.from_bytes(x, "big"), int.from_bytes(y, "big"), curve_cls()
            ).public_key()

        elif key_type == CoseKeyType.OKP:
            if cose_key.get(-1) != _COSE_CRV_ED25519:
                raise InvalidEncodingError(f"Unsupported OKP curve: {cose_key.get(-1)}")
            key = ed25519.Ed25519PublicKey.from_public_bytes(_cose_bytes(cose_key, -2))

        elif key_type == CoseKeyType.RSA:
            n, e = _cose_bytes(cose_key, -1), _cose_bytes(cose_key, -2)
            key = rsa.RSAPublicNumbers(int.from_bytes(e, "big"), int.from_bytes(n, "big")).public_key()

        else:
            raise InvalidEncodingError(f"Unsupported key type: {key_type}")
    except ValueError as e:
        raise InvalidEncodingError(f"Invalid COSE key: {e}") from e

    logger.debug(f"Decoded COSE key type {key_type} for algorithm {alg}")
    return CredentialPublicKey(CoseAlgorithm(alg), key)
