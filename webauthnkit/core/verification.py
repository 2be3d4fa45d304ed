import logging
from typing import Any, Mapping, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from webauthnkit.core.asn1 import decode_der_ecdsa_signature
from webauthnkit.core.config import settings
from webauthnkit.core.cose import CURVES, HASHES, CoseAlgorithm, CredentialPublicKey, resolve_algorithm
from webauthnkit.core.credential import AuthnPublicKeyCredential, from_json, is_assertion, is_attestation
from webauthnkit.core.encoding import encoding_utils
from webauthnkit.core.exceptions import InvalidEncodingError, UnsupportedAlgorithmError, WebAuthnError
from webauthnkit.core.structs import PublicKeyCredentialJSON

logger = logging.getLogger(__name__)


def get_public_key(cred: Any) -> CredentialPublicKey:
    """
    Imports the SubjectPublicKeyInfo `cred.public_key` for the COSE algorithm `cred.public_key_algorithm`.

    `cred` is an attestation credential, or any object (e.g. a stored passkey record) with those two attributes.

    Raises:
        UnsupportedAlgorithmError: if the algorithm identifier is not mapped.
        InvalidEncodingError: if the key is not valid SPKI or does not match the algorithm.
    """
    resolve_algorithm(cred.public_key_algorithm)
    if not cred.public_key:
        raise InvalidEncodingError("Credential has no public key")
    try:
        key = serialization.load_der_public_key(bytes(cred.public_key))
    except (ValueError, TypeError) as e:
        raise InvalidEncodingError(f"Public key is not valid SubjectPublicKeyInfo: {e}") from e
    return CredentialPublicKey(CoseAlgorithm(cred.public_key_algorithm), key)


def verify_rp_id_hash(cred: AuthnPublicKeyCredential, rp_id: Optional[str] = None) -> bool:
    """
    Checks that `authData.rpIdHash` is SHA-256 of the RP ID. Never raises.
    """
    rp_id = rp_id if rp_id is not None else settings.WEBAUTHN_RP_ID
    if not rp_id:
        logger.warning("verify_rp_id_hash called without an RP ID and WEBAUTHN_RP_ID is not set")
        return False
    try:
        rp_id_hash = cred.auth_data.rp_id_hash
    except WebAuthnError as e:
        logger.debug(f"RP ID hash check failed, authenticator data unreadable: {e}")
        return False
    return encoding_utils.timing_safe_equal(rp_id_hash, encoding_utils.sha256(rp_id))


def verify_challenge(cred: AuthnPublicKeyCredential, challenge: bytes) -> bool:
    """
    Checks that `clientData.challenge` decodes to the challenge issued for this ceremony. Never raises.
    """
    try:
        received = encoding_utils.base64url_decode(cred.client_data.challenge)
    except WebAuthnError as e:
        logger.debug(f"Challenge check failed, client data unreadable: {e}")
        return False
    return encoding_utils.timing_safe_equal(received, challenge)


def verify_signature(cred: AuthnPublicKeyCredential, public_key: CredentialPublicKey) -> bool:
    """
    Verifies the assertion signature over `authenticatorData || SHA-256(clientDataJSON)`.

    Both parts are the raw bytes received from the client, never re-serialized.

    Returns:
        False when the signature does not verify.

    Raises:
        MalformedSignatureError: for an ECDSA signature that is not valid DER.
        UnsupportedAlgorithmError: if the key's algorithm has no verifier.
    """
    signature = cred.signature
    if not signature:
        logger.debug(f"Credential {cred.id!r} carries no signature")
        return False

    signed_data = cred.raw_auth_data + encoding_utils.sha256(cred.raw_client_data)
    algorithm = public_key.algorithm
    key = public_key.key

    try:
        if algorithm.name == "ECDSA":
            _, size = CURVES[algorithm.named_curve]
            raw = decode_der_ecdsa_signature(signature, size)
            r, s = int.from_bytes(raw[:size], "big"), int.from_bytes(raw[size:], "big")
            key.verify(encode_dss_signature(r, s), signed_data, ec.ECDSA(HASHES[algorithm.hash]()))

        elif algorithm.name == "Ed25519":
            key.verify(signature, signed_data)

        elif algorithm.name == "RSASSA-PKCS1-v1_5":
            key.verify(signature, signed_data, padding.PKCS1v15(), HASHES[algorithm.hash]())

        elif algorithm.name == "RSA-PSS":
            hash_alg = HASHES[algorithm.hash]()
            key.verify(
                signature, signed_data,
                padding.PSS(mgf=padding.MGF1(hash_alg), salt_length=hash_alg.digest_size),
                hash_alg,
            )

        else:
            raise UnsupportedAlgorithmError(f"Unsupported algorithm: {algorithm.name}")
    except InvalidSignature:
        logger.debug(f"Signature verification failed for credential {cred.id!r}")
        return False

    return True


class PublicKeyCredentials:
    """
    Reverse of the browser's PublicKeyCredential API: parse what the client sent and verify it.

    Example:
        cred = public_key_credential.from_json(data)
        if not public_key_credential.verify_rp_id_hash(cred, "example.com"):
            raise ...
        if public_key_credential.is_attestation(cred):
            public_key = public_key_credential.get_public_key(cred)  # store cred.public_key, cred.public_key_algorithm
        elif public_key_credential.is_assertion(cred):
            public_key = public_key_credential.get_public_key(stored_passkey)
            public_key_credential.verify_signature(cred, public_key)
    """

    @staticmethod
    def from_json(cred: Union[Mapping[str, Any], PublicKeyCredentialJSON]) -> AuthnPublicKeyCredential:
        return from_json(cred)

    @staticmethod
    def is_attestation(cred: AuthnPublicKeyCredential) -> bool:
        return is_attestation(cred)

    @staticmethod
    def is_assertion(cred: AuthnPublicKeyCredential) -> bool:
        return is_assertion(cred)

    @staticmethod
    def get_public_key(cred: Any) -> CredentialPublicKey:
        return get_public_key(cred)

    @staticmethod
    def verify_rp_id_hash(cred: AuthnPublicKeyCredential, rp_id: Optional[str] = None) -> bool:
        return verify_rp_id_hash(cred, rp_id)

    @staticmethod
    def verify_challenge(cred: AuthnPublicKeyCredential, challenge: bytes) -> bool:
        return verify_challenge(cred, challenge)

    @staticmethod
    def verify_signature(cred: AuthnPublicKeyCredential, public_key: CredentialPublicKey) -> bool:
        return verify_signature(cred, public_key)


public_key_credential = PublicKeyCredentials()
