"""
webauthnkit
===========

A server-side library for WebAuthn (passkeys). It does not add abstractions on top of the protocol;
it turns what the browser sends into data that is convenient to work with, and verifies it.

- Parse `PublicKeyCredential.toJSON()` output into typed, lazily decoded credentials (attestation and assertion).
- Strict, bounds-checked parsing of authenticator data, CBOR attestation objects and DER ECDSA signatures.
- Signature verification for ECDSA (P-256/P-384/P-521), Ed25519, RSASSA-PKCS1-v1_5 and RSA-PSS via `cryptography`.
- RP ID hash and challenge checks with constant-time comparison.
- Passkey provider lookup by AAGUID.
- Creation/request options serialized to the JSON form the browser parses.

Challenge storage, sessions, replay-counter policy and HTTP routes are left to the application.

Example:
    from webauthnkit import public_key_credential

    cred = public_key_credential.from_json(data)
    if not public_key_credential.verify_rp_id_hash(cred, "example.com"):
        raise ValueError("invalid RP ID")
    if not public_key_credential.verify_challenge(cred, session_challenge):
        raise ValueError("invalid challenge")

    if public_key_credential.is_attestation(cred):
        save_passkey(cred.id, cred.public_key, cred.public_key_algorithm, cred.transports)
    elif public_key_credential.is_assertion(cred):
        passkey = find_passkey(cred.id)
        public_key = public_key_credential.get_public_key(passkey)
        if not public_key_credential.verify_signature(cred, public_key):
            raise ValueError("invalid signature")
"""

__version__ = "0.1.0"
__description__ = "Server-side WebAuthn credential parsing and verification"

from .core.config import settings, init_settings
from .core.aaguid import AaguidEntry, AaguidRegistry, aaguid_registry
from .core.credential import AuthnPublicKeyCredential
from .core.options import PUB_KEY_CRED_PARAMS, credentials
from .core.verification import public_key_credential

__all__ = [
    "settings",
    "init_settings",
    "public_key_credential",
    "credentials",
    "aaguid_registry",
    "AaguidEntry",
    "AaguidRegistry",
    "AuthnPublicKeyCredential",
    "PUB_KEY_CRED_PARAMS",
]
