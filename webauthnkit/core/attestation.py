import logging
from functools import cached_property
from typing import Any, Dict

import cbor2

from webauthnkit.core.authenticator_data import parse_authenticator_data
from webauthnkit.core.exceptions import InvalidEncodingError
from webauthnkit.core.structs import AttestationFormat, AuthenticatorData

logger = logging.getLogger(__name__)


class AttestationObject:
    """
    Decoded `response.attestationObject`.

    `att_stmt` is kept as the raw decoded map; only the "none" format needs nothing more.
    Callers that need packed/tpm/android/fido-u2f statement verification work from `att_stmt` directly.
    """

    def __init__(self, fmt: AttestationFormat, att_stmt: Dict[str, Any], raw_auth_data: bytes):
        self.fmt = fmt
        self.att_stmt = att_stmt
        self.raw_auth_data = raw_auth_data

    @cached_property
    def auth_data(self) -> AuthenticatorData:
        return parse_authenticator_data(self.raw_auth_data)

    def __repr__(self):
        return f"AttestationObject(fmt={self.fmt.value!r}, att_stmt={self.att_stmt!r})"


def parse_attestation_object(data: bytes) -> AttestationObject:
    """
    Decodes the CBOR attestation object `{fmt, attStmt, authData}`.
    """
    try:
        decoded = cbor2.loads(data)
    except cbor2.CBORDecodeError as e:
        raise InvalidEncodingError(f"Attestation object is not valid CBOR: {e}") from e

    if not isinstance(decoded, dict):
        raise InvalidEncodingError("Attestation object must be a CBOR map")

    fmt = decoded.get("fmt")
    att_stmt = decoded.get("attStmt")
    auth_data = decoded.get("authData")

    try:
        fmt = AttestationFormat(fmt)
    except ValueError as e:
        raise InvalidEncodingError(f"Unsupported attestation format: {fmt}") from e
    if not isinstance(att_stmt, dict):
        raise InvalidEncodingError("Attestation object 'attStmt' must be a map")
    if not isinstance(auth_data, bytes):
        raise InvalidEncodingError("Attestation object 'authData' must be a byte string")

    logger.debug(f"Decoded attestation object with format '{fmt.value}'")
    return AttestationObject(fmt=fmt, att_stmt=att_stmt, raw_auth_data=auth_data)
