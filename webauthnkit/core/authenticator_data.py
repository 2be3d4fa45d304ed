import logging
from io import BytesIO
from typing import Union

import cbor2

from webauthnkit.core.exceptions import TruncatedBufferError
from webauthnkit.core.structs import AttestedCredentialData, AuthenticatorData, AuthenticatorDataFlags

logger = logging.getLogger(__name__)

RP_ID_HASH_LENGTH = 32
HEADER_LENGTH = 37  # rpIdHash (32) + flags (1) + signCount (4)
AAGUID_LENGTH = 16
CREDENTIAL_ID_LENGTH_SIZE = 2

FLAG_UP = 1 << 0
FLAG_UV = 1 << 2
FLAG_BE = 1 << 3
FLAG_BS = 1 << 4
FLAG_AT = 1 << 6
FLAG_ED = 1 << 7


def parse_authenticator_data_flags(flags: int) -> AuthenticatorDataFlags:
    """
    Unpacks the authenticator data flags byte.
    """
    return AuthenticatorDataFlags(
        user_present=bool(flags & FLAG_UP),
        user_verified=bool(flags & FLAG_UV),
        backup_eligibility=bool(flags & FLAG_BE),
        backup_state=bool(flags & FLAG_BS),
        attested_credential_data=bool(flags & FLAG_AT),
        extension_data=bool(flags & FLAG_ED),
    )


def _require(view: memoryview, end: int, what: str) -> None:
    if end > len(view):
        raise TruncatedBufferError(f"Authenticator data too short for {what}: need {end} bytes, have {len(view)}")


def _cbor_item_length(data: bytes) -> int:
    """Number of bytes taken by the first CBOR item in `data`."""
    stream = BytesIO(data)
    try:
        cbor2.CBORDecoder(stream).decode()
    except cbor2.CBORDecodeError as e:
        raise TruncatedBufferError(f"Credential public key is not a complete CBOR item: {e}") from e
    return stream.tell()


def parse_authenticator_data(data: Union[bytes, bytearray, memoryview]) -> AuthenticatorData:
    """
    Turns raw authenticator data into structured data.

    Layout (https://www.w3.org/TR/webauthn-3/#sctn-authenticator-data):

        rpIdHash(32) | flags(1) | signCount(4) | [attestedCredentialData] | [extensions]

    attestedCredentialData is `aaguid(16) | credentialIdLength(2) | credentialId | credentialPublicKey`.
    The public key has no length prefix: without extensions it runs to the end of the buffer,
    with extensions its end is found by decoding it as a single CBOR item.
    """
    view = memoryview(data)
    _require(view, HEADER_LENGTH, "the fixed header")

    rp_id_hash = bytes(view[0:RP_ID_HASH_LENGTH])
    raw_flags = view[32]
    flags = parse_authenticator_data_flags(raw_flags)
    sign_count = int.from_bytes(view[33:37], "big")

    pointer = HEADER_LENGTH
    attested_credential_data = None
    if flags.attested_credential_data:
        _require(view, pointer + AAGUID_LENGTH + CREDENTIAL_ID_LENGTH_SIZE, "attested credential data")
        aaguid = bytes(view[pointer:pointer + AAGUID_LENGTH])
        pointer += AAGUID_LENGTH

        credential_id_length = int.from_bytes(view[pointer:pointer + CREDENTIAL_ID_LENGTH_SIZE], "big")
        pointer += CREDENTIAL_ID_LENGTH_SIZE

        _require(view, pointer + credential_id_length, "the credential id")
        credential_id = bytes(view[pointer:pointer + credential_id_length])
        pointer += credential_id_length

        if flags.extension_data:
            public_key_length = _cbor_item_length(bytes(view[pointer:]))
        else:
            public_key_length = len(view) - pointer
        if public_key_length <= 0:
            raise TruncatedBufferError("Authenticator data too short for the credential public key")

        credential_public_key = bytes(view[pointer:pointer + public_key_length])
        pointer += public_key_length

        attested_credential_data = AttestedCredentialData(
            aaguid=aaguid,
            credential_id_length=credential_id_length,
            credential_id=credential_id,
            credential_public_key=credential_public_key,
        )

    extensions = None
    if flags.extension_data:
        if pointer >= len(view):
            raise TruncatedBufferError("Extension data flag is set but no extensions follow")
        extensions = bytes(view[pointer:])
        pointer = len(view)

    if pointer < len(view):
        logger.debug(f"Ignoring {len(view) - pointer} unclaimed trailing bytes in authenticator data")

    return AuthenticatorData(
        rp_id_hash=rp_id_hash,
        flags=flags,
        raw_flags=raw_flags,
        sign_count=sign_count,
        attested_credential_data=attested_credential_data,
        extensions=extensions,
    )
