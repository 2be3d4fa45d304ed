"""
Conversion between 16-byte binary UUIDs and the canonical hyphenated hex form.

    00112233-4455-6677-8899-aabbccddeeff
"""
from typing import Union

from webauthnkit.core.exceptions import InvalidFormatError, InvalidLengthError

UUID_LENGTH = 16
UUID_STRING_LENGTH = 36

_HYPHEN_POSITIONS = (8, 13, 18, 23)
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse(uuid: str) -> bytes:
    """
    Decodes a canonical UUID string (any case) to 16 bytes.

    Raises:
        InvalidFormatError: if the string is not exactly 36 characters in the 8-4-4-4-12 pattern.
    """
    if not isinstance(uuid, str) or len(uuid) != UUID_STRING_LENGTH:
        raise InvalidFormatError(f"The uuid must be a {UUID_STRING_LENGTH} character string")

    for i, char in enumerate(uuid):
        if i in _HYPHEN_POSITIONS:
            if char != "-":
                raise InvalidFormatError(f"Expected '-' at position {i} of uuid")
        elif char not in _HEX_DIGITS:
            raise InvalidFormatError(f"Invalid hex digit {char!r} at position {i} of uuid")

    return bytes.fromhex(uuid.replace("-", ""))


def stringify(data: Union[bytes, bytearray, memoryview]) -> str:
    """
    Formats 16 bytes as a lowercase canonical UUID string.

    Raises:
        InvalidLengthError: if the input is not exactly 16 bytes.
    """
    if len(data) != UUID_LENGTH:
        raise InvalidLengthError(f"The uuid must contain {UUID_LENGTH} bytes")

    h = bytes(data).hex()
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"
