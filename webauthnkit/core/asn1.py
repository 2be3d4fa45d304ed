"""
Minimal DER reader for ECDSA signatures.

WebAuthn authenticators return ECDSA signatures as the ASN.1 structure

    Ecdsa-Sig-Value ::= SEQUENCE { r INTEGER, s INTEGER }

while verifiers that work on raw curve points expect the fixed-width
concatenation r || s. This module converts the former to the latter.
"""
import logging
from typing import Tuple

from webauthnkit.core.exceptions import MalformedSignatureError

logger = logging.getLogger(__name__)

TAG_SEQUENCE = 0x30
TAG_INTEGER = 0x02

P256_COMPONENT_SIZE = 32


def _read_length(data: bytes, offset: int) -> Tuple[int, int]:
    """
    Reads a BER/DER length starting at `offset`.
    Returns the decoded length and the offset of the first content byte.
    """
    if offset >= len(data):
        raise MalformedSignatureError("Unexpected end of input while reading length")

    first = data[offset]
    if first < 0x80:
        return first, offset + 1

    num_bytes = first & 0x7F
    if num_bytes == 0 or num_bytes > 4:
        raise MalformedSignatureError(f"Unsupported length encoding 0x{first:02x}")
    if offset + 1 + num_bytes > len(data):
        raise MalformedSignatureError("Unexpected end of input while reading long-form length")

    length = int.from_bytes(data[offset + 1: offset + 1 + num_bytes], "big")
    return length, offset + 1 + num_bytes


def _normalize_integer(value: bytes, size: int) -> bytes:
    # Drop the sign byte that keeps a positive value from reading as negative.
    if len(value) > 1 and value[0] == 0x00 and not value[1] & 0x80:
        value = value[1:]
    # A value with the high bit set is read as unsigned.
    if value[0] & 0x80:
        value = b"\x00" + value

    if len(value) > size:
        excess = len(value) - size
        if any(value[:excess]):
            raise MalformedSignatureError(f"INTEGER does not fit in {size} bytes")
        value = value[excess:]

    return value.rjust(size, b"\x00")


def decode_der_ecdsa_signature(data: bytes, size: int = P256_COMPONENT_SIZE) -> bytes:
    """
    Converts a DER encoded ECDSA signature into raw `r || s`, each component exactly `size` bytes.

    Args:
        data: DER `SEQUENCE { INTEGER r, INTEGER s }`.
        size: byte length of one component (32 for P-256, 48 for P-384, 66 for P-521).

    Raises:
        MalformedSignatureError: on a wrong tag, a length that does not match the buffer,
            an integer count other than two, trailing bytes, or an integer too large for `size`.
    """
    data = bytes(data)
    if not data or data[0] != TAG_SEQUENCE:
        raise MalformedSignatureError("Input is not an ASN.1 SEQUENCE")

    seq_length, offset = _read_length(data, 1)
    seq_end = offset + seq_length
    if seq_end != len(data):
        raise MalformedSignatureError(
            f"Invalid SEQUENCE length: declared {seq_length}, available {len(data) - offset}"
        )

    elements = []
    while offset < seq_end:
        if len(elements) == 2:
            raise MalformedSignatureError("Extra data in SEQUENCE")
        if data[offset] != TAG_INTEGER:
            raise MalformedSignatureError(f"Expected INTEGER at position {offset}")

        int_length, value_start = _read_length(data, offset + 1)
        value_end = value_start + int_length
        if int_length == 0:
            raise MalformedSignatureError(f"Empty INTEGER at position {offset}")
        if value_end > seq_end:
            raise MalformedSignatureError(f"INTEGER at position {offset} runs past the end of the SEQUENCE")

        elements.append(data[value_start:value_end])
        offset = value_end

    if len(elements) != 2:
        raise MalformedSignatureError("SEQUENCE must contain exactly two integers")

    r, s = elements
    return _normalize_integer(r, size) + _normalize_integer(s, size)
