import base64
import binascii
import hashlib
import hmac
import json
import logging
import re
from typing import Any, Union

from webauthnkit.core.exceptions import InvalidEncodingError

logger = logging.getLogger(__name__)

_BASE64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")

BytesLike = Union[bytes, bytearray, memoryview]


class EncodingUtils:
    """
    Byte-level helpers shared by the parsers: base64url, UTF-8 JSON, hashing and constant-time comparison.
    """

    @staticmethod
    def base64url_encode(data: BytesLike) -> str:
        """
        Encodes bytes to a base64url string without padding.
        """
        return base64.urlsafe_b64encode(bytes(data)).rstrip(b'=').decode('utf-8')

    @staticmethod
    def base64url_decode(data: str) -> bytes:
        """
        Decodes a base64url string, with or without padding, to bytes.
        Characters outside the url-safe alphabet are rejected instead of skipped.
        """
        if not isinstance(data, str):
            raise InvalidEncodingError(f"Expected a base64url string, got {type(data).__name__}")
        stripped = data.rstrip('=')
        if not _BASE64URL_RE.match(stripped):
            raise InvalidEncodingError("Value is not valid base64url")
        padding = '=' * (-len(stripped) % 4)
        try:
            return base64.urlsafe_b64decode(stripped + padding)
        except (binascii.Error, ValueError) as e:
            raise InvalidEncodingError(f"Value is not valid base64url: {e}") from e

    @staticmethod
    def decode_json(data: BytesLike) -> Any:
        """
        Decodes UTF-8 encoded JSON bytes.
        """
        try:
            return json.loads(bytes(data).decode('utf-8'))
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(f"Value is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise InvalidEncodingError(f"Value is not valid JSON: {e}") from e

    @staticmethod
    def sha256(data: Union[str, BytesLike]) -> bytes:
        if isinstance(data, str):
            data = data.encode('utf-8')
        return hashlib.sha256(data).digest()

    @staticmethod
    def timing_safe_equal(a: BytesLike, b: BytesLike) -> bool:
        """
        Compares two byte strings in constant time with respect to their contents.
        """
        return hmac.compare_digest(bytes(a), bytes(b))


encoding_utils = EncodingUtils()
