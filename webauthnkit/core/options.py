"""
Serialization of `PublicKeyCredentialCreationOptions` / `PublicKeyCredentialRequestOptions`
into the JSON form consumed by `PublicKeyCredential.parseCreationOptionsFromJSON()` and
`PublicKeyCredential.parseRequestOptionsFromJSON()` in the browser.
"""
import logging
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel

from webauthnkit.core.config import settings
from webauthnkit.core.encoding import encoding_utils
from webauthnkit.core.exceptions import InvalidOptionsError

logger = logging.getLogger(__name__)

# Covers all current devices; order is the RP's preference.
PUB_KEY_CRED_PARAMS: List[Dict[str, Any]] = [
    {"type": "public-key", "alg": -8},  # Ed25519
    {"type": "public-key", "alg": -7},  # ECDSA P-256
    {"type": "public-key", "alg": -257},  # RSASSA-PKCS1-v1_5 SHA-256
]


def options_to_json(value: Any) -> Any:
    """
    Converts bytes to base64url (no padding) and drops None values, recursively.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return encoding_utils.base64url_encode(value)
    if isinstance(value, BaseModel):
        return options_to_json(value.model_dump(by_alias=True, exclude_none=True))
    if isinstance(value, Mapping):
        return {k: options_to_json(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [options_to_json(v) for v in value]
    return value


class _PublicKeyOptions:
    type = "public-key"

    def __init__(self, options: Mapping[str, Any]):
        self._options = options

    def _public_key(self) -> Dict[str, Any]:
        public_key = self._options.get("publicKey")
        if not public_key:
            raise InvalidOptionsError("Missing options.publicKey")
        if isinstance(public_key, BaseModel):
            public_key = public_key.model_dump(by_alias=True, exclude_none=True)
        return dict(public_key)


class CredentialCreationOptions(_PublicKeyOptions):
    def to_json(self) -> Dict[str, Any]:
        public_key = self._public_key()
        if "rp" not in public_key and settings.WEBAUTHN_RP_ID:
            public_key["rp"] = {"name": settings.WEBAUTHN_RP_NAME or settings.WEBAUTHN_RP_ID,
                                "id": settings.WEBAUTHN_RP_ID}
        if "timeout" not in public_key and settings.WEBAUTHN_TIMEOUT_MS:
            public_key["timeout"] = settings.WEBAUTHN_TIMEOUT_MS
        for required in ("challenge", "rp", "user", "pubKeyCredParams"):
            if required not in public_key:
                raise InvalidOptionsError(f"Missing options.publicKey.{required}")
        return options_to_json(public_key)


class CredentialRequestOptions(_PublicKeyOptions):
    def to_json(self) -> Dict[str, Any]:
        public_key = self._public_key()
        if "rpId" not in public_key and settings.WEBAUTHN_RP_ID:
            public_key["rpId"] = settings.WEBAUTHN_RP_ID
        if "timeout" not in public_key and settings.WEBAUTHN_TIMEOUT_MS:
            public_key["timeout"] = settings.WEBAUTHN_TIMEOUT_MS
        if "challenge" not in public_key:
            raise InvalidOptionsError("Missing options.publicKey.challenge")
        return options_to_json(public_key)


class Credentials:
    """
    Server version of `navigator.credentials`: builds the options the client passes to create()/get().

    Example:
        options = credentials.create({"publicKey": {...}}).to_json()  # send to client
        # client: navigator.credentials.create({publicKey: PublicKeyCredential.parseCreationOptionsFromJSON(options)})
    """

    @staticmethod
    def create(options: Mapping[str, Any]) -> CredentialCreationOptions:
        return CredentialCreationOptions(options)

    @staticmethod
    def get(options: Mapping[str, Any]) -> CredentialRequestOptions:
        return CredentialRequestOptions(options)


credentials = Credentials()
