"""
Server-side counterpart of the browser's `PublicKeyCredential`.

`from_json()` takes the object produced by `PublicKeyCredential.toJSON()` in the browser
and returns an `AuthnPublicKeyCredential` whose binary fields are decoded on first access.
"""
import logging
from functools import cached_property
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from webauthnkit.core.attestation import AttestationObject, parse_attestation_object
from webauthnkit.core.authenticator_data import parse_authenticator_data
from webauthnkit.core.encoding import encoding_utils
from webauthnkit.core.exceptions import InvalidEncodingError, UnknownCeremonyTypeError
from webauthnkit.core.structs import (
    AuthenticatorData,
    CeremonyType,
    ClientData,
    PublicKeyCredentialJSON,
)
from webauthnkit.core.uuid_codec import stringify

logger = logging.getLogger(__name__)

EMPTY_AAGUID = bytes(16)


class AuthnPublicKeyCredential:
    """
    A parsed credential. Every derived field is a pure function of the wire JSON and is memoized.

    Attestation (registration) fields: `attestation`, `raw_attestation`, `public_key`,
    `public_key_algorithm`, `transports`.
    Assertion (login) fields: `signature`, `user_handle`.
    Fields of the other variant are None.
    """

    def __init__(self, data: PublicKeyCredentialJSON):
        self._data = data

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def type(self) -> str:
        return self._data.type

    @property
    def authenticator_attachment(self) -> Optional[str]:
        return self._data.authenticator_attachment

    @property
    def client_extension_results(self) -> dict:
        return self._data.client_extension_results

    @cached_property
    def raw_id(self) -> bytes:
        return encoding_utils.base64url_decode(self._data.raw_id)

    # --- client data ---
    @cached_property
    def raw_client_data(self) -> bytes:
        return encoding_utils.base64url_decode(self._data.response.client_data_json)

    @cached_property
    def client_data(self) -> ClientData:
        payload = encoding_utils.decode_json(self.raw_client_data)
        try:
            return ClientData.model_validate(payload)
        except ValidationError as e:
            raise InvalidEncodingError(f"clientDataJSON is not a valid client data object: {e}") from e

    @property
    def ceremony_type(self) -> CeremonyType:
        value = self.client_data.type
        try:
            return CeremonyType(value)
        except ValueError as e:
            raise UnknownCeremonyTypeError(f"Unknown client data type: {value!r}", ceremony_type=value) from e

    # --- authenticator data ---
    @cached_property
    def raw_auth_data(self) -> bytes:
        if self._data.response.authenticator_data is not None:
            return encoding_utils.base64url_decode(self._data.response.authenticator_data)
        if self.attestation is not None:
            return self.attestation.raw_auth_data
        raise InvalidEncodingError("Response has neither authenticatorData nor attestationObject")

    @cached_property
    def auth_data(self) -> AuthenticatorData:
        return parse_authenticator_data(self.raw_auth_data)

    # --- attestation (register) ---
    @cached_property
    def raw_attestation(self) -> Optional[bytes]:
        if not self._data.response.attestation_object:
            return None
        return encoding_utils.base64url_decode(self._data.response.attestation_object)

    @cached_property
    def attestation(self) -> Optional[AttestationObject]:
        if self.raw_attestation is None:
            return None
        return parse_attestation_object(self.raw_attestation)

    @cached_property
    def public_key(self) -> Optional[bytes]:
        """SubjectPublicKeyInfo (DER) of the new credential."""
        if not self._data.response.public_key:
            return None
        return encoding_utils.base64url_decode(self._data.response.public_key)

    @property
    def public_key_algorithm(self) -> Optional[int]:
        return self._data.response.public_key_algorithm

    @property
    def transports(self) -> Optional[List[str]]:
        return self._data.response.transports

    @cached_property
    def aaguid(self) -> str:
        """AAGUID of the authenticator in uuid form; all zeros when the credential carries none."""
        attestation = self.attestation
        attested = attestation.auth_data.attested_credential_data if attestation is not None else None
        return stringify(attested.aaguid if attested is not None else EMPTY_AAGUID)

    # --- assertion (login) ---
    @cached_property
    def signature(self) -> Optional[bytes]:
        """
        | alg  | name              | format   |
        | ---: | :---------------- | -------- |
        | -7   | ECDSA P-256       | ASN.1 DER |
        | -8   | Ed25519           | raw      |
        | -257 | RSASSA-PKCS1-v1_5 | raw      |
        """
        if not self._data.response.signature:
            return None
        return encoding_utils.base64url_decode(self._data.response.signature)

    @cached_property
    def user_handle(self) -> Optional[bytes]:
        if not self._data.response.user_handle:
            return None
        return encoding_utils.base64url_decode(self._data.response.user_handle)

    def __repr__(self):
        return f"AuthnPublicKeyCredential(id={self.id!r}, type={self.type!r})"


def from_json(cred: Union[Mapping[str, Any], PublicKeyCredentialJSON]) -> AuthnPublicKeyCredential:
    """
    Parses the JSON form of a browser `PublicKeyCredential`.

    Only the shape is validated here; base64url fields are decoded lazily and raise
    InvalidEncodingError when first accessed.
    """
    if isinstance(cred, PublicKeyCredentialJSON):
        return AuthnPublicKeyCredential(cred)
    try:
        data = PublicKeyCredentialJSON.model_validate(cred)
    except ValidationError as e:
        raise InvalidEncodingError(f"Invalid PublicKeyCredential JSON: {e}") from e
    return AuthnPublicKeyCredential(data)


def is_attestation(cred: AuthnPublicKeyCredential) -> bool:
    """
    True for a registration response (`clientData.type == "webauthn.create"`).

    Raises:
        UnknownCeremonyTypeError: if the type is neither create nor get.
    """
    return cred.ceremony_type is CeremonyType.CREATE


def is_assertion(cred: AuthnPublicKeyCredential) -> bool:
    """
    True for a login response (`clientData.type == "webauthn.get"`).

    Raises:
        UnknownCeremonyTypeError: if the type is neither create nor get.
    """
    return cred.ceremony_type is CeremonyType.GET
