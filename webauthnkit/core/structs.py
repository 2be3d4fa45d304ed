from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CeremonyType(str, Enum):
    CREATE = "webauthn.create"
    GET = "webauthn.get"


class AttestationFormat(str, Enum):
    PACKED = "packed"
    TPM = "tpm"
    ANDROID_KEY = "android-key"
    ANDROID_SAFETYNET = "android-safetynet"
    FIDO_U2F = "fido-u2f"
    NONE = "none"


class AuthenticatorAttachment(str, Enum):
    PLATFORM = "platform"
    CROSS_PLATFORM = "cross-platform"


# --- Client data ---
class ClientData(BaseModel):
    """Decoded `clientDataJSON`. Keys the browser adds beyond these are kept as extras."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    type: str
    challenge: str
    origin: str
    cross_origin: bool = Field(False, alias="crossOrigin")
    top_origin: Optional[str] = Field(None, alias="topOrigin")


# --- Authenticator data ---
class AuthenticatorDataFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_present: bool  # UP, bit 0
    user_verified: bool  # UV, bit 2
    backup_eligibility: bool  # BE, bit 3
    backup_state: bool  # BS, bit 4
    attested_credential_data: bool  # AT, bit 6
    extension_data: bool  # ED, bit 7


class AttestedCredentialData(BaseModel):
    model_config = ConfigDict(frozen=True)

    aaguid: bytes
    credential_id_length: int
    credential_id: bytes
    credential_public_key: bytes  # COSE_Key


class AuthenticatorData(BaseModel):
    """
    https://www.w3.org/TR/webauthn-3/#sctn-authenticator-data
    """
    model_config = ConfigDict(frozen=True)

    rp_id_hash: bytes
    flags: AuthenticatorDataFlags
    raw_flags: int
    sign_count: int
    attested_credential_data: Optional[AttestedCredentialData] = None
    extensions: Optional[bytes] = None  # raw CBOR map


# --- Wire format (PublicKeyCredential.toJSON()) ---
class AuthenticatorResponseJSON(BaseModel):
    """
    Union of the attestation and assertion response shapes; which fields are present decides the variant.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    client_data_json: str = Field(..., alias="clientDataJSON")
    authenticator_data: Optional[str] = Field(None, alias="authenticatorData")

    # Attestation (registration)
    attestation_object: Optional[str] = Field(None, alias="attestationObject")
    public_key: Optional[str] = Field(None, alias="publicKey")
    public_key_algorithm: Optional[int] = Field(None, alias="publicKeyAlgorithm")
    transports: Optional[List[str]] = None

    # Assertion (login)
    signature: Optional[str] = None
    user_handle: Optional[str] = Field(None, alias="userHandle")


class PublicKeyCredentialJSON(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    raw_id: str = Field(alias="rawId")
    type: Literal["public-key"]
    authenticator_attachment: Optional[str] = Field(None, alias="authenticatorAttachment")
    client_extension_results: dict = Field(default_factory=dict, alias="clientExtensionResults")
    response: AuthenticatorResponseJSON
