from .config import settings, init_settings
from .exceptions import *
from .aaguid import AaguidEntry, AaguidRegistry, aaguid_registry, get_aaguid, get_aaguid_registry
from .asn1 import decode_der_ecdsa_signature
from .attestation import AttestationObject, parse_attestation_object
from .authenticator_data import parse_authenticator_data, parse_authenticator_data_flags
from .cose import COSE_ALGORITHMS, CoseAlgorithm, CredentialPublicKey, KeyAlgorithm, decode_cose_key
from .credential import AuthnPublicKeyCredential, from_json, is_assertion, is_attestation
from .options import PUB_KEY_CRED_PARAMS, credentials
from .verification import (
    PublicKeyCredentials,
    get_public_key,
    public_key_credential,
    verify_challenge,
    verify_rp_id_hash,
    verify_signature,
)
