import os

os.environ["WEBAUTHNKIT_NO_ENV"] = "true"

import pytest

from webauthnkit.core.config import init_settings

init_settings()

# Real browser output (Chrome + Google Password Manager), RP ID "maks11060.keenetic.link".
ATTESTATION_JSON = {
    "authenticatorAttachment": "platform",
    "clientExtensionResults": {},
    "id": "931QGw1poO_Pr-aBvHhhyw",
    "rawId": "931QGw1poO_Pr-aBvHhhyw",
    "response": {
        "attestationObject": "o2NmbXRkbm9uZWdhdHRTdG10oGhhdXRoRGF0YViU-Jx3W2CIjpKPnIQIsHlBYdSZfagIar-Fvq4jvuvvrDpdAAAAAOqbjWZNAR0hPOS2tIy1ddQAEPd9UBsNaaDvz6_mgbx4YculAQIDJiABIVggU-dlyytnRNS0bX0c9v8naV_6Lfb_Hf8ZfyaArlGTuociWCChDcCr8gGpFMdK8QDOmtIpY5Up6zFK5dG2q0fAg8jBNg",
        "authenticatorData": "-Jx3W2CIjpKPnIQIsHlBYdSZfagIar-Fvq4jvuvvrDpdAAAAAOqbjWZNAR0hPOS2tIy1ddQAEPd9UBsNaaDvz6_mgbx4YculAQIDJiABIVggU-dlyytnRNS0bX0c9v8naV_6Lfb_Hf8ZfyaArlGTuociWCChDcCr8gGpFMdK8QDOmtIpY5Up6zFK5dG2q0fAg8jBNg",
        "clientDataJSON": "eyJ0eXBlIjoid2ViYXV0aG4uY3JlYXRlIiwiY2hhbGxlbmdlIjoiYTBsa3RjQXMwY3NFNGVBaXV1ZWVIdDVWUlFMQ1RYQWpESmNYZ2xobzNJTSIsIm9yaWdpbiI6Imh0dHBzOi8vbWFrczExMDYwLmtlZW5ldGljLmxpbmsiLCJjcm9zc09yaWdpbiI6ZmFsc2V9",
        "publicKey": "MFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAEU-dlyytnRNS0bX0c9v8naV_6Lfb_Hf8ZfyaArlGTuoehDcCr8gGpFMdK8QDOmtIpY5Up6zFK5dG2q0fAg8jBNg",
        "publicKeyAlgorithm": -7,
        "transports": ["hybrid", "internal"],
    },
    "type": "public-key",
}

# (COSE alg, SPKI public key, assertion response), RP ID "localhost".
ASSERTIONS = [
    (
        -7,
        "MFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAEAD9X-HUEQqLo6ld7CgpRwRIJkXMWuWfLyVn16N7syL4C_5WPRkE5kXhcU-yy-FGSBJNGUhlPqJueJxGJBtcU7g",
        {
            "authenticatorData": "SZYN5YgOjGh0NBcPZHZgW4_krrmihjLHmVzzuoMdl2MFAAAAAw",
            "clientDataJSON": "eyJ0eXBlIjoid2ViYXV0aG4uZ2V0IiwiY2hhbGxlbmdlIjoiaHRYWnJ1UVFzSzhjQ0FyLTBJUFBMQSIsIm9yaWdpbiI6Imh0dHA6Ly9sb2NhbGhvc3Q6NDUwNyIsImNyb3NzT3JpZ2luIjpmYWxzZSwib3RoZXJfa2V5c19jYW5fYmVfYWRkZWRfaGVyZSI6ImRvIG5vdCBjb21wYXJlIGNsaWVudERhdGFKU09OIGFnYWluc3QgYSB0ZW1wbGF0ZS4gU2VlIGh0dHBzOi8vZ29vLmdsL3lhYlBleCJ9",
            "signature": "MEQCIEtcxcn8BRm6BmZE3vghukbX-PcMR8o9WWBJI03RC4B0AiAYnBdiX1RMdUelPaAfqlwF92HqpDEgwfUErp4VoDCqZg",
            "userHandle": "Emoes5m8250vw7ItnM7-nw",
        },
    ),
    (
        -8,
        "MCowBQYDK2VwAyEAL7milh-tbyuXCwCBtgIxCgZA6HMdV8d6YaBSC_LFxN4",
        {
            "authenticatorData": "SZYN5YgOjGh0NBcPZHZgW4_krrmihjLHmVzzuoMdl2MFAAAAAg",
            "clientDataJSON": "eyJ0eXBlIjoid2ViYXV0aG4uZ2V0IiwiY2hhbGxlbmdlIjoidHRuMDh5YUowZnJxZXgtd05jQ0lLdyIsIm9yaWdpbiI6Imh0dHA6Ly9sb2NhbGhvc3Q6NDUwNyIsImNyb3NzT3JpZ2luIjpmYWxzZSwib3RoZXJfa2V5c19jYW5fYmVfYWRkZWRfaGVyZSI6ImRvIG5vdCBjb21wYXJlIGNsaWVudERhdGFKU09OIGFnYWluc3QgYSB0ZW1wbGF0ZS4gU2VlIGh0dHBzOi8vZ29vLmdsL3lhYlBleCJ9",
            "signature": "dyfN_CoMPijGVyiBy5Udfe6Bc09hvRedjpBdVMr3D2-PVPkt_lmVwHBp6qpMDI_mJcei6niJxyqbMQvQZzwvAg",
            "userHandle": "sKVD_BnoSpi7GUaxok9EFA",
        },
    ),
    (
        -257,
        "MIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKCAQEAsxGh7GzeTrMgadrjdvlghyoMUtKXyKkBb23xFul5FCOxKkY4uSKA-TLO7Yh8Fd3RgsJHjDr2TH2kqH1IxbCZds2e9xz2GSUz0EK8SAALVJtjf1M3eicIaFSXSf88lIGms1Zm_cMSrp3PM0SQSwFAXylF3SXgD-Sz7ISqhyMSpmUNEI1Y9NieJDsEHL0efyyzpeis8L1PHYHcCj0sUOntOi3VKVY_AYKMsM0vpXlwYfQbqcQA_nV3MrpjgzIWjarGsODWa2hP5GPovZwbVg2WbARjqoyaP_cQ3StofWMAqIsM7cLny4BIKhNiHqNDGK2qOOiSGs4azU3ISZz7-JoN3wIDAQAB",
        {
            "authenticatorData": "SZYN5YgOjGh0NBcPZHZgW4_krrmihjLHmVzzuoMdl2MFAAAAAg",
            "clientDataJSON": "eyJ0eXBlIjoid2ViYXV0aG4uZ2V0IiwiY2hhbGxlbmdlIjoiNmRYaTA1R25qMVd5eHdRQ2FpY3FjdyIsIm9yaWdpbiI6Imh0dHA6Ly9sb2NhbGhvc3Q6NDUwNyIsImNyb3NzT3JpZ2luIjpmYWxzZX0",
            "signature": "QfGF0wqRew83d9gwfWUVV_pGjqbItBD77GVdVzAQkSfT5VklQqt1cYTrOWMjrRFsIilBQ_Yolm4-FjSknTvcb8Su7slB7nVbcasB2LDzg8mVLtRUYJobCL-aEWAp7cq2jxxVgLdIUZHIH-J4F9hwfmdCA7eOO25NxzvsudK-P9uA-QeXeze4mHq2n5Y8bC2OM7JXc9JEAFiQ-sExgdm8tLnZIjykkgBbrOr2eOfVEEI2Nv5C1jaWTJ587Z_enUjFp9TolCJgwcmSwdmV8eku_dQ6hEjE09VPLwoNBp_IIwtevDn9k-22bhMViPOs2mlZ8nWHoMIDeP7BXb-rSuVXRw",
            "userHandle": "S_qBcX8W-yqWBcD1BlmO3A",
        },
    ),
]


@pytest.fixture
def attestation_json():
    """Provides a copy of the real 'none' attestation response."""
    return {**ATTESTATION_JSON, "response": dict(ATTESTATION_JSON["response"])}


@pytest.fixture
def rp_settings():
    """Re-initializes settings with relying party defaults, restoring the plain settings afterwards."""
    yield init_settings(WEBAUTHN_RP_ID="localhost", WEBAUTHN_RP_NAME="Example", WEBAUTHN_TIMEOUT_MS=60000)
    init_settings()


def credential_json(response: dict, credential_id: str = "AQID") -> dict:
    """Wraps a captured authenticator response in the PublicKeyCredential JSON envelope."""
    return {"id": credential_id, "rawId": credential_id, "type": "public-key", "response": response}
