import pytest

from webauthnkit.core.exceptions import InvalidOptionsError
from webauthnkit.core.options import PUB_KEY_CRED_PARAMS, credentials, options_to_json


def test_credentials_create():
    options = credentials.create({
        "publicKey": {
            "challenge": bytes([123]),
            "rp": {"name": "example", "id": "example.com"},
            "user": {"id": bytes([1, 2, 3, 4]), "name": "authn", "displayName": "Authn Test"},
            "timeout": 60_000,
            "excludeCredentials": None,
            "authenticatorSelection": {"userVerification": "required"},
            "pubKeyCredParams": PUB_KEY_CRED_PARAMS,
        },
    })
    assert options.type == "public-key"
    assert options.to_json() == {
        "challenge": "ew",
        "user": {"id": "AQIDBA", "name": "authn", "displayName": "Authn Test"},
        "rp": {"name": "example", "id": "example.com"},
        "timeout": 60000,
        "authenticatorSelection": {"userVerification": "required"},
        "pubKeyCredParams": [
            {"type": "public-key", "alg": -8},
            {"type": "public-key", "alg": -7},
            {"type": "public-key", "alg": -257},
        ],
    }


def test_credentials_get():
    options = credentials.get({
        "publicKey": {
            "challenge": bytes([111]),
            "rpId": "example.com",
            "allowCredentials": [{
                "id": bytes([1, 2, 3, 4]),
                "transports": ["internal", "hybrid"],
                "type": "public-key",
            }],
            "userVerification": "required",
            "extensions": {
                "appid": "",
                "credProps": True,
                "largeBlob": {"read": True, "support": "required", "write": bytes([1, 2, 3, 4])},
            },
        },
    })
    assert options.to_json() == {
        "challenge": "bw",
        "rpId": "example.com",
        "allowCredentials": [{"id": "AQIDBA", "transports": ["internal", "hybrid"], "type": "public-key"}],
        "userVerification": "required",
        "extensions": {
            "appid": "",
            "credProps": True,
            "largeBlob": {"read": True, "support": "required", "write": "AQIDBA"},
        },
    }


def test_to_json_does_not_mutate_input():
    public_key = {"challenge": b"\x01"}
    credentials.get({"publicKey": public_key}).to_json()
    assert public_key == {"challenge": b"\x01"}


@pytest.mark.parametrize("factory", [credentials.create, credentials.get])
def test_missing_public_key(factory):
    with pytest.raises(InvalidOptionsError):
        factory({}).to_json()


def test_create_missing_required_member():
    with pytest.raises(InvalidOptionsError) as exc:
        credentials.create({"publicKey": {"challenge": b"\x01", "rp": {"id": "example.com", "name": "x"}}}).to_json()
    assert "user" in str(exc.value)


def test_get_missing_challenge():
    with pytest.raises(InvalidOptionsError):
        credentials.get({"publicKey": {"rpId": "example.com"}}).to_json()


def test_defaults_from_settings(rp_settings):
    created = credentials.create({
        "publicKey": {
            "challenge": b"\x01",
            "user": {"id": b"\x02", "name": "a", "displayName": "A"},
            "pubKeyCredParams": PUB_KEY_CRED_PARAMS,
        },
    }).to_json()
    assert created["rp"] == {"name": "Example", "id": "localhost"}
    assert created["timeout"] == 60000

    requested = credentials.get({"publicKey": {"challenge": b"\x01"}}).to_json()
    assert requested == {"challenge": "AQ", "rpId": "localhost", "timeout": 60000}


def test_explicit_values_win_over_settings(rp_settings):
    requested = credentials.get({"publicKey": {"challenge": b"\x01", "rpId": "example.com", "timeout": 1000}}).to_json()
    assert requested["rpId"] == "example.com"
    assert requested["timeout"] == 1000


def test_no_defaults_without_settings():
    requested = credentials.get({"publicKey": {"challenge": b"\x01"}}).to_json()
    assert requested == {"challenge": "AQ"}


def test_options_to_json():
    assert options_to_json({"a": None, "b": [b"\xff", (b"\x00",)], "c": {"d": bytearray(b"\x01")}}) == {
        "b": ["_w", ["AA"]],
        "c": {"d": "AQ"},
    }
