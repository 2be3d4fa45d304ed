class WebAuthnError(Exception):
    """Base exception for the webauthnkit library."""
    pass


class MalformedSignatureError(WebAuthnError):
    """Raised when a DER signature violates the SEQUENCE/INTEGER tag or length rules."""
    pass


class TruncatedBufferError(WebAuthnError):
    """Raised when a computed byte range runs past the end of the buffer."""
    pass


class UnsupportedAlgorithmError(WebAuthnError):
    """Raised when a COSE algorithm identifier has no concrete algorithm mapping."""

    def __init__(self, message, algorithm=None):
        super().__init__(message)
        self.algorithm = algorithm


class UnknownCeremonyTypeError(WebAuthnError):
    """Raised when clientData.type is neither 'webauthn.create' nor 'webauthn.get'."""

    def __init__(self, message, ceremony_type=None):
        super().__init__(message)
        self.ceremony_type = ceremony_type


class InvalidEncodingError(WebAuthnError):
    """Raised when a wire field is not valid base64url, UTF-8, JSON or CBOR."""
    pass


class InvalidFormatError(WebAuthnError):
    """Raised when a UUID string is not in the canonical 8-4-4-4-12 form."""
    pass


class InvalidLengthError(WebAuthnError):
    """Raised when a UUID buffer is not exactly 16 bytes."""
    pass


class InvalidOptionsError(WebAuthnError):
    """Raised when creation/request options cannot be serialized."""
    pass
