class ClientAssertionError(Exception):
    pass


class InvalidInputFormat(ClientAssertionError, ValueError):
    """The credential bundle is not in a supported container format."""


class TypeValidationError(ClientAssertionError, TypeError):
    """The certificate or private key is not of the expected type."""


class SecurityPolicyViolation(ClientAssertionError):
    """The credential is structurally fine but too weak to be used."""


class SigningFailure(ClientAssertionError):
    pass
