from idpyoidc.message import Message
from idpyoidc.message import SINGLE_OPTIONAL_INT
from idpyoidc.message import SINGLE_REQUIRED_INT
from idpyoidc.message import SINGLE_REQUIRED_STRING


class ClientAssertionJWT(Message):
    """The claims of a self signed client assertion (RFC 7523 section 3)."""
    c_param = {
        "iss": SINGLE_REQUIRED_STRING,
        "sub": SINGLE_REQUIRED_STRING,
        "aud": SINGLE_REQUIRED_STRING,
        "jti": SINGLE_REQUIRED_STRING,
        "nbf": SINGLE_REQUIRED_INT,
        "exp": SINGLE_REQUIRED_INT,
        "iat": SINGLE_OPTIONAL_INT
    }

    def verify(self, **kwargs):
        super(ClientAssertionJWT, self).verify(**kwargs)
        if self["iss"] != self["sub"]:
            raise ValueError("iss and sub must both be the client_id")
        if self["exp"] <= self["nbf"]:
            raise ValueError("exp must be after nbf")
        return True
