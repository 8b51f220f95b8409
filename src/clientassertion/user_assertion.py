from typing import Optional

from clientassertion import JWT_BEARER
from clientassertion import ON_BEHALF_OF
from clientassertion import OPENID_SCOPE


class UserAssertion(object):
    """
    An assertion representing a user, used in the on-behalf-of flow.
    The assertion is opaque and is passed on as is.
    """

    def __init__(self, assertion: str, assertion_type: Optional[str] = JWT_BEARER):
        self._assertion = assertion
        self._assertion_type = assertion_type

    @property
    def assertion(self) -> str:
        return self._assertion

    @property
    def assertion_type(self) -> str:
        return self._assertion_type

    def request_params(self) -> dict:
        return {
            "grant_type": self._assertion_type,
            "assertion": self._assertion,
            "requested_token_use": ON_BEHALF_OF,
            "scope": OPENID_SCOPE
        }
