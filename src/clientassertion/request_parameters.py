import logging
from typing import Optional
from typing import Protocol
from typing import runtime_checkable

from clientassertion import CLIENT_ASSERTION_TYPE
from clientassertion import JWT_BEARER

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestParameters(Protocol):
    """Anything that contributes parameters to an OAuth token request."""

    def request_params(self) -> dict:
        ...


class ClientAssertion(object):
    """An assertion made by a client, and the type of that assertion."""

    def __init__(self, client_id: str, assertion: str,
                 assertion_type: Optional[str] = JWT_BEARER):
        self._client_id = client_id
        self._assertion = assertion
        self._assertion_type = assertion_type

    @property
    def client_id(self) -> str:
        return self._client_id

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
            "client_id": self._client_id
        }

    def client_authn_params(self) -> dict:
        """The same assertion used to authenticate the client (RFC 7523 section 2.2)."""
        return {
            "client_id": self._client_id,
            "client_assertion": self._assertion,
            "client_assertion_type": CLIENT_ASSERTION_TYPE
        }


def merge_request_params(*sources: RequestParameters, **extra) -> dict:
    """
    Build the body of a token request from a number of parameter sources.

    :param sources: objects that have a request_params method
    :param extra: additional request parameters
    :return: dictionary with all the request parameters
    """
    body = {}
    for source in sources:
        if not isinstance(source, RequestParameters):
            raise TypeError(f"{source.__class__.__name__} provides no request parameters")
        for key, val in source.request_params().items():
            if key in body and body[key] != val:
                raise ValueError(f"Conflicting values for request parameter '{key}'")
            body[key] = val

    body.update(extra)
    logger.debug(f"Token request parameters: {list(body.keys())}")
    return body
