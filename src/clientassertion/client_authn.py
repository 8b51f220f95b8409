import logging
from typing import Optional
from typing import Union

from idpyoidc.client.client_auth import ClientAuthnMethod
from idpyoidc.message import Message

from clientassertion.certificate import ClientAssertionCertificate

logger = logging.getLogger(__name__)


class CertificateClientAssertion(ClientAuthnMethod):
    """
    Client authentication using a JWT signed with the private key belonging
    to a X.509 certificate (RFC 7523 section 2.2).
    """

    def __init__(self, credential: Optional[ClientAssertionCertificate] = None):
        self.credential = credential

    def construct(self,
                  request: Union[dict, Message],
                  service=None,
                  http_args: Optional[dict] = None,
                  **kwargs) -> dict:
        _credential = kwargs.get("credential", self.credential)
        if _credential is None:
            raise ValueError("No certificate credential to authenticate with")

        _params = _credential.client_authn_params()
        if "client_id" in request and request["client_id"] != _params["client_id"]:
            raise ValueError("client_id in request does not match the credential")

        logger.debug(f"Adding client assertion for {_params['client_id']}")
        for key, val in _params.items():
            request[key] = val

        if http_args is None:
            return {}
        return http_args
