import json
import logging
import uuid
from typing import Callable
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptojwt.exception import JWKESTException
from cryptojwt.jwk.rsa import RSAKey
from cryptojwt.jws.jws import JWS
from cryptojwt.jwt import utc_time_sans_frac

from clientassertion.exception import SigningFailure
from clientassertion.message import ClientAssertionJWT
from clientassertion.utils import x5t_thumbprint

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = 600  # 10 minutes
DEFAULT_SIGN_ALG = "RS256"
RSA_SIGN_ALGS = ["RS256", "RS384", "RS512", "PS256", "PS384", "PS512"]


def verify_signing_settings(lifetime: int, sign_alg: str):
    if sign_alg not in RSA_SIGN_ALGS:
        raise ValueError(f"Unsupported signing algorithm: {sign_alg}")
    if not isinstance(lifetime, int) or lifetime <= 0:
        raise ValueError("lifetime must be a positive number of seconds")


def new_jti() -> str:
    return uuid.uuid4().hex


class JWSSigner(object):
    """Signs a set of claims with an RSA private key and returns a compact JWS."""

    def __init__(self, sign_alg: Optional[str] = DEFAULT_SIGN_ALG):
        self.sign_alg = sign_alg

    def sign(self, claims: dict, key: RSAPrivateKey, headers: Optional[dict] = None) -> str:
        if headers is None:
            headers = {}
        try:
            _key = RSAKey(priv_key=key, kid=headers.get("kid", ""), use="sig")
            _jws = JWS(json.dumps(claims), alg=self.sign_alg)
            # extra header parameters are only picked up at signing time
            return _jws.sign_compact(keys=[_key], **headers)
        except (JWKESTException, ValueError, TypeError, AttributeError) as err:
            raise SigningFailure(f"Could not sign assertion: {err.__class__.__name__} {err}") from err


class SelfSignedJwtFactory(object):
    """
    Creates self signed JWTs usable as client assertions against
    a specific token endpoint.
    """

    def __init__(self,
                 client_id: str,
                 token_endpoint: str,
                 lifetime: Optional[int] = DEFAULT_LIFETIME,
                 sign_alg: Optional[str] = DEFAULT_SIGN_ALG,
                 signer: Optional[JWSSigner] = None,
                 clock: Optional[Callable] = None,
                 jti: Optional[Callable] = None):
        verify_signing_settings(lifetime, sign_alg)

        self.client_id = client_id
        self.token_endpoint = token_endpoint
        self.lifetime = lifetime
        self.sign_alg = sign_alg
        self.signer = signer or JWSSigner(sign_alg)
        self.clock = clock or utc_time_sans_frac
        self.jti = jti or new_jti

    def create_claims(self) -> dict:
        now = self.clock()
        claims = ClientAssertionJWT(
            iss=self.client_id,
            sub=self.client_id,
            aud=self.token_endpoint,
            jti=self.jti(),
            nbf=now,
            iat=now,
            exp=now + self.lifetime
        )
        claims.verify()
        return claims.to_dict()

    def create_header(self, certificate: x509.Certificate) -> dict:
        _x5t = x5t_thumbprint(certificate)
        return {"typ": "JWT", "kid": _x5t, "x5t": _x5t}

    def create_and_sign_jwt(self, certificate: x509.Certificate, private_key: RSAPrivateKey) -> str:
        """
        Construct a JWT with the client_id as issuer and subject and the token
        endpoint as audience and sign it.

        :param certificate: The certificate, used for the 'x5t' header value
        :param private_key: The key matching the certificate's public key
        :return: A compact JWS
        """
        headers = self.create_header(certificate)
        claims = self.create_claims()
        logger.debug(
            f"Signing client assertion for {self.client_id} to {self.token_endpoint} "
            f"with key {headers['kid']}")
        return self.signer.sign(claims, private_key, headers)
