import logging
from typing import Any
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.serialization import pkcs12

from clientassertion.exception import InvalidInputFormat
from clientassertion.exception import SecurityPolicyViolation
from clientassertion.exception import TypeValidationError
from clientassertion.jwt_factory import DEFAULT_LIFETIME
from clientassertion.jwt_factory import DEFAULT_SIGN_ALG
from clientassertion.jwt_factory import JWSSigner
from clientassertion.jwt_factory import SelfSignedJwtFactory
from clientassertion.jwt_factory import verify_signing_settings
from clientassertion.request_parameters import ClientAssertion
from clientassertion.utils import x5t_thumbprint

logger = logging.getLogger(__name__)

MIN_KEY_SIZE_BITS = 2048


def public_key_size_bits(certificate: x509.Certificate) -> int:
    # counted in whole bytes of the modulus
    _n = certificate.public_key().public_numbers().n
    return ((_n.bit_length() + 7) // 8) * 8


def validate_certificate_and_key(certificate: Any,
                                 private_key: Any,
                                 min_key_size: Optional[int] = MIN_KEY_SIZE_BITS):
    """
    The certificate and key comes out of a PKCS#12 container and can be
    of any type. Make sure they are what signing needs.

    :param certificate: Should be a X.509 certificate with a RSA public key
    :param private_key: Should be the matching RSA private key
    :param min_key_size: Smallest acceptable modulus size in bits
    """
    if min_key_size is None:
        min_key_size = MIN_KEY_SIZE_BITS

    if not isinstance(certificate, x509.Certificate):
        raise TypeValidationError("certificate must be a X.509 certificate")
    if not isinstance(private_key, RSAPrivateKey):
        raise TypeValidationError("private_key must be a RSA private key")

    _pub_key = certificate.public_key()
    if not isinstance(_pub_key, RSAPublicKey):
        raise TypeValidationError("certificate must contain a RSA public key")
    if public_key_size_bits(certificate) < min_key_size:
        raise SecurityPolicyViolation(
            f"certificate must contain a public key of at least {min_key_size} bits")
    if _pub_key.public_numbers() != private_key.public_key().public_numbers():
        raise TypeValidationError("private_key does not match the certificate")


def load_pkcs12(data: bytes, password: Optional[bytes] = None) -> pkcs12.PKCS12KeyAndCertificates:
    if isinstance(password, str):
        password = password.encode("utf-8")
    try:
        return pkcs12.load_pkcs12(data, password)
    except (ValueError, TypeError) as err:
        raise InvalidInputFormat(f"Could not parse PKCS#12 data: {err}") from err


def load_pkcs12_file(path: str, password: Optional[bytes] = None) -> pkcs12.PKCS12KeyAndCertificates:
    with open(path, "rb") as fp:
        return load_pkcs12(fp.read(), password)


class ClientAssertionCertificate(object):
    """
    An assertion made by a client with a X.509 certificate. Both the public
    and the private key are needed. The public key is only used for
    the certificate thumbprint in the JWS header.
    """

    def __init__(self,
                 authority: Any,
                 client_id: Any,
                 pkcs12_bundle: pkcs12.PKCS12KeyAndCertificates,
                 min_key_size: Optional[int] = MIN_KEY_SIZE_BITS,
                 lifetime: Optional[int] = DEFAULT_LIFETIME,
                 sign_alg: Optional[str] = DEFAULT_SIGN_ALG,
                 signer: Optional[JWSSigner] = None):
        """
        :param authority: Something with a token_endpoint attribute
        :param client_id: The client id of the calling application
        :param pkcs12_bundle: The PKCS#12 container with the certificate and private key
        :param min_key_size: Smallest acceptable public key size in bits
        :param lifetime: Lifetime of the produced assertions in seconds
        :param sign_alg: RSA signing algorithm
        :param signer: Replacement signer, mostly for testing
        """
        if not isinstance(pkcs12_bundle, pkcs12.PKCS12KeyAndCertificates):
            raise InvalidInputFormat("Only the PKCS#12 format is supported")

        _client_id = str(client_id)
        if not _client_id:
            raise InvalidInputFormat("client_id must not be empty")
        try:
            verify_signing_settings(lifetime, sign_alg)
        except ValueError as err:
            raise InvalidInputFormat(str(err)) from err

        _cert = pkcs12_bundle.cert.certificate if pkcs12_bundle.cert else None
        validate_certificate_and_key(_cert, pkcs12_bundle.key, min_key_size)

        self._authority = authority
        self._client_id = _client_id
        self._certificate = _cert
        self._private_key = pkcs12_bundle.key
        self._lifetime = lifetime
        self._sign_alg = sign_alg
        self._signer = signer
        logger.debug(f"Certificate credential for {_client_id}, x5t={self.thumbprint}")

    @classmethod
    def from_pkcs12(cls, authority: Any, client_id: Any, data: bytes,
                    password: Optional[bytes] = None, **kwargs):
        return cls(authority, client_id, load_pkcs12(data, password), **kwargs)

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def certificate(self) -> x509.Certificate:
        return self._certificate

    @property
    def authority(self):
        return self._authority

    @property
    def thumbprint(self) -> str:
        return x5t_thumbprint(self._certificate)

    def _client_assertion(self) -> ClientAssertion:
        _factory = SelfSignedJwtFactory(self._client_id,
                                        self._authority.token_endpoint,
                                        lifetime=self._lifetime,
                                        sign_alg=self._sign_alg,
                                        signer=self._signer)
        jwt_assertion = _factory.create_and_sign_jwt(self._certificate, self._private_key)
        return ClientAssertion(self._client_id, jwt_assertion)

    def request_params(self) -> dict:
        """The relevant parameters from this credential for OAuth.
        A new assertion is signed on every call."""
        return self._client_assertion().request_params()

    def client_authn_params(self) -> dict:
        return self._client_assertion().client_authn_params()
