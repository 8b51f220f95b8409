from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptojwt import as_unicode
from cryptojwt.jws.jws import factory
from cryptojwt.utils import b64e


def x5t_thumbprint(certificate: x509.Certificate, hash_alg=None) -> str:
    """
    The base64url encoded digest of the DER encoded certificate.
    SHA-1 gives the 'x5t' header value, SHA-256 the 'x5t#S256' one.
    """
    if hash_alg is None:
        hash_alg = hashes.SHA1()
    return as_unicode(b64e(certificate.fingerprint(hash_alg)))


def _jws(token):
    _jws = factory(token)
    if _jws is None:
        raise ValueError("Not a compact JWS")
    return _jws


def unverified_header(token: str) -> dict:
    return _jws(token).jwt.headers


def unverified_claims(token: str) -> dict:
    # No signature verification is done here
    return _jws(token).jwt.payload()
