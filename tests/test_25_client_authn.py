import pytest
from idpyoidc.message import Message

from clientassertion import CLIENT_ASSERTION_TYPE
from clientassertion.certificate import ClientAssertionCertificate
from clientassertion.client_authn import CertificateClientAssertion
from clientassertion.utils import unverified_claims
from tests.build_credentials import Authority
from tests.build_credentials import CLIENT_ID
from tests.build_credentials import TOKEN_ENDPOINT
from tests.build_credentials import new_rsa_private_key
from tests.build_credentials import pkcs12_bundle
from tests.build_credentials import self_signed_certificate

KEY = new_rsa_private_key()
CREDENTIAL = ClientAssertionCertificate(Authority(), CLIENT_ID,
                                        pkcs12_bundle(KEY, self_signed_certificate(KEY)))


def test_construct():
    request = Message(grant_type="client_credentials")
    http_args = CertificateClientAssertion(CREDENTIAL).construct(request)
    assert http_args == {}
    assert request["client_assertion_type"] == CLIENT_ASSERTION_TYPE
    assert request["client_id"] == CLIENT_ID
    assert unverified_claims(request["client_assertion"])["aud"] == TOKEN_ENDPOINT


def test_construct_credential_as_argument():
    request = {}
    http_args = CertificateClientAssertion().construct(request, http_args={"headers": {}},
                                                       credential=CREDENTIAL)
    assert http_args == {"headers": {}}
    assert "client_assertion" in request


def test_construct_no_credential():
    with pytest.raises(ValueError):
        CertificateClientAssertion().construct({})


def test_construct_other_client_id():
    with pytest.raises(ValueError):
        CertificateClientAssertion(CREDENTIAL).construct({"client_id": "someone-else"})
