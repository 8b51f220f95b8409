import pytest

from clientassertion import CLIENT_ASSERTION_TYPE
from clientassertion import JWT_BEARER
from clientassertion.request_parameters import ClientAssertion
from clientassertion.request_parameters import RequestParameters
from clientassertion.request_parameters import merge_request_params
from clientassertion.user_assertion import UserAssertion


def test_client_assertion():
    _assertion = ClientAssertion("client-1", "abc.def.ghi")
    assert isinstance(_assertion, RequestParameters)
    assert _assertion.request_params() == {
        "grant_type": "urn:ietf:params:oauth:grant-type:jwt-bearer",
        "assertion": "abc.def.ghi",
        "client_id": "client-1"
    }
    assert _assertion.client_authn_params() == {
        "client_id": "client-1",
        "client_assertion": "abc.def.ghi",
        "client_assertion_type": CLIENT_ASSERTION_TYPE
    }


def test_merge():
    body = merge_request_params(UserAssertion("abc.def.ghi"), resource="https://api.example.com")
    assert body["requested_token_use"] == "on_behalf_of"
    assert body["resource"] == "https://api.example.com"


def test_merge_same_values():
    body = merge_request_params(ClientAssertion("client-1", "abc.def.ghi"),
                                ClientAssertion("client-1", "abc.def.ghi"))
    assert body["client_id"] == "client-1"


def test_merge_conflict():
    with pytest.raises(ValueError):
        merge_request_params(ClientAssertion("client-1", "abc.def.ghi"),
                             UserAssertion("jkl.mno.pqr"))


def test_merge_not_a_source():
    with pytest.raises(TypeError):
        merge_request_params({"grant_type": JWT_BEARER})


def test_grant_type_and_client_assertion_type_differ():
    assert JWT_BEARER == "urn:ietf:params:oauth:grant-type:jwt-bearer"
    assert CLIENT_ASSERTION_TYPE == "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
