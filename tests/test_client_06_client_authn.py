import base64
from urllib.parse import quote_plus

import pytest

from idpyrevoke.client.client_auth import AuthnFailure
from idpyrevoke.client.client_auth import ClientSecretBasic
from idpyrevoke.client.client_auth import ClientSecretPost
from idpyrevoke.client.client_auth import NoneAuthn
from idpyrevoke.client.client_auth import UnknownAuthnMethod
from idpyrevoke.client.client_auth import client_auth_setup
from idpyrevoke.client.client_auth import get_client_authn_class
from idpyrevoke.client.client_auth import get_client_authn_methods
from idpyrevoke.message.oauth2 import TokenRevocationRequest

CLIENT_ID = "A"
CLIENT_SECRET = "white boarding pass"


def _eq(l1, l2):
    return set(l1) == set(l2)


@pytest.fixture
def request_():
    return TokenRevocationRequest(token="ABCDEF", token_type_hint="access_token")


class TestClientSecretBasic(object):
    def test_construct(self, request_):
        csb = ClientSecretBasic()
        http_args = csb.construct(request_, client_id=CLIENT_ID, client_secret=CLIENT_SECRET)

        _token = "{}:{}".format(CLIENT_ID, quote_plus(CLIENT_SECRET))
        cred = "Basic {}".format(base64.b64encode(_token.encode("utf-8")).decode("utf-8"))
        assert http_args == {"headers": {"Authorization": cred}}
        assert "client_id" not in request_
        assert "client_secret" not in request_

    def test_construct_removes_credentials_from_body(self, request_):
        request_["client_id"] = CLIENT_ID
        request_["client_secret"] = CLIENT_SECRET

        http_args = ClientSecretBasic().construct(request_, client_id=CLIENT_ID)
        assert http_args["headers"]["Authorization"].startswith("Basic ")
        assert _eq(request_.keys(), ["token", "token_type_hint"])

    def test_construct_keeps_headers(self, request_):
        http_args = ClientSecretBasic().construct(
            request_,
            http_args={"headers": {"Accept": "application/json"}},
            client_id=CLIENT_ID,
            client_secret=CLIENT_SECRET,
        )
        assert _eq(http_args["headers"].keys(), ["Accept", "Authorization"])

    def test_missing_secret(self, request_):
        with pytest.raises(AuthnFailure):
            ClientSecretBasic().construct(request_, client_id=CLIENT_ID)


class TestClientSecretPost(object):
    def test_construct(self, request_):
        csp = ClientSecretPost()
        http_args = csp.construct(request_, client_id=CLIENT_ID, client_secret=CLIENT_SECRET)
        assert http_args is None
        assert request_["client_id"] == CLIENT_ID
        assert request_["client_secret"] == CLIENT_SECRET

    def test_missing_secret(self, request_):
        with pytest.raises(AuthnFailure):
            ClientSecretPost().construct(request_, client_id=CLIENT_ID)


class TestNoneAuthn(object):
    def test_construct(self, request_):
        request_["client_secret"] = CLIENT_SECRET
        NoneAuthn().construct(request_, client_id=CLIENT_ID)
        assert request_["client_id"] == CLIENT_ID
        assert "client_secret" not in request_

    def test_missing_client_id(self, request_):
        with pytest.raises(AuthnFailure):
            NoneAuthn().construct(request_)


def test_get_client_authn_class():
    assert get_client_authn_class("client_secret_post") is ClientSecretPost
    assert get_client_authn_class("private_key_jwt") is None
    assert _eq(get_client_authn_methods(), ["none", "client_secret_basic", "client_secret_post"])


def test_client_auth_setup_default():
    _methods = client_auth_setup()
    assert _eq(_methods.keys(), ["none", "client_secret_basic", "client_secret_post"])
    assert isinstance(_methods["client_secret_basic"], ClientSecretBasic)


def test_client_auth_setup_list():
    _methods = client_auth_setup(["none"])
    assert list(_methods.keys()) == ["none"]
    assert isinstance(_methods["none"], NoneAuthn)


def test_client_auth_setup_dict():
    _methods = client_auth_setup(
        {
            "basic": {"class": "idpyrevoke.client.client_auth.ClientSecretBasic"},
            "post": "idpyrevoke.client.client_auth.ClientSecretPost",
            "none": {},
        }
    )
    assert isinstance(_methods["basic"], ClientSecretBasic)
    assert isinstance(_methods["post"], ClientSecretPost)
    assert isinstance(_methods["none"], NoneAuthn)


def test_client_auth_setup_unknown():
    with pytest.raises(UnknownAuthnMethod):
        client_auth_setup(["private_key_jwt"])
