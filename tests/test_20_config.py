import os
from urllib.parse import parse_qs

import pytest
import yaml

from idpyrevoke.client.token_revocation import TokenRevocation
from idpyrevoke.configuration import AuthorizationServiceConfiguration
from idpyrevoke.configure import Configuration
from idpyrevoke.configure import create_from_config_file
from idpyrevoke.configure import lower_or_upper
from idpyrevoke.exception import ImproperlyConfigured
from idpyrevoke.exception import InvalidArgument

ISSUER = "https://as.example.com"

CONF = {
    "client_id": "client1",
    "client_secret": "abcdefghijklmnop",
    "token_endpoint_auth_method": "client_secret_post",
    "token_type_hint": "refresh_token",
    "additional_parameters": {"audience": "https://rs.example.com"},
    "provider_info": {
        "issuer": ISSUER,
        "authorization_endpoint": "{}/authorize".format(ISSUER),
        "token_endpoint": "{}/token".format(ISSUER),
        "revocation_endpoint": "{}/revoke".format(ISSUER),
        "response_types_supported": ["code"],
    },
    "logging": {
        "version": 1,
        "disable_existing_loggers": False,
        "root": {"handlers": [], "level": "DEBUG"},
    },
    "httpc_params": {"verify": False},
}


@pytest.fixture
def conf_file(tmp_path):
    _filename = os.path.join(tmp_path, "revoke_conf.yaml")
    with open(_filename, "w") as fp:
        yaml.safe_dump(CONF, fp)
    return _filename


def test_lower_or_upper():
    assert lower_or_upper({"client_id": "a"}, "client_id") == "a"
    assert lower_or_upper({"CLIENT_ID": "b"}, "client_id") == "b"
    assert lower_or_upper({}, "client_id", "c") == "c"


def test_create_from_config_file(conf_file):
    configuration = create_from_config_file(Configuration, filename=conf_file)
    assert configuration.client_id == "client1"
    assert configuration.token_endpoint_auth_method == "client_secret_post"
    assert configuration.httpc_params == {"verify": False}
    assert "logging" not in configuration


def test_create_from_config_file_base_path(conf_file):
    _dir, _name = os.path.split(conf_file)
    configuration = create_from_config_file(Configuration, filename=_name, base_path=_dir)
    assert configuration.client_id == "client1"


def test_defaults():
    configuration = Configuration({"client_id": "client1"})
    assert configuration.token_endpoint_auth_method == "client_secret_basic"
    assert configuration.token_type_hint is None

    with pytest.raises(AttributeError):
        getattr(configuration, "no_such_attribute")


def test_service_configuration_from_discovery():
    configuration = Configuration(CONF)
    _conf = configuration.service_configuration()
    assert isinstance(_conf, AuthorizationServiceConfiguration)
    assert _conf["revocation_endpoint"] == "{}/revoke".format(ISSUER)
    assert _conf["discovery_doc"]["issuer"] == ISSUER
    assert configuration.service_configuration() is _conf


def test_service_configuration_from_endpoints():
    configuration = Configuration(
        {
            "client_id": "client1",
            "provider_info": {
                "authorization_endpoint": "{}/authorize".format(ISSUER),
                "token_endpoint": "{}/token".format(ISSUER),
            },
        }
    )
    _conf = configuration.service_configuration()
    assert "discovery_doc" not in _conf


@pytest.mark.parametrize(
    "provider_info",
    [
        None,
        "https://as.example.com",
        {"authorization_endpoint": "{}/authorize".format(ISSUER)},
        {"issuer": ISSUER},
    ],
)
def test_service_configuration_bad(provider_info):
    configuration = Configuration({"client_id": "client1", "provider_info": provider_info})
    with pytest.raises(ImproperlyConfigured):
        configuration.service_configuration()


def test_request_builder():
    configuration = Configuration(CONF)
    request = configuration.request_builder("refreshtoken").build()
    assert request.client_id == "client1"
    assert request.token == "refreshtoken"
    assert request.token_type_hint == "refresh_token"
    assert dict(request.additional_parameters) == {"audience": "https://rs.example.com"}


def test_request_builder_missing_client_id():
    _conf = dict(CONF)
    del _conf["client_id"]
    with pytest.raises(ImproperlyConfigured):
        Configuration(_conf).request_builder("refreshtoken")


def test_request_builder_reserved_parameter():
    _conf = dict(CONF)
    _conf["additional_parameters"] = {"token_type_hint": "access_token"}
    with pytest.raises(InvalidArgument):
        Configuration(_conf).request_builder("refreshtoken")


def test_revocation_service():
    configuration = Configuration(CONF)
    service = configuration.revocation_service()
    assert isinstance(service, TokenRevocation)
    assert service.default_authn_method == "client_secret_post"

    request = configuration.request_builder("refreshtoken").build()
    _info = service.get_request_parameters(request)
    assert _info["url"] == "{}/revoke".format(ISSUER)
    _body = parse_qs(_info["body"])
    assert _body["client_secret"] == ["abcdefghijklmnop"]
    assert _body["client_id"] == ["client1"]
