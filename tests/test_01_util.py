import json
import os

import pytest
import yaml

from idpyrevoke.exception import InvalidArgument
from idpyrevoke.util import check_additional_params
from idpyrevoke.util import check_not_empty
from idpyrevoke.util import check_not_none
from idpyrevoke.util import instantiate
from idpyrevoke.util import load_config_file

BUILT_IN = ["client_id", "token", "token_type_hint"]


def test_check_not_none():
    assert check_not_none("value", "foo") == "value"
    assert check_not_none(0, "foo") == 0

    with pytest.raises(InvalidArgument) as err:
        check_not_none(None, "foo")
    assert err.value.reason == "missing"
    assert "foo" in str(err.value)


def test_check_not_empty():
    assert check_not_empty("value", "foo") == "value"
    assert check_not_empty(" value ", "foo") == " value "


@pytest.mark.parametrize(
    "value,reason", [(None, "missing"), ("", "empty"), ("   ", "empty"), (17, "type")]
)
def test_check_not_empty_fails(value, reason):
    with pytest.raises(InvalidArgument) as err:
        check_not_empty(value, "foo")
    assert err.value.reason == reason


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        check_not_empty("", "foo")


def test_check_additional_params_none():
    assert check_additional_params(None, BUILT_IN) == {}


def test_check_additional_params_copy():
    _params = {"b": "1", "a": "2"}
    _res = check_additional_params(_params, BUILT_IN)
    assert _res == _params
    assert list(_res.keys()) == ["b", "a"]

    _params["c"] = "3"
    assert "c" not in _res


def test_check_additional_params_built_in():
    with pytest.raises(InvalidArgument) as err:
        check_additional_params({"foo": "bar", "token": "abc"}, BUILT_IN)
    assert err.value.reason == "reserved"
    assert "token" in str(err.value)


def test_check_additional_params_not_string():
    with pytest.raises(InvalidArgument) as err:
        check_additional_params({"foo": 1}, BUILT_IN)
    assert err.value.reason == "type"


def test_load_config_file(tmp_path):
    _conf = {"client_id": "client", "provider_info": {"issuer": "https://example.com"}}

    _yaml = os.path.join(tmp_path, "conf.yaml")
    with open(_yaml, "w") as fp:
        yaml.safe_dump(_conf, fp)
    assert load_config_file(_yaml) == _conf

    _json = os.path.join(tmp_path, "conf.json")
    with open(_json, "w") as fp:
        json.dump(_conf, fp)
    assert load_config_file(_json) == _conf


def test_load_config_file_unknown_type(tmp_path):
    with pytest.raises(ValueError):
        load_config_file(os.path.join(tmp_path, "conf.ini"))


def test_instantiate():
    _res = instantiate("collections.OrderedDict", a=1)
    assert _res == {"a": 1}

    _res = instantiate(dict, b=2)
    assert _res == {"b": 2}
