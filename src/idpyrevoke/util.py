import json
from typing import Dict
from typing import Iterable
from typing import Optional

import yaml
from cryptojwt.utils import importer

from idpyrevoke.exception import InvalidArgument


def instantiate(cls, **kwargs):
    if isinstance(cls, str):
        return importer(cls)(**kwargs)
    else:
        return cls(**kwargs)


def load_yaml_config(filename):
    """Load a YAML configuration file."""
    with open(filename, "rt", encoding="utf-8") as file:
        config_dict = yaml.safe_load(file)
    return config_dict


def load_config_file(filename):
    if filename.endswith(".yaml") or filename.endswith(".yml"):
        _cnf = load_yaml_config(filename)
    elif filename.endswith(".json"):
        with open(filename, "rt", encoding="utf-8") as file:
            _cnf = json.load(file)
    else:
        raise ValueError("Unknown file type")

    return _cnf


def check_not_none(value, description="value"):
    """
    Make sure a value is present.

    :param value: The value to check
    :param description: Name used in the error message
    :return: The value
    """
    if value is None:
        raise InvalidArgument("{} cannot be None".format(description), reason="missing")
    return value


def check_not_empty(value, description="value"):
    """
    Make sure a value is a string with something else than white space in it.

    :param value: The value to check
    :param description: Name used in the error message
    :return: The value, unchanged
    """
    if value is None:
        raise InvalidArgument(
            "{} cannot be None or empty".format(description), reason="missing"
        )
    if not isinstance(value, str):
        raise InvalidArgument("{} must be a string".format(description), reason="type")
    if not value.strip():
        raise InvalidArgument("{} cannot be None or empty".format(description), reason="empty")
    return value


def check_additional_params(
    params: Optional[Dict[str, str]], built_in: Iterable[str]
) -> Dict[str, str]:
    """
    Copy a set of extension parameters after having made sure none of them
    clashes with a parameter the request already defines.

    :param params: The extension parameters, may be None
    :param built_in: Parameter names that are reserved
    :return: A new dictionary with the parameters, in the order given
    """
    _res = {}
    if params is None:
        return _res

    for key, val in params.items():
        if not isinstance(key, str) or not isinstance(val, str):
            raise InvalidArgument(
                "additional parameters must map strings to strings", reason="type"
            )
        if key in built_in:
            raise InvalidArgument(
                "Parameter {} is directly supported via the authorization request builder, "
                "use the builder method instead".format(key),
                reason="reserved",
            )
        _res[key] = val

    return _res
