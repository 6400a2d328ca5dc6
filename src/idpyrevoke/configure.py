import logging
from typing import Dict
from typing import Optional

from idpyrevoke.client.token_revocation import TokenRevocation
from idpyrevoke.configuration import AuthorizationServiceConfiguration
from idpyrevoke.constant import DEFAULT_AUTHN_METHOD
from idpyrevoke.exception import ImproperlyConfigured
from idpyrevoke.exception import MessageException
from idpyrevoke.logging import configure_logging
from idpyrevoke.revoke import RevokeTokenRequestBuilder
from idpyrevoke.util import load_config_file


def lower_or_upper(config, param, default=None):
    res = config.get(param.lower(), default)
    if not res:
        res = config.get(param.upper(), default)
    return res


class Configuration(dict):
    """Token revocation client configuration"""

    parameter = {
        "client_id": None,
        "client_secret": None,
        "token_endpoint_auth_method": DEFAULT_AUTHN_METHOD,
        "client_authn_methods": None,
        "provider_info": None,
        "token_type_hint": None,
        "additional_parameters": None,
    }

    def __init__(self, conf: Dict):
        dict.__init__(self)

        log_conf = conf.get("logging")
        if log_conf:
            _logger = configure_logging(config=log_conf).getChild(__name__)
        else:
            _logger = logging.getLogger(__name__)
        object.__setattr__(self, "logger", _logger)

        for key, default in self.parameter.items():
            setattr(self, key, lower_or_upper(conf, key, default))

        for key, val in conf.items():
            if key == "logging" or key in self:
                continue
            setattr(self, key, val)

        object.__setattr__(self, "_service_configuration", None)

    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            raise AttributeError(item)

    def __setattr__(self, key, value):
        self[key] = value

    def service_configuration(self) -> AuthorizationServiceConfiguration:
        """
        The authorization service configuration built from provider_info.
        If provider_info contains an issuer it is regarded as a discovery
        document, otherwise as a set of endpoints.
        """
        if self._service_configuration is not None:
            return self._service_configuration

        _info = self.provider_info
        if not _info:
            raise ImproperlyConfigured("Missing provider_info")
        if not isinstance(_info, dict):
            raise ImproperlyConfigured("provider_info must be a mapping")

        try:
            if "issuer" in _info:
                _conf = AuthorizationServiceConfiguration.from_discovery(_info)
            else:
                _conf = AuthorizationServiceConfiguration().from_dict(_info)
                _conf.verify()
        except (ValueError, MessageException) as err:
            raise ImproperlyConfigured("Bad provider_info: {}".format(err)) from err

        self.logger.debug("Revocation endpoint: %s", _conf.get("revocation_endpoint"))
        object.__setattr__(self, "_service_configuration", _conf)
        return _conf

    def request_builder(self, token: str) -> RevokeTokenRequestBuilder:
        """
        A request builder primed with the values from this configuration.

        :param token: The token to revoke
        """
        if not self.client_id:
            raise ImproperlyConfigured("Missing client_id")

        _builder = RevokeTokenRequestBuilder(self.service_configuration(), self.client_id, token)
        if self.token_type_hint:
            _builder.set_token_type_hint(self.token_type_hint)
        if self.additional_parameters:
            _builder.set_additional_parameters(self.additional_parameters)
        return _builder

    def revocation_service(self) -> TokenRevocation:
        return TokenRevocation(
            client_authn_methods=self.client_authn_methods,
            default_authn_method=self.token_endpoint_auth_method,
            client_secret=self.client_secret,
        )


def create_from_config_file(cls, filename: str, base_path: Optional[str] = ""):
    if base_path and not filename.startswith("/"):
        filename = "{}/{}".format(base_path.rstrip("/"), filename)
    return cls(load_config_file(filename))
