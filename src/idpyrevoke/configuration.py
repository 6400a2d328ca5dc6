"""The endpoints of an OAuth 2.0 authorization service."""
import logging
from urllib.parse import urlsplit

from idpyrevoke.exception import MalformedInput
from idpyrevoke.exception import MessageException
from idpyrevoke.message import SINGLE_OPTIONAL_STRING
from idpyrevoke.message import SINGLE_REQUIRED_STRING
from idpyrevoke.message import Message
from idpyrevoke.message.oauth2 import OPTIONAL_AS_CONFIGURATION
from idpyrevoke.message.oauth2 import ASConfigurationResponse

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "authorization_endpoint",
    "token_endpoint",
    "registration_endpoint",
    "end_session_endpoint",
    "revocation_endpoint",
]


def _is_http_url(url):
    _part = urlsplit(url)
    return _part.scheme in ["http", "https"] and bool(_part.netloc)


class AuthorizationServiceConfiguration(Message):
    """
    Configuration details required to interact with an authorization service.
    Either constructed from known endpoints or from a discovery document.
    """

    c_param = {
        "authorization_endpoint": SINGLE_REQUIRED_STRING,
        "token_endpoint": SINGLE_REQUIRED_STRING,
        "registration_endpoint": SINGLE_OPTIONAL_STRING,
        "end_session_endpoint": SINGLE_OPTIONAL_STRING,
        "revocation_endpoint": SINGLE_OPTIONAL_STRING,
        "discovery_doc": OPTIONAL_AS_CONFIGURATION,
    }

    @classmethod
    def from_discovery(cls, discovery_doc):
        """
        Build a configuration from the metadata an authorization server
        publishes.

        :param discovery_doc: A :py:class:`ASConfigurationResponse` instance or
            a dictionary with the metadata
        :return: A :py:class:`AuthorizationServiceConfiguration` instance
        """
        if not isinstance(discovery_doc, ASConfigurationResponse):
            discovery_doc = ASConfigurationResponse().from_dict(discovery_doc)
        discovery_doc.verify()

        _args = {k: discovery_doc[k] for k in ENDPOINTS if k in discovery_doc}
        return cls(discovery_doc=discovery_doc, **_args)

    def verify(self, **kwargs):
        super(AuthorizationServiceConfiguration, self).verify(**kwargs)
        for endpoint in ENDPOINTS:
            if endpoint in self and not _is_http_url(self[endpoint]):
                raise ValueError("{} is not a HTTP(S) URL: {}".format(endpoint, self[endpoint]))
        return True


def configuration_from_dict(doc):
    """
    Reconstruct a configuration from the document produced by
    :py:meth:`AuthorizationServiceConfiguration.to_dict`.

    :param doc: A dictionary
    :return: A verified :py:class:`AuthorizationServiceConfiguration` instance
    """
    if not isinstance(doc, dict):
        raise MalformedInput("configuration must be a JSON object")

    try:
        _conf = AuthorizationServiceConfiguration().from_dict(doc)
        _conf.verify()
    except (MessageException, ValueError) as err:
        logger.debug("Could not read service configuration: %s", err)
        raise MalformedInput("Malformed service configuration: {}".format(err)) from err

    return _conf
