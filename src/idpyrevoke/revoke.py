"""
OAuth 2.0 token revocation request and response, RFC 7009.

A :py:class:`RevokeTokenRequest` is put together with a
:py:class:`RevokeTokenRequestBuilder`, which validates the values it is given.
Both the request and the :py:class:`RevokeTokenResponse` can be turned into a
JSON document and back again, which is what is used when they have to be
stored or passed between processes.
"""
import json
import logging
from types import MappingProxyType
from typing import Dict
from typing import Optional
from typing import Union

from cryptojwt.utils import as_unicode

from idpyrevoke.configuration import AuthorizationServiceConfiguration
from idpyrevoke.configuration import configuration_from_dict
from idpyrevoke.constant import TOKEN_TYPE_ACCESS
from idpyrevoke.constant import TOKEN_TYPE_REFRESH
from idpyrevoke.exception import InvalidArgument
from idpyrevoke.exception import MalformedInput
from idpyrevoke.exception import MessageException
from idpyrevoke.message.oauth2 import TokenRevocationRequest
from idpyrevoke.util import check_additional_params
from idpyrevoke.util import check_not_empty
from idpyrevoke.util import check_not_none

logger = logging.getLogger(__name__)

KEY_CONFIGURATION = "configuration"
KEY_CLIENT_ID = "clientId"
KEY_TOKEN_TYPE_HINT = "tokenTypeHint"
KEY_TOKEN = "token"
KEY_ADDITIONAL_PARAMETERS = "additionalParameters"
KEY_REQUEST = "request"

PARAM_CLIENT_ID = "client_id"
PARAM_TOKEN = "token"
PARAM_TOKEN_TYPE_HINT = "token_type_hint"

BUILT_IN_PARAMS = frozenset([PARAM_CLIENT_ID, PARAM_TOKEN, PARAM_TOKEN_TYPE_HINT])

JsonInput = Union[dict, str, bytes]


def _load_json_object(document: JsonInput) -> dict:
    if isinstance(document, (str, bytes, bytearray)):
        try:
            document = json.loads(as_unicode(document))
        except ValueError as err:
            raise MalformedInput("Not a valid JSON document: {}".format(err)) from err

    if not isinstance(document, dict):
        raise MalformedInput("Expected a JSON object, got {}".format(type(document).__name__))
    return document


def _get_string(doc: dict, key: str) -> str:
    try:
        _val = doc[key]
    except KeyError:
        raise MalformedInput("Missing required field '{}'".format(key))

    if not isinstance(_val, str):
        raise MalformedInput("Field '{}' must be a string".format(key))
    return _val


def _get_string_if_defined(doc: dict, key: str) -> Optional[str]:
    _val = doc.get(key)
    if _val is None or isinstance(_val, str):
        return _val
    raise MalformedInput("Field '{}' must be a string".format(key))


def _get_string_map(doc: dict, key: str) -> Dict[str, str]:
    _val = doc.get(key)
    if _val is None:
        return {}

    if not isinstance(_val, dict):
        raise MalformedInput("Field '{}' must be a JSON object".format(key))
    for _k, _v in _val.items():
        if not isinstance(_v, str):
            raise MalformedInput("Value of '{}' in '{}' must be a string".format(_k, key))
    return dict(_val)


class RevokeTokenRequest:
    """
    An OAuth2 token revocation request. Used to revoke both refresh and
    access tokens.

    Instances are immutable, use :py:class:`RevokeTokenRequestBuilder` to
    create them.
    """

    TOKEN_TYPE_ACCESS = TOKEN_TYPE_ACCESS
    TOKEN_TYPE_REFRESH = TOKEN_TYPE_REFRESH

    __slots__ = (
        "configuration",
        "client_id",
        "token_type_hint",
        "token",
        "additional_parameters",
    )

    def __init__(
        self,
        configuration: AuthorizationServiceConfiguration,
        client_id: str,
        token_type_hint: Optional[str],
        token: str,
        additional_parameters: Dict[str, str],
    ):
        _set = object.__setattr__
        _set(self, "configuration", configuration)
        _set(self, "client_id", client_id)
        _set(self, "token_type_hint", token_type_hint)
        _set(self, "token", token)
        _set(self, "additional_parameters", MappingProxyType(additional_parameters))

    def __setattr__(self, key, value):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    def __delattr__(self, key):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    def __eq__(self, other):
        if not isinstance(other, RevokeTokenRequest):
            return NotImplemented
        return (
            self.configuration == other.configuration
            and self.client_id == other.client_id
            and self.token_type_hint == other.token_type_hint
            and self.token == other.token
            and dict(self.additional_parameters) == dict(other.additional_parameters)
        )

    __hash__ = None

    def __repr__(self):
        return "<{} client_id={!r} token_type_hint={!r}>".format(
            self.__class__.__name__, self.client_id, self.token_type_hint
        )

    @staticmethod
    def builder(configuration, client_id, token) -> "RevokeTokenRequestBuilder":
        return RevokeTokenRequestBuilder(configuration, client_id, token)

    def get_request_parameters(self) -> Dict[str, str]:
        """
        Produces the set of request parameters for this query, which can be
        further processed into a request body.

        :return: A new dictionary
        """
        params = {PARAM_TOKEN: self.token}
        if self.token_type_hint is not None:
            params[PARAM_TOKEN_TYPE_HINT] = self.token_type_hint
        params.update(self.additional_parameters)
        return params

    def to_message(self) -> TokenRevocationRequest:
        """
        The request parameters as a message, ready to be used as the body
        of a HTTP POST.
        """
        _msg = TokenRevocationRequest()
        for key, val in self.get_request_parameters().items():
            _msg[key] = val
        return _msg

    def json_serialize(self) -> dict:
        """
        A JSON compatible representation of the token revocation request for
        persistent storage or local transmission.
        """
        doc = {
            KEY_CONFIGURATION: self.configuration.to_dict(),
            KEY_CLIENT_ID: self.client_id,
        }
        if self.token_type_hint is not None:
            doc[KEY_TOKEN_TYPE_HINT] = self.token_type_hint
        doc[KEY_TOKEN] = self.token
        doc[KEY_ADDITIONAL_PARAMETERS] = dict(self.additional_parameters)
        return doc

    def json_serialize_string(self) -> str:
        return json.dumps(self.json_serialize())

    @classmethod
    def json_deserialize(cls, document: JsonInput) -> "RevokeTokenRequest":
        """
        Reads a token revocation request from the representation produced by
        :py:meth:`json_serialize` or :py:meth:`json_serialize_string`.

        :param document: A dictionary or a JSON string
        :return: A :py:class:`RevokeTokenRequest` instance
        :raises MalformedInput: if the document does not match the expected
            structure.
        """
        check_not_none(document, "json document")
        doc = _load_json_object(document)

        if KEY_CONFIGURATION not in doc:
            raise MalformedInput("Missing required field '{}'".format(KEY_CONFIGURATION))

        return cls(
            configuration_from_dict(doc[KEY_CONFIGURATION]),
            _get_string(doc, KEY_CLIENT_ID),
            _get_string_if_defined(doc, KEY_TOKEN_TYPE_HINT),
            _get_string(doc, KEY_TOKEN),
            _get_string_map(doc, KEY_ADDITIONAL_PARAMETERS),
        )


class RevokeTokenRequestBuilder:
    """Creates instances of :py:class:`RevokeTokenRequest`."""

    def __init__(self, configuration, client_id, token):
        self._configuration = None
        self._client_id = None
        self._token_type_hint = None
        self._token = None
        self._additional_parameters = {}

        self.set_configuration(configuration)
        self.set_client_id(client_id)
        self.set_token(token)

    def set_configuration(self, configuration):
        check_not_none(configuration, "configuration")
        if not isinstance(configuration, AuthorizationServiceConfiguration):
            raise InvalidArgument(
                "configuration must be an AuthorizationServiceConfiguration", reason="type"
            )
        try:
            configuration.verify()
        except (MessageException, ValueError) as err:
            raise InvalidArgument("Invalid configuration: {}".format(err), reason="type") from err
        self._configuration = configuration
        return self

    def set_client_id(self, client_id):
        self._client_id = check_not_empty(client_id, "clientId")
        return self

    def set_token_type_hint(self, token_type_hint):
        self._token_type_hint = token_type_hint
        return self

    def set_token(self, token):
        self._token = check_not_empty(token, "token")
        return self

    def set_additional_parameters(self, additional_parameters):
        self._additional_parameters = check_additional_params(
            additional_parameters, BUILT_IN_PARAMS
        )
        return self

    def build(self) -> RevokeTokenRequest:
        logger.debug(
            "Building token revocation request for client %s (extra parameters: %s)",
            self._client_id,
            list(self._additional_parameters.keys()),
        )
        return RevokeTokenRequest(
            self._configuration,
            self._client_id,
            self._token_type_hint,
            self._token,
            dict(self._additional_parameters),
        )


class RevokeTokenResponse:
    """
    A response to a token revocation request, RFC 7009 Section 2.2.

    The authorization server answers a successful revocation with an empty
    body, so the response is nothing more than the request that was sent.
    """

    __slots__ = ("request",)

    def __init__(self, request: RevokeTokenRequest):
        check_not_none(request, "request")
        object.__setattr__(self, "request", request)

    def __setattr__(self, key, value):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    def __delattr__(self, key):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    def __eq__(self, other):
        if not isinstance(other, RevokeTokenResponse):
            return NotImplemented
        return self.request == other.request

    __hash__ = None

    def json_serialize(self) -> dict:
        return {KEY_REQUEST: self.request.json_serialize()}

    def json_serialize_string(self) -> str:
        return json.dumps(self.json_serialize())

    @classmethod
    def json_deserialize(cls, document: JsonInput) -> "RevokeTokenResponse":
        """
        Reads a token revocation response from the representation produced by
        :py:meth:`json_serialize`. The request must be part of the document.

        :raises MalformedInput: if the JSON is malformed or the request is
            missing.
        """
        if isinstance(document, str):
            check_not_empty(document, "json string")
        else:
            check_not_none(document, "json document")

        doc = _load_json_object(document)
        if KEY_REQUEST not in doc:
            raise MalformedInput("token revocation request not found in JSON")

        _request = doc[KEY_REQUEST]
        if not isinstance(_request, dict):
            raise MalformedInput("Field '{}' must be a JSON object".format(KEY_REQUEST))
        return cls(RevokeTokenRequest.json_deserialize(_request))


class RevokeTokenResponseBuilder:
    """Creates instances of :py:class:`RevokeTokenResponse`."""

    def __init__(self, request):
        self._request = None
        self.set_request(request)

    def set_request(self, request):
        self._request = check_not_none(request, "request")
        return self

    def build(self) -> RevokeTokenResponse:
        return RevokeTokenResponse(self._request)
