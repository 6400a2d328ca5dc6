"""The service that talks to the OAuth2 token revocation endpoint."""
import logging
from typing import Optional

from cryptojwt.utils import as_unicode

from idpyrevoke.client.client_auth import UnknownAuthnMethod
from idpyrevoke.client.client_auth import client_auth_setup
from idpyrevoke.client.util import get_content_type
from idpyrevoke.constant import DEFAULT_AUTHN_METHOD
from idpyrevoke.constant import DEFAULT_POST_CONTENT_TYPE
from idpyrevoke.constant import JSON_ENCODED
from idpyrevoke.exception import MessageException
from idpyrevoke.exception import MissingEndpoint
from idpyrevoke.exception import RevocationError
from idpyrevoke.message import oauth2
from idpyrevoke.message.oauth2 import is_error_message
from idpyrevoke.revoke import RevokeTokenRequest
from idpyrevoke.revoke import RevokeTokenResponse
from idpyrevoke.revoke import RevokeTokenResponseBuilder

LOGGER = logging.getLogger(__name__)


class TokenRevocation:
    """
    Prepares token revocation requests for, and interprets the responses
    from, the revocation endpoint. Sending the request is left to whoever
    owns the HTTP client.
    """

    msg_type = oauth2.TokenRevocationRequest
    error_msg = oauth2.TokenRevocationErrorResponse
    endpoint_name = "revocation_endpoint"
    service_name = "token_revocation"
    default_authn_method = DEFAULT_AUTHN_METHOD
    http_method = "POST"

    def __init__(
        self,
        client_authn_methods=None,
        default_authn_method: Optional[str] = "",
        client_secret: Optional[str] = None,
    ):
        self.client_authn_methods = client_auth_setup(client_authn_methods)
        if default_authn_method:
            self.default_authn_method = default_authn_method
        self.client_secret = client_secret

    def get_endpoint(self, request: RevokeTokenRequest) -> str:
        """
        Find the revocation endpoint among the authorization service's
        endpoints.

        :param request: The revocation request
        :return: Service endpoint
        """
        _conf = request.configuration
        _endpoint = _conf.get(self.endpoint_name)
        if not _endpoint and "discovery_doc" in _conf:
            _endpoint = _conf["discovery_doc"].get(self.endpoint_name)

        if not _endpoint:
            raise MissingEndpoint("No {} specified".format(self.endpoint_name))
        return _endpoint

    def init_authentication_method(self, msg, authn_method, http_args=None, **kwargs):
        """
        Place the client authentication information in the request message
        and/or in the HTTP arguments.

        :param msg: The request message
        :param authn_method: Name of the client authentication method
        :param http_args: HTTP arguments
        :return: Updated HTTP arguments
        """
        if http_args is None:
            http_args = {}

        try:
            _method = self.client_authn_methods[authn_method]
        except KeyError:
            raise UnknownAuthnMethod(authn_method)

        LOGGER.debug("Client authn method: %s", authn_method)
        return _method.construct(msg, http_args=http_args, **kwargs) or http_args

    def get_request_parameters(
        self, request: RevokeTokenRequest, authn_method: Optional[str] = "", **kwargs
    ) -> dict:
        """
        Builds the request message and gathers all the information needed
        to send it to the revocation endpoint.

        :param request: The :py:class:`RevokeTokenRequest` to send
        :param authn_method: Client authentication method, the service's
            default is used if not given
        :param kwargs: Extra keyword arguments handed to the authentication
            method, for instance client_secret
        :return: A dictionary with the keys "url", "method", "body" and "headers"
        """
        _msg = request.to_message()
        _msg.verify()

        _kwargs = {"client_id": request.client_id}
        if self.client_secret:
            _kwargs["client_secret"] = self.client_secret
        _kwargs.update(kwargs)

        http_args = self.init_authentication_method(
            _msg, authn_method or self.default_authn_method, **_kwargs
        )

        _headers = http_args.get("headers", {})
        _headers["Content-Type"] = DEFAULT_POST_CONTENT_TYPE

        return {
            "url": self.get_endpoint(request),
            "method": self.http_method,
            "body": _msg.to_urlencoded(),
            "headers": _headers,
        }

    def parse_response(
        self,
        request: RevokeTokenRequest,
        status_code: int,
        body: Optional[str] = "",
        headers: Optional[dict] = None,
    ) -> RevokeTokenResponse:
        """
        Interpret what the revocation endpoint returned.

        :param request: The request that was sent
        :param status_code: HTTP status code of the response
        :param body: The response body
        :param headers: The response headers
        :return: A :py:class:`RevokeTokenResponse` instance
        :raises RevocationError: if the authorization server returned an error
        """
        if status_code == 200:
            # RFC 7009 Section 2.2, the content of the response body is ignored
            return RevokeTokenResponseBuilder(request).build()

        _err = None
        if body:
            _ctype = get_content_type(headers or {})
            if _ctype in ("", JSON_ENCODED):
                try:
                    _err = self.error_msg().from_json(as_unicode(body))
                except (ValueError, MessageException) as err:
                    LOGGER.debug("Could not parse error response: %s", err)

        if _err is None or not is_error_message(_err):
            _error = "server_error" if status_code >= 500 else "invalid_request"
            LOGGER.warning("Token revocation failed with HTTP status %s", status_code)
            raise RevocationError(_error, status_code=status_code)

        try:
            _err.verify()
        except (ValueError, MessageException) as err:
            LOGGER.warning("Non standard error response from revocation endpoint: %s", err)

        LOGGER.warning("Token revocation failed: %s", _err["error"])
        raise RevocationError(
            _err["error"], _err.get("error_description", ""), status_code=status_code
        )
