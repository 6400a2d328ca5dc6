"""Implementation of the client authentication methods usable at the revocation endpoint."""
import base64
import logging
from typing import Optional
from typing import Union
from urllib.parse import quote_plus

from cryptojwt.utils import importer

from idpyrevoke.util import instantiate

LOGGER = logging.getLogger(__name__)

__author__ = "roland hedberg"


class AuthnFailure(Exception):
    """Unspecified Authentication failure"""


class UnknownAuthnMethod(Exception):
    """Unknown Authentication method."""


class ClientAuthnMethod:
    """
    Basic Client Authentication Method class.
    Only has one public method: *construct*
    """

    def construct(self, request, http_args=None, **kwargs):
        """Add authentication information to a request"""
        raise NotImplementedError()


class NoneAuthn(ClientAuthnMethod):
    """
    A public client. It can not authenticate itself so it only tells the
    authorization server who it is by adding client_id to the request body.
    """

    def construct(self, request, http_args=None, **kwargs):
        try:
            request["client_id"] = kwargs["client_id"]
        except KeyError:
            raise AuthnFailure("Missing client_id")

        try:
            del request["client_secret"]
        except KeyError:
            pass
        return http_args


class ClientSecretBasic(ClientAuthnMethod):
    """
    Clients that have received a client_secret value from the Authorization
    Server, may authenticate with the Authorization Server in accordance with
    Section 2.3.1 of OAuth 2.0 [RFC6749] using HTTP Basic authentication scheme.

    The upshot of this is to construct an Authorization header that has the
    value 'Basic <token>' where <token> is the form-urlencoded username and
    password concatenated together with a ':' in between and then base64
    encoded.
    """

    @staticmethod
    def _get_passwd(request, **kwargs):
        passwd = kwargs.get("client_secret")
        if not passwd:
            passwd = request.get("client_secret")
        if not passwd:
            raise AuthnFailure("Missing client secret")
        return passwd

    @staticmethod
    def _get_user(**kwargs):
        try:
            return kwargs["client_id"]
        except KeyError:
            raise AuthnFailure("Missing client_id")

    def _get_authentication_token(self, request, **kwargs):
        passwd = self._get_passwd(request, **kwargs)
        user = self._get_user(**kwargs)

        credentials = "{}:{}".format(quote_plus(user), quote_plus(passwd))
        return base64.b64encode(credentials.encode("utf-8")).decode("utf-8")

    @staticmethod
    def modify_request(request, **kwargs):
        """
        The credentials are carried in the header, so neither client_id nor
        client_secret belong in the request body.
        """
        for param in ["client_id", "client_secret"]:
            try:
                del request[param]
            except KeyError:
                pass

    def construct(self, request, http_args=None, **kwargs):
        """
        Construct a dictionary to be added to the HTTP request headers

        :param request: The request
        :param http_args: HTTP arguments
        :return: dictionary of HTTP arguments
        """

        if http_args is None:
            http_args = {}

        if "headers" not in http_args:
            http_args["headers"] = {}

        _token = self._get_authentication_token(request, **kwargs)

        http_args["headers"]["Authorization"] = "Basic {}".format(_token)

        self.modify_request(request)

        return http_args


class ClientSecretPost(ClientSecretBasic):
    """
    Clients that have received a client_secret value from the Authorization
    Server, authenticate with the Authorization Server in accordance with
    Section 2.3.1 of OAuth 2.0 [RFC6749] by including the Client Credentials in
    the request body.
    """

    def construct(self, request, http_args=None, **kwargs):
        """
        Does not add any authentication information to the HTTP arguments.
        Adds authentication information to the request.
        """
        request["client_secret"] = self._get_passwd(request, **kwargs)
        request["client_id"] = self._get_user(**kwargs)
        return http_args


CLIENT_AUTHN_METHOD = {
    "none": NoneAuthn,
    "client_secret_basic": ClientSecretBasic,
    "client_secret_post": ClientSecretPost,
}


def get_client_authn_class(name):
    try:
        return CLIENT_AUTHN_METHOD[name]
    except KeyError:
        return None


def get_client_authn_methods():
    return list(CLIENT_AUTHN_METHOD.keys())


def single_authn_setup(name, spec):
    if isinstance(spec, dict):  # class and kwargs
        if spec:
            return instantiate(spec["class"], **spec.get("kwargs", {}))
        cls = get_client_authn_class(name)
    elif spec is None:
        cls = get_client_authn_class(name)
        if cls is None and "." in name:
            try:
                cls = importer(name)
            except (ValueError, ImportError, AttributeError):
                raise UnknownAuthnMethod(name)
    elif isinstance(spec, str):
        cls = importer(spec)
    else:
        cls = spec

    if cls is None:
        raise UnknownAuthnMethod(name)
    return cls()


def client_auth_setup(auth_set: Optional[Union[list, dict]] = None):
    if auth_set is None:
        auth_set = CLIENT_AUTHN_METHOD

    res = {}

    if isinstance(auth_set, list):  # From the known set
        for name in auth_set:
            res[name] = single_authn_setup(name, None)
    else:
        for name, spec in auth_set.items():
            res[name] = single_authn_setup(name, spec)

    return res
