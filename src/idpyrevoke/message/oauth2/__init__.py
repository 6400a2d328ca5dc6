import logging
import string

from idpyrevoke.message import OPTIONAL_LIST_OF_STRINGS
from idpyrevoke.message import REQUIRED_LIST_OF_STRINGS
from idpyrevoke.message import SINGLE_OPTIONAL_STRING
from idpyrevoke.message import SINGLE_REQUIRED_STRING
from idpyrevoke.message import Message
from idpyrevoke.message import msg_ser

logger = logging.getLogger(__name__)


def is_error_message(msg):
    if "error" in msg:
        return True
    else:
        return False


error_chars = set(string.ascii_uppercase + string.ascii_lowercase + string.digits + " !_-.,;:'()/")


class ResponseMessage(Message):
    """
    The basic error response
    """

    c_param = {
        "error": SINGLE_OPTIONAL_STRING,
        "error_description": SINGLE_OPTIONAL_STRING,
        "error_uri": SINGLE_OPTIONAL_STRING,
    }

    def verify(self, **kwargs):
        super(ResponseMessage, self).verify(**kwargs)
        if "error_description" in self:
            # Verify that the characters used are within the allowed ranges
            # %x20-21 / %x23-5B / %x5D-7E
            if not all(x in error_chars for x in self["error_description"]):
                raise ValueError("Characters outside allowed set")
        return True


class ASConfigurationResponse(Message):
    """
    Authorization Server metadata, RFC 8414
    """

    c_param = ResponseMessage.c_param.copy()
    c_param.update(
        {
            "issuer": SINGLE_REQUIRED_STRING,
            "authorization_endpoint": SINGLE_OPTIONAL_STRING,
            "token_endpoint": SINGLE_OPTIONAL_STRING,
            "jwks_uri": SINGLE_OPTIONAL_STRING,
            "registration_endpoint": SINGLE_OPTIONAL_STRING,
            "end_session_endpoint": SINGLE_OPTIONAL_STRING,
            "scopes_supported": OPTIONAL_LIST_OF_STRINGS,
            "response_types_supported": REQUIRED_LIST_OF_STRINGS,
            "grant_types_supported": OPTIONAL_LIST_OF_STRINGS,
            "token_endpoint_auth_methods_supported": OPTIONAL_LIST_OF_STRINGS,
            "service_documentation": SINGLE_OPTIONAL_STRING,
            "revocation_endpoint": SINGLE_OPTIONAL_STRING,
            "revocation_endpoint_auth_methods_supported": OPTIONAL_LIST_OF_STRINGS,
            "introspection_endpoint": SINGLE_OPTIONAL_STRING,
        }
    )


def as_configuration_deser(val, sformat="dict"):
    """Deserializes a JSON object into a ASConfigurationResponse."""
    if isinstance(val, ASConfigurationResponse):
        return val
    if not isinstance(val, dict):
        raise ValueError("Expected a JSON object, got {}".format(type(val).__name__))
    return ASConfigurationResponse().from_dict(val)


OPTIONAL_AS_CONFIGURATION = (Message, False, msg_ser, as_configuration_deser, False)


# RFC 7009
class TokenRevocationRequest(Message):
    c_param = {
        "token": SINGLE_REQUIRED_STRING,
        "token_type_hint": SINGLE_OPTIONAL_STRING,
        # The ones below are part of authentication information
        "client_id": SINGLE_OPTIONAL_STRING,
        "client_secret": SINGLE_OPTIONAL_STRING,
    }


class TokenRevocationErrorResponse(ResponseMessage):
    """
    Error response from the revocation endpoint
    """

    c_allowed_values = ResponseMessage.c_allowed_values.copy()
    c_allowed_values.update(
        {
            "error": [
                "invalid_request",
                "invalid_client",
                "invalid_grant",
                "unauthorized_client",
                "unsupported_grant_type",
                "invalid_scope",
                "server_error",
                "unsupported_token_type",
            ]
        }
    )

