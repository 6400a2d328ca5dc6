__author__ = "Roland Hedberg"
__version__ = "1.0.0"

from idpyrevoke.configuration import AuthorizationServiceConfiguration
from idpyrevoke.revoke import RevokeTokenRequest
from idpyrevoke.revoke import RevokeTokenRequestBuilder
from idpyrevoke.revoke import RevokeTokenResponse
from idpyrevoke.revoke import RevokeTokenResponseBuilder

__all__ = [
    "AuthorizationServiceConfiguration",
    "RevokeTokenRequest",
    "RevokeTokenRequestBuilder",
    "RevokeTokenResponse",
    "RevokeTokenResponseBuilder",
]
