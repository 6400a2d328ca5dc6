__author__ = "Roland Hedberg"


class OidcMsgError(Exception):
    def __init__(self, errmsg, content_type="", *args):
        Exception.__init__(self, errmsg, *args)
        self.content_type = content_type


class InvalidArgument(OidcMsgError, ValueError):
    """
    A value handed to a builder was missing or not acceptable.

    The reason attribute tells the cases apart: 'missing' (None), 'empty'
    (empty or blank string), 'reserved' (additional parameter name clash)
    and 'type' (wrong kind of value).
    """

    def __init__(self, errmsg, reason="missing"):
        OidcMsgError.__init__(self, errmsg)
        self.reason = reason


class MessageException(OidcMsgError):
    pass


class FormatError(MessageException):
    pass


class DecodeError(MessageException):
    pass


class NotAllowedValue(MessageException):
    pass


class MalformedInput(MessageException):
    """A serialized document did not have the expected structure."""


class MissingRequiredAttribute(MessageException):
    def __init__(self, attr, message=""):
        Exception.__init__(self, attr)
        self.message = message

    def __str__(self):
        return "Missing required attribute '%s'" % self.args[0]


class MissingEndpoint(OidcMsgError):
    pass


class RevocationError(OidcMsgError):
    """The authorization server refused to revoke the token."""

    def __init__(self, error, error_description="", status_code=400):
        OidcMsgError.__init__(self, error)
        self.error = error
        self.error_description = error_description
        self.status_code = status_code

    def __str__(self):
        if self.error_description:
            return "{} ({}): {}".format(self.error, self.status_code, self.error_description)
        return "{} ({})".format(self.error, self.status_code)


class ImproperlyConfigured(OidcMsgError):
    pass
