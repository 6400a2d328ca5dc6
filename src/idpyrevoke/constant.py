URL_ENCODED = "application/x-www-form-urlencoded"
JSON_ENCODED = "application/json"

DEFAULT_POST_CONTENT_TYPE = URL_ENCODED

# RFC 7009 Section 2.1
TOKEN_TYPE_ACCESS = "access_token"
TOKEN_TYPE_REFRESH = "refresh_token"

DEFAULT_AUTHN_METHOD = "client_secret_basic"
