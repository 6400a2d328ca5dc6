"""Utilities"""


def get_content_type(headers):
    try:
        _ctype = headers["Content-Type"]
    except KeyError:
        return ""
    return _ctype.split(";")[0].strip().lower()
