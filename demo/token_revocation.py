#!/usr/bin/env python3
import os
from urllib.parse import parse_qs

from idpyrevoke.configure import Configuration
from idpyrevoke.configure import create_from_config_file
from idpyrevoke.revoke import RevokeTokenRequest
from idpyrevoke.revoke import RevokeTokenResponse

BASEDIR = os.path.abspath(os.path.dirname(__file__))


class DummyResponse():
    def __init__(self, status_code, text):
        self.text = text
        self.status_code = status_code


def emulate_revocation_endpoint(method, url, data, headers):
    # A real authorization server would invalidate the token here
    _args = parse_qs(data)
    print("{} {}".format(method, url))
    print("  revoking a token of type: {}".format(_args.get("token_type_hint", ["?"])[0]))
    return DummyResponse(status_code=200, text="")


# ================ Client side ===================================

conf = create_from_config_file(Configuration, filename="revoke_conf.yaml", base_path=BASEDIR)

request = conf.request_builder("2YotnFZFEjr1zCsicMWpAA").build()

# The request is stored while waiting for the user to confirm the logout
stored = request.json_serialize_string()

request = RevokeTokenRequest.json_deserialize(stored)

service = conf.revocation_service()
_info = service.get_request_parameters(request)

resp = emulate_revocation_endpoint(
    _info["method"], _info["url"], data=_info["body"], headers=_info["headers"]
)

response = service.parse_response(request, resp.status_code, resp.text)
stored = response.json_serialize_string()
print(RevokeTokenResponse.json_deserialize(stored).request.client_id)
