import json

from cryptojwt.utils import b64d
from cryptojwt.utils import b64e

ENTITY_ID = "https://issuer.example:8443"
ACME_DIRECTORY = "https://acme.example/directory"


def compact(header: dict, payload: dict, signature: bytes = b"") -> str:
    """Assembles a compact serialized JWS from its parts, without signing anything."""
    return ".".join([
        b64e(json.dumps(header).encode("utf8")).decode("utf8"),
        b64e(json.dumps(payload).encode("utf8")).decode("utf8"),
        b64e(signature).decode("utf8")
    ])


def replace_payload(token: str, **claims) -> str:
    """Keeps header and signature of a compact JWS but replaces claims in the payload."""
    _header, _payload, _signature = token.split(".")
    _claims = json.loads(b64d(_payload.encode("utf8")))
    _claims.update(claims)
    _payload = b64e(json.dumps(_claims).encode("utf8")).decode("utf8")
    return ".".join([_header, _payload, _signature])


def split_header(token: str) -> dict:
    return json.loads(b64d(token.split(".")[0].encode("utf8")))
