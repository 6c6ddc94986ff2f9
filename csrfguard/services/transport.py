from __future__ import annotations

from starlette.requests import HTTPConnection

FORWARDED_PROTO_HEADER = "x-forwarded-proto"


def is_secure_request(request: HTTPConnection, trust_forwarded: bool = True) -> bool:
    """True when the request reached us over TLS, directly or via a terminating proxy."""
    if request.url.scheme == "https":
        return True
    if not trust_forwarded:
        return False

    # Proxy chains append their own scheme, e.g. "https, http"
    for value in request.headers.getlist(FORWARDED_PROTO_HEADER):
        if any(proto.strip().lower() == "https" for proto in value.split(",")):
            return True
    return False
