from csrfguard.client.auth import CsrfHeaderAuth
from csrfguard.client.provider import CsrfTokenProvider, HttpTokenFetcher, jar_cookie_reader

__all__ = [
    "CsrfHeaderAuth",
    "CsrfTokenProvider",
    "HttpTokenFetcher",
    "jar_cookie_reader",
]
