from conneg.http import ContentNegotiator
from conneg.http.accept import MediaRange, parse_accept_header, parse_accept_headers
from conneg.http.negotiate import negotiate, select_content_type

__all__ = [
    "negotiate",
    "select_content_type",
    "parse_accept_header",
    "parse_accept_headers",
    "MediaRange",
    "ContentNegotiator",
]
