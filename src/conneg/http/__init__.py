from collections.abc import Sequence
from typing import Annotated

from fastapi import Header

from conneg.http.negotiate import negotiate


class ContentNegotiator:
    """
    A FastAPI dependency that negotiates the response content type
    from the request's `Accept` headers.

    Example:
        >>> html_or_json = ContentNegotiator(["text/html", "application/json"])
        >>> @app.get("/")
        ... def index(content_type: Annotated[str, Depends(html_or_json)]) -> Response:
        ...     ...
    """

    available: tuple[str, ...]

    def __init__(self, available: Sequence[str]) -> None:
        self.available = tuple(available)

    def __call__(
        self,
        accept: Annotated[list[str] | None, Header()] = None,
    ) -> str:
        return negotiate(accept, self.available)
