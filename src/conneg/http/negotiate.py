import logging
from collections.abc import Sequence

from conneg.http.accept import (
    WILDCARD,
    MediaRange,
    parse_accept_header,
    parse_accept_headers,
)
from conneg.utils import lower, trim

logger = logging.getLogger(__name__)


def _fallback(available: Sequence[str]) -> str:
    return available[0] if available else ""


def _score(candidate: MediaRange, accepted: Sequence[MediaRange]) -> None:
    # `type/subtype` always applies, `type/*` and `*/*` only until a type matched
    matched = False
    for media_range in accepted:
        if media_range.type == candidate.type and (
            media_range.subtype == candidate.subtype
            or (media_range.subtype == WILDCARD and not matched)
        ):
            candidate.qvalue = media_range.qvalue
            matched = True
        elif media_range.type == WILDCARD and not matched:
            candidate.qvalue = media_range.qvalue


def select_content_type(
    accepted: Sequence[MediaRange], available: Sequence[str]
) -> str:
    """
    Selects the preferred content type among those available.

    Args:
        accepted: Media ranges from the Accept header, in precedence order
        available: Content types the server can produce, in the server's
            order of preference

    Returns:
        The normalized form of the best available content type. The first
        available content type, as given, if nothing was accepted or no
        available content type is well-formed. An empty string if nothing
        is available.
    """

    if not accepted:
        return _fallback(available)

    candidates = []
    for content_type in available:
        range_ = lower(trim(content_type))
        type_, slash, subtype = range_.partition("/")
        if not slash:
            logger.debug("Skipping available content type %r", content_type)
            continue

        candidate = MediaRange(
            range=range_,
            type=type_,
            subtype=subtype,
            qvalue=0.0,
            order=len(candidates),
        )
        _score(candidate, accepted)
        candidates.append(candidate)

    if not candidates:
        return _fallback(available)

    return sorted(candidates)[0].range


def negotiate(accept: str | list[str] | None, available: Sequence[str]) -> str:
    """
    Selects the content type to respond with, given the value of the
    request's Accept header.

    Negotiation never fails: a content type the client marked as not
    acceptable (`q=0`) is still returned when nothing better is available.

    Args:
        accept: Accept header string, a list of Accept header strings,
            or None when the header is absent
        available: Content types the server can produce, in the server's
            order of preference

    Returns:
        The selected content type, or an empty string if `available` is empty.

    Example:
        >>> negotiate("text/html;q=0.9, application/json;q=0.8", ["application/json", "text/html"])
        'text/html'
    """

    if accept is None or isinstance(accept, str):
        accepted = parse_accept_header(accept)
    else:
        accepted = parse_accept_headers(accept)

    selected = select_content_type(accepted, list(available))
    logger.debug("Selected %r for Accept %r", selected, accept)
    return selected
