import logging
import math

from pydantic import BaseModel, Field

from conneg.utils import lower, parse_float, split_fields, trim

logger = logging.getLogger(__name__)

WILDCARD = "*"

DEFAULT_QUALITY = 1.0
"""Quality assumed when no `q` parameter is given, or when it is out of range."""

MIN_QUALITY = 0.001
"""Least preferred quality value that is still acceptable."""

REJECTED = -1.0
"""Sentinel for `q=0`, i.e. "not acceptable"."""


def normalize_quality(raw: float) -> float:
    """Normalizes a parsed `q` parameter.

    For more details, see [RFC 9110, section 12.4.2](https://www.rfc-editor.org/rfc/rfc9110.html#section-12.4.2)

    Args:
        raw: The value as written in the header

    Returns:
        float: `REJECTED` for exactly 0, `DEFAULT_QUALITY` for anything outside
        `[0.001, 1]`, or the value itself.
    """
    if raw == 0:
        return REJECTED
    if raw < MIN_QUALITY or raw > 1.0:
        return DEFAULT_QUALITY
    return raw


class MediaRange(BaseModel):
    """
    Represents a media range from an HTTP Accept header, or a content type
    a server can produce, along with its quality value and position.

    For more details, see [RFC 9110, section 12.5.1](https://www.rfc-editor.org/rfc/rfc9110.html#section-12.5.1)
    """

    range: str = Field(
        description="The normalized media range", examples=["text/html", "*/*"]
    )
    """The trimmed, lowercased media range (e.g., "text/html", "text/*")"""

    type: str = Field(
        description="The primary type", examples=["text", "application", "*"]
    )
    """The primary type (e.g., "text", "application", "*")"""

    subtype: str = Field(description="The subtype", examples=["html", "json", "*"])
    """The subtype (e.g., "html", "json", "*")"""

    qvalue: float = Field(
        ge=REJECTED,
        le=1.0,
        default=DEFAULT_QUALITY,
        description="Quality value, or -1 when explicitly not acceptable",
        examples=[0.5, 1.0, -1.0],
    )
    """Quality value between 0.001 and 1, or `REJECTED`. Defaults to 1.0."""

    order: int = Field(ge=0, default=0, description="Position in the source list")
    """Zero-based position of the entry in the header or the available list."""

    @classmethod
    def validate(cls, value: str, order: int = 0) -> "MediaRange":  # type: ignore[override]
        """Parses one comma-separated element of an Accept header.

        Args:
            value: String (e.g., "text/html;q=0.9")
            order: Position of the element in the header

        Returns:
            MediaRange: A parsed MediaRange instance

        Raises:
            ValueError: If the media range or one of its parameters is malformed,
                or if the quality value is not a number
        """
        segments = split_fields(trim(value), ";")
        if not segments:
            raise ValueError("Empty media range")

        range_ = lower(trim(segments[0]))
        type_, slash, subtype = range_.partition("/")
        if not slash or not type_ or not subtype:
            raise ValueError(f"Invalid media type: {range_}")
        if type_ == WILDCARD and subtype != WILDCARD:
            raise ValueError(f"Wildcard type with concrete subtype: {range_}")

        qvalue = DEFAULT_QUALITY
        for param in segments[1:]:
            key, equals, val = trim(param).partition("=")
            if not equals:
                raise ValueError(f"Invalid parameter: {trim(param)!r}")

            # Other parameters are accepted but have no effect
            if trim(key) in ("q", "Q"):
                raw = parse_float(val)
                if math.isnan(raw):
                    raise ValueError(f"Invalid quality value: {trim(val)!r}")
                qvalue = normalize_quality(raw)

        return cls(
            range=range_, type=type_, subtype=subtype, qvalue=qvalue, order=order
        )

    def precedes(self, other: "MediaRange") -> bool:
        """Implements media range precedence ordering.

        Ordering is based on:
        1. Quality value (higher q values have higher precedence)
        2. Type (a wildcard type precedes a concrete one)
        3. Subtype (a wildcard subtype precedes a concrete one)
        4. Order (earlier entries have higher precedence)

        Steps 2 and 3 fall back to order when neither, or both, are wildcards.
        This is not transitive across mixed types with equal quality, so ties
        between e.g. `text/*`, `text/html` and `application/xml` depend on
        input order.

        Args:
            other: MediaRange to compare against

        Returns:
            bool: True if this media range is preferred over other
        """
        if self.qvalue != other.qvalue:
            return self.qvalue > other.qvalue

        if self.type != other.type:
            if self.type == WILDCARD:
                return True
            if other.type == WILDCARD:
                return False
            return self.order < other.order

        if self.subtype != other.subtype:
            if self.subtype == WILDCARD:
                return True
            if other.subtype == WILDCARD:
                return False
            return self.order < other.order

        return self.order < other.order

    def __lt__(self, other: "MediaRange") -> bool:
        """Sorting puts preferred media ranges first."""

        if not isinstance(other, MediaRange):
            return NotImplemented
        return self.precedes(other)

    def __str__(self) -> str:
        """Returns the string representation of the media range in Accept header format."""

        if self.qvalue == DEFAULT_QUALITY:
            return self.range
        q = 0 if self.qvalue == REJECTED else self.qvalue
        return f"{self.range};q={q:g}"


def parse_accept_header(value: str | None) -> list[MediaRange]:
    """
    Parses an HTTP Accept header into a list of MediaRange objects.

    Malformed elements are dropped; they never cause the header as a whole
    to be rejected.

    Args:
        value: Accept header string, or None

    Returns:
        A list of MediaRange objects sorted in descending precedence order.

    Example:
        >>> parse_accept_header("text/html,application/xml;q=0.9")
        [MediaRange(range='text/html', type='text', subtype='html', qvalue=1.0, order=0),
         MediaRange(range='application/xml', type='application', subtype='xml', qvalue=0.9, order=1)]
    """

    preferences = []
    for order, token in enumerate(split_fields(value or "", ",")):
        try:
            preferences.append(MediaRange.validate(token, order=order))
        except ValueError as e:
            logger.debug("Discarding media range %r: %s", token, e)
    return sorted(preferences)


def parse_accept_headers(value: list[str] | None) -> list[MediaRange]:
    """
    Parses multiple HTTP Accept headers, as if they were sent as a single
    comma-separated header.
    """

    return parse_accept_header(",".join(value or []))
