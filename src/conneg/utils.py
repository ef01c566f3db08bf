import re
import string

WHITESPACE = " \t\n\r\f\v"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
    r"|inf(?:inity)?"
    r"|nan"
    r")",
    re.IGNORECASE,
)


def trim(value: str) -> str:
    """Strip whitespace from both ends of a string."""
    return value.strip(WHITESPACE)


def lower(value: str) -> str:
    """Lowercase ASCII letters only, leaving every other character untouched."""
    return value.translate(_ASCII_LOWER)


def parse_float(value: str) -> float:
    """Parses the leading floating-point literal of a string.

    Hexadecimal literals are accepted (`"0x1p-1"` is `0.5`). Trailing
    characters after the literal are ignored, so `"0.5abc"` parses as `0.5`.

    Raises:
        ValueError: If the string does not start with a float literal, or a
            hexadecimal literal overflows
    """
    match = _FLOAT_PREFIX.match(trim(value))
    if not match:
        raise ValueError(f"could not convert string to float: {value!r}")
    if match.group("hex"):
        try:
            return float.fromhex(match.group())
        except OverflowError as e:
            raise ValueError(f"float out of range: {value!r}") from e
    return float(match.group())


def split_fields(value: str, separator: str) -> list[str]:
    """Splits a string on a separator.

    A single empty field after the last separator is not a field,
    so `"a,"` splits into `["a"]` and `""` into `[]`.
    """
    fields = value.split(separator)
    if fields[-1] == "":
        fields.pop()
    return fields
