import re

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(value) -> int:
    """
    Parse a plain decimal integer.

    Stricter than int(): no surrounding whitespace, no underscores and no
    non-ASCII digits.

    Raises:
        ValueError: value is not a plain decimal integer
    """
    text = str(value)
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)
