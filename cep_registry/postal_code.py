"""Postal code (CEP) normalization."""

import re

from cep_registry.exceptions import InvalidInputError

_SEPARATORS = re.compile(r"[\s.\-]")
_DIGITS = re.compile(r"^[0-9]{8}$")


def digits_only(postal_code: str) -> str:
    """Reduce a postal code to its 8 digits.

    Accepts ``01310-100``, ``01310100``, ``01.310-100`` and surrounding
    whitespace.

    Raises
    ------
    InvalidInputError
        If the value is not a string or does not reduce to exactly 8 digits.
    """
    if not isinstance(postal_code, str):
        raise InvalidInputError(f"Postal code must be a string, got {type(postal_code).__name__}")

    digits = _SEPARATORS.sub("", postal_code.strip())
    if not _DIGITS.match(digits):
        raise InvalidInputError(f"Invalid postal code: {postal_code!r}")
    return digits


def normalize(postal_code: str) -> str:
    """Return the canonical ``NNNNN-NNN`` form used as the address key."""
    digits = digits_only(postal_code)
    return f"{digits[:5]}-{digits[5:]}"


def is_valid(postal_code: str) -> bool:
    """Check whether a postal code can be normalized."""
    try:
        digits_only(postal_code)
    except InvalidInputError:
        return False
    return True
