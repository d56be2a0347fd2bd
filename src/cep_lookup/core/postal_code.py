"""CEP parsing and validation.

A CEP is eight decimal digits, conventionally written ``NNNNN-NNN``.
Validation strips hyphens and checks the remaining characters; it never
touches the network.
"""

from __future__ import annotations

from dataclasses import dataclass

from cep_lookup.core.errors import CepValidationError

CEP_LENGTH = 8
_ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class PostalCode:
    """A validated CEP.

    Attributes:
        digits: The eight digits, without separators.

    Example:
        >>> cep = validate_cep("89010-904")
        >>> cep.digits
        '89010904'
        >>> cep.hyphenated
        '89010-904'
    """

    digits: str

    @property
    def hyphenated(self) -> str:
        """Canonical ``NNNNN-NNN`` form."""
        return f"{self.digits[:5]}-{self.digits[5:]}"

    def __str__(self) -> str:
        return self.digits


def clean_cep(raw: str) -> str:
    """Remove every hyphen from a raw CEP. Nothing else is stripped."""
    return raw.replace("-", "")


def validate_cep(raw: str) -> PostalCode:
    """Validate a raw CEP string.

    Args:
        raw: CEP as typed by a user, with or without hyphens.

    Returns:
        PostalCode holding the cleaned digits.

    Raises:
        CepValidationError: If the cleaned value is not exactly 8 ASCII digits.
    """
    if not isinstance(raw, str):
        raise CepValidationError.for_input(raw)

    cleaned = clean_cep(raw)
    # str.isdigit() accepts non-ASCII digits, so check the characters directly
    if len(cleaned) != CEP_LENGTH or not set(cleaned) <= _ASCII_DIGITS:
        raise CepValidationError.for_input(raw)

    return PostalCode(cleaned)


def is_valid_cep(raw: str) -> bool:
    """Return True if ``raw`` would pass :func:`validate_cep`."""
    try:
        validate_cep(raw)
    except CepValidationError:
        return False
    return True
