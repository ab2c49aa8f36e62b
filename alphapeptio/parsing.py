"""Low-level text parsing helpers shared by the readers.

- Tokenizer: forward-only cursor over a string, used for the small
  grammars embedded in result columns
- read_double, read_int: strict number parsing, tolerant to ',' decimal separators
- decode_title: URL-decoding of spectrum titles
- parse_retention_time: seconds, optionally written as 'PT<seconds>S'
- score_to_evalue: linear search engine score -> e-value-like score
"""

import re
from typing import Optional
from urllib.parse import unquote_plus

import numpy as np

from .constants import NOT_AVAILABLE


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """Forward-only cursor over a string.

    Every read consumes text; the cursor never moves backwards. Reads that
    cannot find their delimiter return None and leave the cursor in place,
    so the caller can report exactly what was malformed.

    Examples
    --------
    >>> tok = Tokenizer("C4(carbamidomethyl|57.021464|fixed)")
    >>> tok.read_until("(")
    'C4'
    >>> tok.read_until_last(")")
    'carbamidomethyl|57.021464|fixed'
    >>> tok.at_end
    True
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def read_until(self, delimiter: str) -> Optional[str]:
        """Read up to the next delimiter and skip past it."""
        end = self.text.find(delimiter, self.position)
        if end == -1:
            return None
        token = self.text[self.position:end]
        self.position = end + len(delimiter)
        return token

    def read_until_last(self, delimiter: str) -> Optional[str]:
        """Read up to the last delimiter in the remaining text and skip past it."""
        end = self.text.rfind(delimiter, self.position)
        if end == -1:
            return None
        token = self.text[self.position:end]
        self.position = end + len(delimiter)
        return token

    def read_rest(self) -> str:
        token = self.text[self.position:]
        self.position = len(self.text)
        return token


# =============================================================================
# Numbers
# =============================================================================

# Plain decimal notation only: no '_' separators, no inf/nan
DECIMAL_PATTERN = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


def read_double(text: str) -> float:
    """Parse a decimal number written with either '.' or ',' as separator.

    Search engines write numbers with the decimal separator of the machine
    locale, so "57.021464" and "57,021464" must both be accepted.
    Surrounding whitespace is ignored.

    Parameters
    ----------
    text : str
        Number as text

    Returns
    -------
    float
        Parsed value

    Raises
    ------
    ValueError
        If the text is not a number in either notation

    Examples
    --------
    >>> read_double("42.010565")
    42.010565
    >>> read_double("42,010565")
    42.010565
    """
    text = text.strip()
    if DECIMAL_PATTERN.fullmatch(text) is not None:
        return float(text)
    dotted = text.replace(',', '.')
    if DECIMAL_PATTERN.fullmatch(dotted) is not None:
        return float(dotted)
    raise ValueError(f"Cannot parse number: {text!r}")


def read_int(text: str) -> int:
    """Parse an integer made of ASCII digits with an optional sign.

    Examples
    --------
    >>> read_int("-3")
    -3
    """
    if INTEGER_PATTERN.fullmatch(text) is None:
        raise ValueError(f"Cannot parse integer: {text!r}")
    return int(text)


def read_optional_double(text: Optional[str]) -> Optional[float]:
    """Like read_double, but empty cells and 'NA' give None."""
    if text is None:
        return None
    text = text.strip()
    if not text or text.upper() == NOT_AVAILABLE:
        return None
    return read_double(text)


def parse_retention_time(text: Optional[str]) -> Optional[float]:
    """Parse a retention time in seconds.

    MS Amanda writes either plain seconds ("2700.46") or an ISO 8601
    duration ("PT2700.460000S"), depending on the input spectrum format.

    Examples
    --------
    >>> parse_retention_time("PT2700.460000S")
    2700.46
    >>> parse_retention_time("")
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    upper = text.upper()
    if upper.startswith("PT") and upper.endswith("S"):
        text = text[2:-1]
    return read_double(text)


def score_to_evalue(raw_score: float) -> float:
    """Convert a linear score into an e-value-like score: 10^(-score).

    Monotonic: a higher raw score gives a lower (better) transformed score.
    Saturates to 0.0 / inf instead of raising for extreme scores.

    Examples
    --------
    >>> score_to_evalue(150.0)
    1e-150
    """
    with np.errstate(over='ignore', under='ignore'):
        return float(np.power(10.0, -raw_score))


# =============================================================================
# Text
# =============================================================================

def decode_title(title: str) -> str:
    """URL-decode a spectrum title ('+' -> space, '%xx' -> character)."""
    return unquote_plus(title, encoding='utf-8')
