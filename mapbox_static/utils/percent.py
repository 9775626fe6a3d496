"""
Percent-encoding against the Static API's allowed character sets.

Overlay tokens are embedded in a single path segment, so a literal "/" would
split the segment and a literal ")" would close the token early. Both are
always escaped in PATH_SAFE, which is used for every overlay token.

Letters, digits and "-._~" are always allowed; the constants below list the
extra punctuation each set lets through.
"""

from urllib.parse import quote

# URL path characters minus "/" and ")"
PATH_SAFE = "!$&'(*+,;=:@"

# URL query characters minus "/" (older service revision)
LEGACY_QUERY_SAFE = "!$&'()*+,;=:@?"

# Query string values: query characters minus the pair/key delimiters
QUERY_VALUE_SAFE = "!$'()*,;:@/?"


def percent_encode(text: str, allowed: str = PATH_SAFE) -> str:
    """
    Percent-encode text, leaving only the allowed characters as-is.

    Non-ASCII characters are encoded byte-wise from UTF-8, with uppercase hex.

    Args:
        text: Raw string to encode
        allowed: Punctuation to leave unescaped (alphanumerics and "-._~" are
            always kept)

    Returns:
        Encoded string
    """
    return quote(text, safe=allowed, encoding="utf-8", errors="strict")
