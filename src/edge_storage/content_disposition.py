"""Content-Disposition header rendering."""

import unicodedata
from urllib.parse import quote

DISPOSITION_TYPES = ("attachment", "inline")

# Characters kept verbatim besides ASCII letters, digits and "_.-~".
_TRADITIONAL_SAFE = " !#$+^`|"
_RFC_5987_SAFE = "!#$&+^`|"


def _transliterate(filename: str) -> str:
    decomposed = unicodedata.normalize("NFKD", filename)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return "".join(c if c.isascii() else "?" for c in stripped)


def content_disposition_with(filename: str, type: str | None = "inline") -> str:
    """
    Builds a Content-Disposition header value for ``filename``.

    Unknown disposition types fall back to ``inline``. The header carries both a
    transliterated ASCII ``filename`` for old clients and an RFC 5987
    ``filename*`` with the exact UTF-8 name.

    Example:
        >>> content_disposition_with("report.pdf", "attachment")
        'attachment; filename="report.pdf"; filename*=UTF-8\\'\\'report.pdf'
    """
    disposition = type if type in DISPOSITION_TYPES else "inline"
    ascii_name = quote(_transliterate(filename), safe=_TRADITIONAL_SAFE)
    utf8_name = quote(filename, safe=_RFC_5987_SAFE)
    return f"{disposition}; filename=\"{ascii_name}\"; filename*=UTF-8''{utf8_name}"
