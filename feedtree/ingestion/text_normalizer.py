"""
Text Normalizer
===============

Second-pass cleanup for narrative feed fields: literal CDATA markers that
leaked through the XML layer, UTF-8 punctuation that was decoded as
Windows-1252/Latin-1 somewhere upstream, and surrounding whitespace.
"""

from typing import Tuple

CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"

# Applied in order. Longer sequences come before the bare "â€" prefix they
# share; the bare prefix is what remains of a right double quotation mark
# (E2 80 9D) once the undefined 0x9D byte has been dropped.
MOJIBAKE_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("â€™", "'"),  # right single quotation mark
    ("â€˜", "'"),  # left single quotation mark
    ("â€œ", '"'),  # left double quotation mark
    ("â€”", "—"),  # em dash
    ("â€“", "–"),  # en dash
    ("â€¦", "…"),  # horizontal ellipsis
    ("â€\u009d", '"'),  # right double quotation mark
    ("â€", '"'),
    ("Â", ""),  # stray marker before a no-break space
)


def strip_cdata_markers(text: str) -> str:
    """Remove a literal CDATA open marker at the start and close marker at the end."""
    if text.startswith(CDATA_OPEN):
        text = text[len(CDATA_OPEN):]
    if text.endswith(CDATA_CLOSE):
        text = text[: -len(CDATA_CLOSE)]
    return text


def repair_mojibake(text: str) -> str:
    for broken, fixed in MOJIBAKE_REPLACEMENTS:
        text = text.replace(broken, fixed)
    return text


def _normalize_once(text: str) -> str:
    text = strip_cdata_markers(text.strip())
    return repair_mojibake(text).strip()


def normalize_text(raw: str) -> str:
    """Clean a raw text field.

    Every step only ever shortens the string, so repeating the pass until
    nothing changes terminates, and the result is a fixed point:
    ``normalize_text(normalize_text(s)) == normalize_text(s)``.

    Args:
        raw: Field text as delivered by the XML layer (None is treated as empty)

    Returns:
        The cleaned text
    """
    text = raw or ""
    while True:
        cleaned = _normalize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
