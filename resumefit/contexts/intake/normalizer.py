"""
Resume text normalizer for the Intake context.

Resume text arrives from PDF extraction, copy-paste and word processors, so
line endings and invisible characters vary wildly. Normalization happens once
BEFORE segmentation so every downstream pattern sees the same text.

Quotes, dashes and bullet glyphs are left alone: achievements are selected
verbatim from the normalized text and must stay recognizable in the source.
"""

import re
import unicodedata

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space → space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
}


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFC composition and removes or replaces invisible characters.
    Compatibility characters (fractions, ellipses, ligatures) are kept as written so
    achievements stay literal substrings of the source.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def normalize_newlines(text: str) -> str:
    """Convert \\r\\n and bare \\r line endings to \\n."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_resume_text(text: str) -> str:
    """
    Prepare raw resume text for segmentation.

    Steps:
    1. Unify line endings
    2. Normalize unicode (NFC, invisible characters)
    3. Strip trailing whitespace from every line (leading tabs and indents survive)
    4. Collapse runs of 3+ newlines to a single blank line

    Args:
        text: Raw resume text

    Returns:
        Normalized text
    """
    text = normalize_unicode(normalize_newlines(text))
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip("\n")
