"""Unicode normalization applied before tokenization."""

from __future__ import annotations

import unicodedata


def normalize(text: str) -> str:
    """Return ``text`` in Unicode Normalization Form C.

    Composed and decomposed spellings of the same characters ("é" as U+00E9
    or as "e" + U+0301) produce identical output, so they tokenize the same.
    """
    return unicodedata.normalize("NFC", text)
