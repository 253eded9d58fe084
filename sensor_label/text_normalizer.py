import re
import logging
from dataclasses import dataclass

"""
OCR text normalization for sensor package labels.
The raw text is kept next to the cleaned text because proximity search
works on offsets in the raw OCR output.
"""

# Ordered (pattern, replacement) corrections. Only whole brand tokens are
# rewritten so serial digits are never touched.
OCR_CORRECTIONS = (
    (r'\bP[EFP]XCOM\b', 'DEXCOM'),
    (r'\bPEXCOMG7(?![A-Z])', 'XCOMG7'),
    (r'\bDEXCOMG7(?![A-Z])', 'XCOMG7'),
    (r'\bDEXC0M\b', 'DEXCOM'),   # 0 -> O
    (r'\bDEXCQM\b', 'DEXCOM'),   # Q -> O
    (r'\bD3XCOM\b', 'DEXCOM'),   # 3 -> E
    (r'\bD[E3]XC?[O0Q]M\b', 'DEXCOM'),
    (r'\bG7SENS[O0]R\b', 'G7 SENSOR'),
    # brand+model glued to a digit run
    (r'(DEXCOM G7)([0-9]{6,})', r'\1 \2'),
    (r'(XCOMG7)([0-9]{6,})', r'\1 \2'),
    (r'\bP21\b', '(21)'),
)


@dataclass(frozen=True)
class LabelText:
    raw: str
    cleaned: str


_NON_PRINTABLE = re.compile(r'[^\x20-\x7E\r\n\t]')
_UNSAFE_PUNCTUATION = re.compile(r'[^A-Za-z0-9\s/\-:()]')
_WHITESPACE = re.compile(r'\s+')


def apply_ocr_corrections(text, corrections=OCR_CORRECTIONS):
    """Apply the correction table in order to already-cleaned text."""
    corrected = text
    for pattern, replacement in corrections:
        corrected = re.sub(pattern, replacement, corrected)
    if corrected != text:
        logging.debug(f"OCR brand-token correction: '{text}' → '{corrected}'")
    return corrected


def clean_extracted_text(text, corrections=OCR_CORRECTIONS):
    """
    Normalize OCR text:
    - drop invisible characters and punctuation outside [A-Z0-9 ()/:-]
    - collapse whitespace, trim, uppercase
    - fix known misreads of brand tokens
    """
    if not text:
        return ""

    cleaned = _NON_PRINTABLE.sub('', text)
    cleaned = _UNSAFE_PUNCTUATION.sub('', cleaned)
    cleaned = _WHITESPACE.sub(' ', cleaned).strip().upper()

    return apply_ocr_corrections(cleaned, corrections)


def normalize_label_text(text, corrections=OCR_CORRECTIONS):
    """Return both the raw OCR text and its cleaned form."""
    if text is None:
        raw = ""
    elif isinstance(text, str):
        raw = text
    else:
        raw = str(text)
    return LabelText(raw=raw, cleaned=clean_extracted_text(raw, corrections))
