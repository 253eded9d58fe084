import re
import logging

from sensor_label.gs1_parser import LOT_AI
from sensor_label.serial_extractor import first_success

AI10_PATTERN = re.compile(r'\(\s*1[O0]\s*\)\s*[:\-]?\s*([A-Z0-9]{6,14})(?![A-Z0-9])')
# NUMBER / NO belong to the keyword and are never taken as the value
LOT_KEYWORD_PATTERN = re.compile(r'\bLOT(?:\s*(?:NUMBER|NO))?\s*[:\-]?\s*(?!NUMBER(?![A-Z0-9]))([A-Z0-9]{6,14})(?![A-Z0-9])')
BATCH_KEYWORD_PATTERN = re.compile(r'\bBATCH(?:\s*(?:NUMBER|NO))?\s*[:\-]?\s*(?!NUMBER(?![A-Z0-9]))([A-Z0-9]{6,14})(?![A-Z0-9])')
RAW_LOT_PATTERN = re.compile(r'\bLOT(?:\s*(?:NUMBER|NO))?[^A-Za-z0-9]{0,3}(?!NUMBER(?![A-Za-z0-9]))([A-Za-z0-9]{6,14})(?![A-Za-z0-9])', re.IGNORECASE)


def lot_from_ai10_tag(label, tags):
    match = AI10_PATTERN.search(label.cleaned)
    return match.group(1) if match else None


def lot_after_keyword(label, tags):
    match = LOT_KEYWORD_PATTERN.search(label.cleaned)
    return match.group(1) if match else None


def lot_from_tag_map(label, tags):
    value = re.sub(r'[^A-Z0-9]', '', tags.get(LOT_AI, '').upper())
    if 6 <= len(value) <= 14:
        return value
    return None


def lot_after_batch_keyword(label, tags):
    match = BATCH_KEYWORD_PATTERN.search(label.cleaned)
    return match.group(1) if match else None


def lot_from_raw_text(label, tags):
    # punctuation dropped by cleaning can still separate LOT from its value here
    match = RAW_LOT_PATTERN.search(label.raw)
    return match.group(1) if match else None


LOT_STRATEGIES = (
    lot_from_ai10_tag,
    lot_after_keyword,
    lot_from_tag_map,
    lot_after_batch_keyword,
    lot_from_raw_text,
)


def extract_lot_number(label, tags):
    """Lot number from the (10) tag or LOT keyword, uppercased, or None."""
    lot = first_success(LOT_STRATEGIES, label, tags)
    if not lot:
        logging.debug("No lot found.")
        return None
    return lot.strip().upper()
