import re
import logging

from sensor_label.gs1_parser import SERIAL_AI
from sensor_label.numeric_candidates import choose_nearest_candidate

"""
Serial number extraction strategies.
Every strategy takes (label, tags, candidates) and returns a serial or None.
Strategies are tried in order and the first hit wins.
"""

# (21) and its usual OCR corruptions: (2I), (2Y), (23), lost parenthesis,
# or AI 21 glued straight onto the 12-digit serial.
AI21_PATTERNS = (
    re.compile(r'\(\s*2[1IY]\s*\)?\s*[:\-]?\s*([A-Z0-9\-]{6,20})'),
    re.compile(r'\b2[1IY]\)\s*[:\-]?\s*([A-Z0-9\-]{6,20})'),
    re.compile(r'\(\s*23\s*\)\s*[:\-]?\s*([A-Z0-9\-]{6,20})'),
    re.compile(r'(?<![0-9])21([0-9]{12})(?![0-9])'),
)

TWELVE_DIGITS = re.compile(r'[0-9]{12}')
STANDALONE_TWELVE_DIGITS = re.compile(r'(?<![0-9])([0-9]{12})(?![0-9])')

# Dexcom brand/model tokens in the cleaned text that anchor proximity search
ANCHOR_TOKEN_PATTERN = re.compile(r'\b(DEXCOM|XCOMG7|XCOM|G7|G6|G5)\b')
# Looser scan of the raw text for when the cleaned token was a corrected misread
RAW_ANCHOR_PATTERN = re.compile(r'[DP]?[E3]?XC[O0Q]M(?:G7)?|(?<![A-Z0-9])G[567](?![0-9])', re.IGNORECASE)

LABELLED_SERIAL_PATTERN = re.compile(
    r'\b(?:SERIAL(?:\s*(?:NUMBER|NO))?|S/N|SN)\s*[:\-]?\s*([A-Z0-9]{6,14})(?![A-Z0-9])'
)
BARE_SERIAL_PATTERN = re.compile(r'\b(?=[A-Z]*[0-9])([A-Z0-9]{10,14})\b')


def first_success(strategies, *args):
    """Run strategies in order, return the first truthy result."""
    for strategy in strategies:
        value = strategy(*args)
        if value:
            logging.debug(f"{strategy.__name__} → {value}")
            return value
    return None


def twelve_digit_serial(value):
    """12 digits after stripping non-digits, else the first 12-digit substring."""
    if not value:
        return None
    digits = re.sub(r'[^0-9]', '', value)
    if len(digits) == 12:
        return digits
    match = TWELVE_DIGITS.search(value)
    return match.group(0) if match else None


def serial_from_ai21_tag(label, tags, candidates):
    for pattern in AI21_PATTERNS:
        match = pattern.search(label.cleaned)
        if not match:
            continue
        serial = twelve_digit_serial(match.group(1))
        if serial:
            return serial
        logging.debug(f"AI 21 variant matched but no 12-digit serial in '{match.group(1)}'")
    return None


def serial_from_tag_map(label, tags, candidates):
    return twelve_digit_serial(tags.get(SERIAL_AI))


def locate_anchor_offset(raw_text, token):
    """
    Offset of the brand token in the raw text.
    Falls back to a tolerant scan for misread spellings, then to 0.
    """
    index = raw_text.upper().find(token)
    if index >= 0:
        return index
    match = RAW_ANCHOR_PATTERN.search(raw_text)
    if match:
        return match.start()
    return 0


def serial_near_brand_token(label, tags, candidates):
    if not candidates:
        return None
    token_match = ANCHOR_TOKEN_PATTERN.search(label.cleaned)
    if not token_match:
        return None

    anchor = locate_anchor_offset(label.raw, token_match.group(1))
    chosen = choose_nearest_candidate(candidates, anchor)
    logging.debug(f"Nearest candidate to '{token_match.group(1)}' at {anchor}: {chosen}")

    sub = TWELVE_DIGITS.search(chosen.value)
    return sub.group(0) if sub else chosen.value


def serial_from_any_digit_run(label, tags, candidates):
    match = STANDALONE_TWELVE_DIGITS.search(label.cleaned)
    if match:
        return match.group(1)
    if candidates:
        return candidates[0].value
    return None


DEXCOM_SERIAL_STRATEGIES = (
    serial_from_ai21_tag,
    serial_from_tag_map,
    serial_near_brand_token,
    serial_from_any_digit_run,
)


def extract_dexcom_serial(label, tags, candidates):
    """
    Extract a Dexcom serial robustly:
    - strict or corrupted (21) tag first
    - then the parsed GS1 tag map
    - then the numeric candidate nearest to the DEXCOM/XCOMG7 token
    - finally any plausible digit run
    """
    return first_success(DEXCOM_SERIAL_STRATEGIES, label, tags, candidates)


def extract_labelled_serial(label, tags=None, candidates=None):
    """Single pass for non-Dexcom labels: SERIAL/SN/S/N label, else a bare token."""
    match = LABELLED_SERIAL_PATTERN.search(label.cleaned)
    if match:
        logging.debug(f"Serial found after label: {match.group(1)}")
        return match.group(1)
    match = BARE_SERIAL_PATTERN.search(label.cleaned)
    if match:
        logging.debug(f"Serial found as bare token: {match.group(1)}")
        return match.group(1)
    return None
