import re
import logging

"""
GS1 Application Identifier parsing from OCR text.
Handles (21)value, 21)value, 21:value and (17)2026-03-15 style tags.
"""

SERIAL_AI = '21'
LOT_AI = '10'
MANUFACTURE_DATE_AI = '11'
EXPIRATION_DATE_AI = '17'

# '(' + 2-3 digit AI + optional ')', or a bare AI closed by ')', ':' or '-';
# then optional ':' or '-' and the value. A bare digit run with no delimiter
# is not a tag. Values may carry inner '/' or '-' so printed dates are
# captured whole.
GS1_TAG_PATTERN = re.compile(
    r'(?:\((\d{2,3})\)?|\b(\d{2,3})[):\-])\s*[:\-]?\s*'
    r'([A-Z0-9](?:[A-Z0-9]|[/\-](?=[A-Z0-9])){5,19})',
    re.IGNORECASE,
)


def parse_gs1_tags(text):
    """
    Build the AI -> value map for one label.
    The first occurrence of an AI wins; later duplicates are ignored.
    """
    tags = {}
    if not text:
        return tags

    for match in GS1_TAG_PATTERN.finditer(text):
        ai = match.group(1) or match.group(2)
        value = match.group(3)
        if ai not in tags:
            tags[ai] = value.upper()

    if tags:
        logging.debug(f"GS1 tags found: {tags}")
    return tags


def has_explicit_tag(text, ai):
    """True if the AI appears in its canonical parenthesized form, e.g. (21)."""
    return bool(text) and f'({ai})' in text
