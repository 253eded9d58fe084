import re
import calendar
import logging
from datetime import date

from sensor_label.gs1_parser import MANUFACTURE_DATE_AI, EXPIRATION_DATE_AI

BARE_DATE_PATTERN = re.compile(r'\b((?:19|20)\d{2}[-/]\d{2}[-/]\d{2})\b')

_ISO_DATE = re.compile(r'^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$')
_US_DATE = re.compile(r'^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$')
_COMPACT_DATE = re.compile(r'^(\d{4})(\d{2})(\d{2})$')
_GS1_DATE = re.compile(r'^(\d{2})(\d{2})(\d{2})$')


def _format_date(year, month, day):
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def normalize_date(value):
    """
    Normalize a label date to YYYY-MM-DD.
    Returns (date_string, normalized). Unparseable input comes back unchanged
    with normalized=False.
    """
    text = value.strip()
    formatted = None

    match = _ISO_DATE.match(text) or _COMPACT_DATE.match(text)
    if match:
        formatted = _format_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    elif _US_DATE.match(text):
        month, day, year = _US_DATE.match(text).groups()
        formatted = _format_date(int(year), int(month), int(day))
    elif _GS1_DATE.match(text):
        # GS1 YYMMDD; day 00 means the last day of the month
        yy, mm, dd = (int(part) for part in _GS1_DATE.match(text).groups())
        year = 2000 + yy
        if dd == 0 and 1 <= mm <= 12:
            dd = calendar.monthrange(year, mm)[1]
        formatted = _format_date(year, mm, dd)

    if formatted is None:
        logging.debug(f"Date left unnormalized: '{value}'")
        return value, False
    return formatted, True


def _date_tag(tags, ai):
    value = tags.get(ai)
    # a date AI value has to start with a digit to be a date at all
    if value and value[0].isdigit():
        return value
    return None


def extract_dates(cleaned_text, tags):
    """
    Manufacture (11) and expiration (17) dates from GS1 tags; bare
    YYYY-MM-DD dates fill whichever is still missing, in text order.
    Returns (dates, unnormalized) where dates maps field name to value.
    """
    raw_dates = {
        'manufacture_date': _date_tag(tags, MANUFACTURE_DATE_AI),
        'expiration_date': _date_tag(tags, EXPIRATION_DATE_AI),
    }

    consumed = {value for value in raw_dates.values() if value}
    bare = [d for d in BARE_DATE_PATTERN.findall(cleaned_text or '') if d not in consumed]
    for field in ('manufacture_date', 'expiration_date'):
        if raw_dates[field] is None and bare:
            raw_dates[field] = bare.pop(0)

    dates = {}
    unnormalized = []
    for field, value in raw_dates.items():
        if value is None:
            continue
        dates[field], normalized = normalize_date(value)
        if not normalized:
            unnormalized.append(field)

    logging.debug(f"Extracted dates: {dates}")
    return dates, unnormalized
