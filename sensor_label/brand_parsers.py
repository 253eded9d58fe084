import re
import logging
from enum import Enum

from sensor_label.serial_extractor import extract_dexcom_serial, extract_labelled_serial
from sensor_label.lot_extractor import extract_lot_number

"""
Manufacturer-specific parsers for CGM sensor labels.
Each manufacturer has its own serial strategy and validation rules.
"""


class Manufacturer(str, Enum):
    DEXCOM = 'Dexcom'
    FREESTYLE = 'Freestyle'
    ABBOTT = 'Abbott'
    UNKNOWN = 'Unknown'

    @classmethod
    def from_name(cls, name):
        """Case-insensitive lookup; anything unrecognized is UNKNOWN."""
        if isinstance(name, cls):
            return name
        if not name:
            return cls.UNKNOWN
        for member in cls:
            if member.value.lower() == str(name).strip().lower():
                return member
        return cls.UNKNOWN


DEXCOM_KEYWORDS = re.compile(r'DEXCOM|XCOM')
DEXCOM_SERIAL_TAG = re.compile(r'\(21\)')
# most specific first; a model token stands alone or follows the glued XCOM brand
DEXCOM_MODELS = (
    ('G7', re.compile(r'(?:(?<![A-Z0-9])|(?<=XCOM))G7(?![0-9])')),
    ('G6', re.compile(r'(?:(?<![A-Z0-9])|(?<=XCOM))G6(?![0-9])')),
    ('G5', re.compile(r'(?:(?<![A-Z0-9])|(?<=XCOM))G5(?![0-9])')),
)

FREESTYLE_KEYWORDS = re.compile(r'FREESTYLE|LIBRE|ABBOTT')
FREESTYLE_MODELS = (
    ('Libre 3', re.compile(r'LIBRE ?3(?![0-9])')),
    ('Libre 2', re.compile(r'LIBRE ?2(?![0-9])')),
    ('Libre', re.compile(r'LIBRE')),
)

ALPHANUMERIC_ONLY = re.compile(r'[^A-Z0-9]')


def _first_model(models, text):
    for model_name, pattern in models:
        if pattern.search(text):
            return model_name
    return None


def detect_manufacturer_and_model(text):
    """
    Classify manufacturer and model family from keyword evidence.
    Returns (Manufacturer, model name or None).
    """
    upper = (text or '').upper()

    dexcom_model = _first_model(DEXCOM_MODELS, upper)
    has_serial_tag = bool(DEXCOM_SERIAL_TAG.search(upper))
    if DEXCOM_KEYWORDS.search(upper) or dexcom_model or has_serial_tag:
        if dexcom_model is None and has_serial_tag:
            dexcom_model = 'G7'
        logging.debug(f"Found manufacturer: Dexcom, model: {dexcom_model}")
        return Manufacturer.DEXCOM, dexcom_model

    if FREESTYLE_KEYWORDS.search(upper):
        model_name = _first_model(FREESTYLE_MODELS, upper)
        logging.debug(f"Found manufacturer: Freestyle, model: {model_name}")
        return Manufacturer.FREESTYLE, model_name

    return Manufacturer.UNKNOWN, None


def _alphanumeric(value):
    return ALPHANUMERIC_ONLY.sub('', str(value).upper())


class SensorParser:
    """Base parser: labelled-serial search, generic lot chain, loose validation"""

    def __init__(self, manufacturer):
        self.manufacturer = manufacturer

    def extract_serial(self, label, tags, candidates):
        return extract_labelled_serial(label)

    def extract_lot(self, label, tags):
        return extract_lot_number(label, tags)

    def validate_serial(self, serial):
        return 6 <= len(serial) <= 14

    def validate_lot(self, lot):
        """Lot numbers are optional unless the subclass says otherwise"""
        if not lot:
            return True
        return 4 <= len(lot) <= 15


class DexcomParser(SensorParser):
    """Dexcom G5/G6/G7 parser"""

    def __init__(self):
        super().__init__(Manufacturer.DEXCOM)

    def extract_serial(self, label, tags, candidates):
        return extract_dexcom_serial(label, tags, candidates)

    def validate_serial(self, serial):
        """12-digit GS1 serial, any 10-14 digit run, or the printed XCOMG7 token"""
        if serial == 'XCOMG7':
            return True
        return serial.isdigit() and 10 <= len(serial) <= 14

    def validate_lot(self, lot):
        # every Dexcom box prints a lot
        if not lot:
            return False
        return 4 <= len(lot) <= 15


class FreestyleParser(SensorParser):
    """FreeStyle Libre (Abbott) parser"""

    def __init__(self, manufacturer=Manufacturer.FREESTYLE):
        super().__init__(manufacturer)

    def validate_serial(self, serial):
        return 6 <= len(serial) <= 12


def get_sensor_parser(manufacturer):
    """Get the appropriate parser for the detected manufacturer"""
    manufacturer = Manufacturer.from_name(manufacturer)

    if manufacturer == Manufacturer.DEXCOM:
        return DexcomParser()
    elif manufacturer in (Manufacturer.FREESTYLE, Manufacturer.ABBOTT):
        return FreestyleParser(manufacturer)

    return SensorParser(Manufacturer.UNKNOWN)


def validate_serial_number(serial_number, manufacturer=None):
    """
    Check that a serial has a plausible shape for the manufacturer.
    Never raises; a missing serial is simply invalid.
    """
    if not serial_number:
        return False
    cleaned = _alphanumeric(serial_number)
    if not cleaned:
        return False
    return get_sensor_parser(manufacturer).validate_serial(cleaned)


def validate_lot_number(lot_number, manufacturer=None):
    """Check lot shape; a missing lot is only invalid for Dexcom."""
    cleaned = _alphanumeric(lot_number) if lot_number else ''
    return get_sensor_parser(manufacturer).validate_lot(cleaned)
