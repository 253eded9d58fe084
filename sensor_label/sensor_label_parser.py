import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from sensor_label.text_normalizer import OCR_CORRECTIONS, normalize_label_text
from sensor_label.gs1_parser import parse_gs1_tags
from sensor_label.brand_parsers import (
    Manufacturer,
    detect_manufacturer_and_model,
    get_sensor_parser,
    validate_serial_number,
    validate_lot_number,
)
from sensor_label.numeric_candidates import find_numeric_candidates
from sensor_label.date_extractor import extract_dates
from sensor_label.confidence_scorer import DEFAULT_WEIGHTS, ConfidenceWeights, calculate_confidence_scores

logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'DEBUG'), format='%(asctime)s - %(levelname)s - %(message)s')

__all__ = [
    'ExtractOptions',
    'ExtractionResult',
    'analyze_sensor_label',
    'extract_sensor_data',
    'validate_serial_number',
    'validate_lot_number',
]

# camelCase keys used by the app that stores the results
_WIRE_NAMES = {
    'serial_number': 'serialNumber',
    'lot_number': 'lotNumber',
    'manufacture_date': 'manufactureDate',
    'expiration_date': 'expirationDate',
    'manufacturer': 'manufacturer',
    'model_name': 'modelName',
    'confidence': 'confidence',
}


@dataclass(frozen=True)
class ExtractOptions:
    weights: ConfidenceWeights = DEFAULT_WEIGHTS
    corrections: tuple = OCR_CORRECTIONS


@dataclass(frozen=True)
class ExtractionResult:
    confidence: int = 0
    serial_number: Optional[str] = None
    lot_number: Optional[str] = None
    manufacture_date: Optional[str] = None
    expiration_date: Optional[str] = None
    manufacturer: Optional[Manufacturer] = None
    model_name: Optional[str] = None
    # date fields returned verbatim because they could not be parsed
    unnormalized_dates: Tuple[str, ...] = field(default=())

    def to_dict(self):
        """Wire form: camelCase keys, absent fields omitted."""
        data = {}
        for name, wire_name in _WIRE_NAMES.items():
            value = getattr(self, name)
            if value is None:
                continue
            data[wire_name] = value.value if isinstance(value, Manufacturer) else value
        if self.unnormalized_dates:
            data['unnormalizedDates'] = [_WIRE_NAMES[name] for name in self.unnormalized_dates]
        return data


def analyze_sensor_label(ocr_text, options=None):
    """
    Parse sensor label OCR text into an ExtractionResult.
    Returns (result, confidence_info) where confidence_info carries the
    scoring details and the needs_review flag.
    """
    options = options or ExtractOptions()

    label = normalize_label_text(ocr_text, options.corrections)
    logging.debug(f"--- Starting sensor label parse ---")
    logging.debug(f"Cleaned text: {label.cleaned}")

    tags = parse_gs1_tags(label.cleaned)
    manufacturer, model_name = detect_manufacturer_and_model(label.cleaned)
    candidates = find_numeric_candidates(label.raw)

    parser = get_sensor_parser(manufacturer)
    serial_number = parser.extract_serial(label, tags, candidates)
    lot_number = parser.extract_lot(label, tags)
    dates, unnormalized = extract_dates(label.cleaned, tags)

    fields = {
        'manufacturer': None if manufacturer == Manufacturer.UNKNOWN else manufacturer,
        'model_name': model_name,
        'serial_number': serial_number,
        'lot_number': lot_number,
        'manufacture_date': dates.get('manufacture_date'),
        'expiration_date': dates.get('expiration_date'),
    }
    confidence_info = calculate_confidence_scores(fields, label.cleaned, options.weights)

    result = ExtractionResult(
        confidence=confidence_info["score"],
        unnormalized_dates=tuple(unnormalized),
        **fields
    )
    logging.debug(f"Final results: {result.to_dict()}")
    return result, confidence_info


def extract_sensor_data(ocr_text, options=None):
    """
    Main entry point: raw OCR text in, ExtractionResult out.
    Never raises; a field that could not be found is simply absent.

    Example:
        result = extract_sensor_data("DEXCOM G7 (21)987654321098")
    """
    result, _ = analyze_sensor_label(ocr_text, options)
    return result
