import logging
from dataclasses import dataclass

from sensor_label.gs1_parser import SERIAL_AI, LOT_AI, has_explicit_tag


@dataclass(frozen=True)
class ConfidenceWeights:
    """Points per recovered field and per structural GS1 hint."""
    manufacturer: int = 25
    model: int = 15
    serial: int = 40
    lot: int = 10
    expiration: int = 5
    serial_tag: int = 10
    lot_tag: int = 5
    cap: int = 100
    review_threshold: int = 70


DEFAULT_WEIGHTS = ConfidenceWeights()


def calculate_confidence_scores(fields, cleaned_text="", weights=DEFAULT_WEIGHTS):
    """
    Calculate the 0-100 confidence for one extraction.

    Scoring criteria:
    - Which fields were recovered (serial dominates)
    - Explicit (21) / (10) GS1 tags present in the label text

    fields is a mapping with manufacturer, model_name, serial_number,
    lot_number and expiration_date; missing or empty values score nothing.
    """
    score = 0
    details = []

    field_weights = (
        ('manufacturer', weights.manufacturer, "Manufacturer detected"),
        ('model_name', weights.model, "Model detected"),
        ('serial_number', weights.serial, "Serial number extracted"),
        ('lot_number', weights.lot, "Lot number extracted"),
        ('expiration_date', weights.expiration, "Expiration date extracted"),
    )
    for key, points, reason in field_weights:
        if fields.get(key):
            score += points
            details.append(f"{reason} (+{points})")

    if has_explicit_tag(cleaned_text, SERIAL_AI):
        score += weights.serial_tag
        details.append(f"GS1 (21) serial tag present (+{weights.serial_tag})")
    if has_explicit_tag(cleaned_text, LOT_AI):
        score += weights.lot_tag
        details.append(f"GS1 (10) lot tag present (+{weights.lot_tag})")

    score = max(0, min(score, weights.cap))

    logging.debug(f"Confidence score: {score}% ({'; '.join(details) or 'nothing recovered'})")

    return {
        "score": score,
        "details": details,
        "needs_review": score < weights.review_threshold,
    }
