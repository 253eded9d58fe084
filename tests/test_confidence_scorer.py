from itertools import combinations

from sensor_label.confidence_scorer import ConfidenceWeights, calculate_confidence_scores

ALL_FIELDS = {
    'manufacturer': 'Dexcom',
    'model_name': 'G7',
    'serial_number': '987654321098',
    'lot_number': 'LOT4455XY',
    'expiration_date': '2026-03-15',
}


def test_everything_recovered_is_capped_at_100():
    info = calculate_confidence_scores(ALL_FIELDS, "(21)987654321098 (10)LOT4455XY")
    assert info["score"] == 100
    assert info["needs_review"] is False
    assert len(info["details"]) == 7


def test_nothing_recovered():
    info = calculate_confidence_scores({}, "")
    assert info == {"score": 0, "details": [], "needs_review": True}


def test_field_weights():
    assert calculate_confidence_scores({'serial_number': '987654321098'})["score"] == 40
    assert calculate_confidence_scores({'manufacturer': 'Dexcom', 'model_name': 'G7'})["score"] == 40
    assert calculate_confidence_scores({'lot_number': 'X', 'expiration_date': 'Y'})["score"] == 15


def test_manufacture_date_does_not_score():
    assert calculate_confidence_scores({'manufacture_date': '2025-01-10'})["score"] == 0


def test_structural_tag_bonus():
    assert calculate_confidence_scores({}, "(21)X (10)Y")["score"] == 15
    assert calculate_confidence_scores({}, "21)X 10:Y")["score"] == 0


def test_custom_weights():
    weights = ConfidenceWeights(serial=50, review_threshold=40)
    info = calculate_confidence_scores({'serial_number': '987654321098'}, "", weights)
    assert info["score"] == 50
    assert info["needs_review"] is False


def test_superset_of_fields_never_scores_lower():
    keys = list(ALL_FIELDS)
    for size in range(len(keys) + 1):
        for subset in combinations(keys, size):
            smaller = {k: ALL_FIELDS[k] for k in subset}
            for extra in keys:
                larger = dict(smaller, **{extra: ALL_FIELDS[extra]})
                assert (calculate_confidence_scores(larger)["score"]
                        >= calculate_confidence_scores(smaller)["score"])
