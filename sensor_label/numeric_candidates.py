import re
from dataclasses import dataclass


@dataclass(frozen=True)
class NumericCandidate:
    value: str
    offset: int


# Maximal digit runs only; shorter runs are prices or counts, longer ones
# are GTINs or concatenated barcode payloads.
CANDIDATE_PATTERN = re.compile(r'(?<![0-9])([0-9]{10,14})(?![0-9])')


def find_numeric_candidates(text):
    """Return 10-14 digit runs with their start offset in the given text."""
    if not text:
        return []
    return [NumericCandidate(m.group(1), m.start(1)) for m in CANDIDATE_PATTERN.finditer(text)]


def choose_nearest_candidate(candidates, anchor_offset):
    """
    Pick the candidate closest to anchor_offset by absolute character distance.
    On equal distance a 12-digit candidate beats one of any other length.
    """
    best = None
    best_distance = None
    for candidate in candidates:
        distance = abs(candidate.offset - anchor_offset)
        if best is None or distance < best_distance:
            best, best_distance = candidate, distance
        elif distance == best_distance and len(candidate.value) == 12 and len(best.value) != 12:
            best = candidate
    return best
