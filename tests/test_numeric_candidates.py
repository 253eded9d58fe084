from sensor_label.numeric_candidates import (
    NumericCandidate,
    choose_nearest_candidate,
    find_numeric_candidates,
)


def test_only_runs_of_ten_to_fourteen_digits():
    text = "abc 123456 x 987654321098 y 123456789012345"
    assert find_numeric_candidates(text) == [NumericCandidate('987654321098', 13)]


def test_length_boundaries():
    candidates = find_numeric_candidates("1234567890 12345678901234")
    assert [c.value for c in candidates] == ['1234567890', '12345678901234']
    assert [c.offset for c in candidates] == [0, 11]


def test_no_candidates():
    assert find_numeric_candidates("") == []
    assert find_numeric_candidates("price 19.99") == []


def test_nearest_candidate_by_offset():
    candidates = [NumericCandidate('1111111111', 0), NumericCandidate('222222222222', 30)]
    assert choose_nearest_candidate(candidates, 10).value == '1111111111'
    assert choose_nearest_candidate(candidates, 25).value == '222222222222'


def test_tie_prefers_twelve_digits():
    candidates = [NumericCandidate('1111111111', 0), NumericCandidate('222222222222', 30)]
    assert choose_nearest_candidate(candidates, 15).value == '222222222222'


def test_nearest_of_nothing():
    assert choose_nearest_candidate([], 5) is None
