"""Tests for comment scoring and spend parsing."""

import pytest

from arc_hives.errors import ValidationError
from arc_hives.services.scoring import SpendRequest, parse_spend, round2, score_comment


def test_score_scenario():
    """200 characters, one citation and a disclosed identity score 9."""
    assert score_comment(200, 1, True) == 9.0


def test_score_components():
    assert score_comment(0, 0, False) == 0.0
    assert score_comment(150, 0, False) == 1.5
    assert score_comment(0, 3, False) == 6.0
    assert score_comment(0, 0, True) == 5.0


def test_score_rounds_to_two_decimals():
    assert score_comment(1, 0, False) == 0.01
    assert score_comment(333, 0, False) == 3.33


def test_negative_citations_count_as_zero():
    assert score_comment(100, -4, False) == score_comment(100, 0, False)


def test_score_is_non_negative_and_monotonic():
    lengths = [0, 1, 50, 99, 100, 250, 1000]
    citations = [0, 1, 2, 10]
    for discloses in (False, True):
        for c in citations:
            scores = [score_comment(n, c, discloses) for n in lengths]
            assert all(s >= 0 for s in scores)
            assert scores == sorted(scores)
        for n in lengths:
            scores = [score_comment(n, c, discloses) for c in citations]
            assert scores == sorted(scores)
    for n in lengths:
        for c in citations:
            assert score_comment(n, c, True) >= score_comment(n, c, False)


def test_round2_rounds_half_away_from_zero():
    assert round2(0.125) == 0.13
    assert round2(2.675) == 2.68
    assert round2(-0.125) == -0.13
    assert round2(1.004) == 1.0


def test_parse_spend_none_when_absent():
    assert parse_spend(None, None, None) is None


def test_parse_spend_valid():
    spend = parse_spend(10, "DOWN", 3)
    assert spend == SpendRequest(amount=10.0, direction="down")
    assert spend.signed_amount == -10.0
    assert parse_spend("2.5", "up", None).signed_amount == 2.5


@pytest.mark.parametrize(
    "points, direction, member_id",
    [
        (0, "up", None),
        (-3, "up", None),
        ("abc", "up", None),
        (float("inf"), "up", None),
        (None, None, 7),
        (5, "sideways", None),
        (5, None, None),
    ],
)
def test_parse_spend_rejects_invalid(points, direction, member_id):
    with pytest.raises(ValidationError):
        parse_spend(points, direction, member_id)
