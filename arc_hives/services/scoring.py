"""Comment contribution scores and article point totals."""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from arc_hives.errors import ValidationError

logger = logging.getLogger(__name__)

IDENTITY_BONUS = 5
POINTS_PER_CITATION = 2
CHARS_PER_POINT = 100

SPEND_DIRECTIONS = {"up": 1, "down": -1}


def round2(value: float) -> float:
    """Round to two decimals, half away from zero."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def score_comment(body_length: int, citation_count: int, discloses_identity: bool) -> float:
    """
    Compute a comment's contribution score.

    Args:
        body_length: Number of characters in the comment body
        citation_count: Cited sources; negative values count as zero
        discloses_identity: Whether the commenter revealed who they are

    Returns:
        Non-negative score rounded to two decimals
    """
    citations = max(0, citation_count or 0)
    raw = max(0, body_length) / CHARS_PER_POINT + citations * POINTS_PER_CITATION
    if discloses_identity:
        raw += IDENTITY_BONUS
    return round2(raw)


@dataclass(frozen=True)
class SpendRequest:
    """A signed point adjustment attached to a comment."""

    amount: float
    direction: str

    @property
    def signed_amount(self) -> float:
        return SPEND_DIRECTIONS[self.direction] * self.amount


def parse_spend(
    spend_points: Optional[float],
    spend_direction: Optional[str],
    member_id: Optional[int],
) -> Optional[SpendRequest]:
    """
    Validate optional spend fields.

    A spend is requested as soon as any of the three fields is present; both
    the amount and the direction must then be valid.

    Raises:
        ValidationError: On a non-positive amount or an unknown direction
    """
    if spend_points is None and spend_direction is None and member_id is None:
        return None

    try:
        amount = float(spend_points)
    except (TypeError, ValueError):
        amount = float("nan")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("spend_points must be a positive number")

    direction = str(spend_direction or "").lower()
    if direction not in SPEND_DIRECTIONS:
        raise ValidationError("spend_direction must be 'up' or 'down'")

    return SpendRequest(amount=amount, direction=direction)


class ScoringEngine:
    """Folds comment scores and spend adjustments into article totals."""

    def __init__(self, store):
        self.store = store

    def apply(self, article_id: int, delta: float) -> float:
        """Add delta to the article's running total and return the new total."""
        new_total = self.store.add_points(article_id, delta)
        logger.info(f"Article {article_id} points {delta:+} -> {new_total}")
        return new_total
