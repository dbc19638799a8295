"""Politician trust score.

A pure function of the politician's stored fields.  The score starts at
50 and is adjusted for incumbency, voting participation, expense
restraint, committee work and recent activity, then clamped to 0..100.
"""

import math
from dataclasses import dataclass, field
from typing import Any

BASE_SCORE = 50
INCUMBENT_BONUS = 10
ACTIVITY_BONUS = 5
EXPENSE_ALLOWANCE = 20
COMMITTEE_POINTS = 2
COMMITTEE_CAP = 10
MIN_SCORE = 0
MAX_SCORE = 100
# Inputs saturate at this magnitude.
INPUT_CEILING = 1e12


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return 0.0
    try:
        number = float(value)
    except ValueError:
        return 0.0
    except OverflowError:
        # Integers too large for a float.
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        return 0.0
    return max(-INPUT_CEILING, min(INPUT_CEILING, number))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class TrustInputs:
    """The politician fields the trust score depends on."""

    is_incumbent: bool = False
    yes_votes: float = 0.0
    no_votes: float = 0.0
    abstain_votes: float = 0.0
    expense_total: float = 0.0
    committees: tuple[str, ...] = field(default_factory=tuple)
    recent_activity: str | None = None

    @property
    def total_votes(self) -> float:
        return self.yes_votes + self.no_votes + self.abstain_votes

    @classmethod
    def from_politician(cls, politician: Any) -> "TrustInputs":
        """Read the inputs from a politician row.

        Missing or malformed JSON fields count as zero.
        """
        voting = politician.voting_record if isinstance(politician.voting_record, dict) else {}
        expenses = politician.expenses if isinstance(politician.expenses, dict) else {}
        committees = politician.committees if isinstance(politician.committees, list) else []
        return cls(
            is_incumbent=bool(politician.is_incumbent),
            yes_votes=_number(voting.get("yes")),
            no_votes=_number(voting.get("no")),
            abstain_votes=_number(voting.get("abstain")),
            expense_total=_number(expenses.get("total")),
            committees=tuple(str(c) for c in committees),
            recent_activity=politician.recent_activity,
        )


def compute_trust_score(inputs: TrustInputs) -> int:
    """Compute a trust score in the range 0..100.

    Args:
        inputs: Politician fields relevant to the score.

    Returns:
        The clamped integer score.
    """
    score = BASE_SCORE

    if inputs.is_incumbent:
        score += INCUMBENT_BONUS

    total_votes = _number(inputs.total_votes)
    if total_votes > 0:
        score += _round_half_up(total_votes / 100 * 10)

    expense_total = _number(inputs.expense_total)
    if expense_total > 0:
        score += max(0, EXPENSE_ALLOWANCE - math.floor(expense_total / 1000))

    if inputs.committees:
        score += min(COMMITTEE_CAP, COMMITTEE_POINTS * len(inputs.committees))

    if inputs.recent_activity and "active" in inputs.recent_activity.lower():
        score += ACTIVITY_BONUS

    return max(MIN_SCORE, min(MAX_SCORE, score))
