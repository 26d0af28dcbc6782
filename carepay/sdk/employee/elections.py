"""Withholding election (W-4) resolution.

Resolves the W-4 elections in force for a paycheck from a caregiver's
registered elections. Elections have arbitrary effective dates (a caregiver
can file a new W-4 anytime); with none on file the default election
(single, no adjustments) applies.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import get_caregiver_profile
from ..day_types import DateLike, parse_date
from ..errors import InvalidInputError
from ..taxes.schemas import WithholdingElection

logger = logging.getLogger(__name__)

# profile.yaml shorthand -> WithholdingElection field
KEY_MAPPING = {
    "multiple_jobs": "multiple_jobs",
    "step2_checkbox": "multiple_jobs",
    "dependents": "annual_dependents_credit",
    "step3_dependents": "annual_dependents_credit",
    "other_income": "annual_other_income",
    "step4a_other_income": "annual_other_income",
    "deductions": "annual_deductions",
    "step4b_deductions": "annual_deductions",
    "extra_withholding": "per_paycheck_extra_withholding",
    "step4c_extra_withholding": "per_paycheck_extra_withholding",
    "effective": "effective_date",
}

FILING_STATUS_MAPPING = {
    "mfj": "married",
    "hoh": "head_of_household",
}


def election_from_config(w4: Dict[str, Any]) -> WithholdingElection:
    """Build an election from a profile.yaml W-4 entry.

    Accepts field names, W-4 step names (step4c_extra_withholding) and
    shorthand (extra_withholding, mfj).

    Raises:
        InvalidInputError: If a value is invalid (negative amount, bad status)
    """
    normalized = {}
    for key, value in w4.items():
        if key == "filing_status":
            value = FILING_STATUS_MAPPING.get(value, value)
        normalized[KEY_MAPPING.get(key, key)] = value

    try:
        return WithholdingElection.model_validate(normalized)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid withholding election: {e}", field="election") from e


def resolve_election(elections: List[WithholdingElection], target_date: DateLike) -> WithholdingElection:
    """Get the election effective on a date.

    Newest effective_date <= target_date wins; on equal dates the one
    registered last wins. Elections without an effective date apply from
    the beginning of time.

    Returns:
        The effective election, or WithholdingElection.default() if none applies
    """
    target = parse_date(target_date)
    ordered = sorted(
        enumerate(elections),
        key=lambda x: (x[1].effective_date or date.min, x[0]),
        reverse=True,
    )
    for _, election in ordered:
        if (election.effective_date or date.min) <= target:
            return election

    logger.warning(f"No withholding election effective on {target}; using default (single, no adjustments)")
    return WithholdingElection.default()


def elections_for_caregiver(caregiver_id: str, profile: Optional[dict] = None) -> List[WithholdingElection]:
    """Registered elections for a caregiver from profile.yaml (caregivers.<id>.elections)."""
    caregiver = get_caregiver_profile(caregiver_id, profile)
    return [election_from_config(w4) for w4 in caregiver.get("elections") or []]
