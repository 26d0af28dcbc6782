"""employee - Caregiver-specific inputs to the payroll engine.

Scope:
- Withholding elections (W-4) with effective dates (elections.py)
- Year-to-date wages from payroll records (ytd.py)

Constraints:
- Reads profile.yaml and payroll records; the engine itself never does I/O
"""

from .elections import (
    election_from_config,
    elections_for_caregiver,
    resolve_election,
)

from .ytd import (
    YtdWagesLookup,
    load_payroll_records,
    make_ytd_lookup,
    ytd_gross_wages,
)

__all__ = [
    "election_from_config",
    "elections_for_caregiver",
    "resolve_election",
    "YtdWagesLookup",
    "load_payroll_records",
    "make_ytd_lookup",
    "ytd_gross_wages",
]
