# qslp/rules.py
# Employer match rules and the tier parameters each one implies.
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)


class MatchRule(str, Enum):
    FULL_TO_5 = "full-to-5"
    HALF_TO_6 = "half-to-6"
    TIERED_3_5 = "tiered-3-5"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TierSchedule:
    """
    Two salary-percentage bands applied to annual loan payments.
    A tier2_rate of 0 disables the second band.
    """
    label: str
    tier1_rate: float
    tier1_threshold: float
    tier2_rate: float
    tier2_threshold: float

    @property
    def max_match_pct(self) -> float:
        return self.tier2_threshold if self.tier2_rate > 0 else self.tier1_threshold


FULL_TO_5 = TierSchedule("100% match up to 5% of salary", 1.0, 0.05, 0.0, 0.05)
HALF_TO_6 = TierSchedule("50% match up to 6% of salary", 0.5, 0.06, 0.0, 0.06)
TIERED_3_5 = TierSchedule("Dollar-for-dollar up to 3%, then 50% up to 5%", 1.0, 0.03, 0.5, 0.05)
# Custom plans cannot be priced without more detail; use the common tiered formula.
CUSTOM = TierSchedule("Custom / Other", 1.0, 0.03, 0.5, 0.05)

DEFAULT_RULE = MatchRule.TIERED_3_5

REGISTRY = {
    MatchRule.FULL_TO_5: FULL_TO_5,
    MatchRule.HALF_TO_6: HALF_TO_6,
    MatchRule.TIERED_3_5: TIERED_3_5,
    MatchRule.CUSTOM: CUSTOM,
}


def _norm(text: str) -> str:
    return " ".join(str(text).split()).lower()


_ALIASES = {}
for _rule, _sched in REGISTRY.items():
    _ALIASES[_norm(_rule.value)] = _rule
    _ALIASES[_norm(_sched.label)] = _rule


def resolve_rule(rule: Union[MatchRule, str, None]) -> MatchRule:
    """
    Map an enum member, rule literal or UI label to a MatchRule.
    Anything unrecognised falls back to the tiered 3%/5% rule.
    """
    if isinstance(rule, MatchRule):
        return rule
    found = _ALIASES.get(_norm(rule or ""))
    if found is None:
        logger.debug("Unrecognised match rule %r; using %s", rule, DEFAULT_RULE.value)
        return DEFAULT_RULE
    return found


def get_schedule(rule: Union[MatchRule, str, None]) -> TierSchedule:
    return REGISTRY[resolve_rule(rule)]


def rule_options() -> List[Tuple[str, str]]:
    """(value, label) pairs in display order for the form."""
    return [(r.value, REGISTRY[r].label) for r in MatchRule]
