# qslp/wizard.py
# The seven-step form as an explicit, immutable state machine.
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .exceptions import WizardStateError, UnknownStepError
from .limits import MIN_AGE, MAX_AGE, DEFAULT_AGE
from .schema import MatchInput

logger = logging.getLogger(__name__)


class Section(str, Enum):
    LANDING = "landing"
    FORM = "form"
    RESULTS = "results"


@dataclass(frozen=True)
class FormAnswers:
    annual_salary: float = 0
    monthly_loan_payment: float = 0
    total_student_debt_balance: float = 0
    current_401k_contribution: float = 0
    age: int = DEFAULT_AGE
    employer_match_rule: str = ""
    has_qslp_matching: bool = False


# -------- Validators: return an error message or None --------
def _required_positive(msg: str) -> Callable[[Any], Optional[str]]:
    def _fn(v):
        return msg if not v or v < 0 else None
    return _fn


def _not_negative(v) -> Optional[str]:
    return "401(k) contribution cannot be negative" if v < 0 else None


def _valid_age(v) -> Optional[str]:
    return "Please select a valid age" if not v or v < MIN_AGE or v > MAX_AGE else None


def _rule_selected(v) -> Optional[str]:
    return "Please select your employer match rule" if not v else None


def _always_ok(v) -> Optional[str]:
    return None


@dataclass(frozen=True)
class WizardStep:
    field: str
    title: str
    label: str
    help: str
    validate: Callable[[Any], Optional[str]]
    kind: str = "currency"  # currency | age | rule | yes_no


STEPS: Tuple[WizardStep, ...] = (
    WizardStep("annual_salary", "What's your annual salary?", "Annual Salary",
               "Enter your gross annual salary before taxes",
               _required_positive("Annual salary is required")),
    WizardStep("monthly_loan_payment", "Monthly student loan payment?", "Monthly Student Loan Payment",
               "Total monthly payment across all student loans",
               _required_positive("Monthly loan payment is required")),
    WizardStep("total_student_debt_balance", "What's your total student debt balance?",
               "Total Student Debt Balance", "Your total outstanding student loan balance",
               _required_positive("Total student debt balance is required")),
    WizardStep("current_401k_contribution", "Current 401(k) contribution?",
               "Current Monthly 401(k) Contribution", "Your current monthly contribution (can be $0)",
               _not_negative),
    WizardStep("age", "What's your age?", "Your Age",
               "Used to calculate contribution limits and retirement timeline",
               _valid_age, kind="age"),
    WizardStep("employer_match_rule", "Employer match rule?", "Employer Match Rule",
               "Check your employee handbook or ask HR",
               _rule_selected, kind="rule"),
    WizardStep("has_qslp_matching", "QSLP matching available?",
               "Does your employer offer QSLP matching?",
               "QSLP = Qualified Student Loan Payment matching under SECURE 2.0",
               _always_ok, kind="yes_no"),
)
TOTAL_STEPS = len(STEPS)


@dataclass(frozen=True)
class WizardState:
    section: Section = Section.LANDING
    step: int = 1
    answers: FormAnswers = field(default_factory=FormAnswers)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def current(self) -> WizardStep:
        return get_step(self.step)

    @property
    def is_last_step(self) -> bool:
        return self.step == TOTAL_STEPS


def get_step(step: int) -> WizardStep:
    if step < 1 or step > TOTAL_STEPS:
        raise UnknownStepError(step, TOTAL_STEPS)
    return STEPS[step - 1]


def _require(state: WizardState, section: Section, action: str) -> None:
    if state.section != section:
        raise WizardStateError(action, state.section.value)


# -------- Transitions --------
def restart() -> WizardState:
    return WizardState()


def start(state: WizardState) -> WizardState:
    _require(state, Section.LANDING, "start the form")
    logger.info("Form started")
    return replace(state, section=Section.FORM, step=1, errors={})


def submit_step(state: WizardState, value: Any) -> WizardState:
    """
    Store `value` for the current step and validate it. On failure the state
    stays on the same step with errors[field] set; otherwise it advances, and
    the last step moves to RESULTS.
    """
    _require(state, Section.FORM, "submit a step")
    step = state.current
    answers = replace(state.answers, **{step.field: value})

    msg = step.validate(value)
    if msg:
        logger.debug("Step %d (%s) rejected: %s", state.step, step.field, msg)
        return replace(state, answers=answers, errors={step.field: msg})

    if state.is_last_step:
        logger.info("Form submitted")
        return replace(state, answers=answers, errors={}, section=Section.RESULTS)

    logger.debug("Step %d -> %d", state.step, state.step + 1)
    return replace(state, answers=answers, errors={}, step=state.step + 1)


def go_back(state: WizardState) -> WizardState:
    _require(state, Section.FORM, "go back")
    if state.step > 1:
        return replace(state, step=state.step - 1, errors={})
    return replace(state, section=Section.LANDING, errors={})


def progress(state: WizardState) -> float:
    return state.step / TOTAL_STEPS


# -------- Glue to the calculator --------
def parse_currency(text) -> int:
    """
    Keep only digits from typed input ("75,000" -> 75000, "" -> 0).
    """
    digits = re.sub(r"[^\d]", "", str(text or ""))
    return int(digits) if digits else 0


def to_match_input(answers: FormAnswers) -> MatchInput:
    return MatchInput(
        annual_salary=float(answers.annual_salary),
        monthly_loan_payment=float(answers.monthly_loan_payment),
        current_401k_monthly_contribution=float(answers.current_401k_contribution),
        age=int(answers.age),
        employer_match_rule=answers.employer_match_rule,
    )
