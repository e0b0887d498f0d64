"""QSLP calculator exception hierarchy."""

from __future__ import annotations


class QSLPError(Exception):
    """Base exception for all QSLP calculator errors."""


class WizardStateError(QSLPError):
    """A form transition was requested from the wrong section."""

    def __init__(self, action: str, section: str) -> None:
        self.action = action
        self.section = section
        super().__init__(f"Cannot {action} while in section {section!r}")


class UnknownStepError(QSLPError):
    """Step number outside the form's range."""

    def __init__(self, step: int, total: int) -> None:
        self.step = step
        self.total = total
        super().__init__(f"Step {step} is outside 1..{total}")
