"""Three-step intake form: name, then mobile number, then site choice.

The form's state travels with every request as an ``IntakeState``; the
server keeps nothing between steps.
"""

import re
from typing import Optional

from app.intake.schemas import IntakeState

NAME_STEP = 1
MOBILE_STEP = 2
SITE_STEP = 3

MOBILE_PATTERN = re.compile(r"^[6-9][0-9]{9}$")

NAME_REQUIRED = "Please enter your name"
MOBILE_INVALID = "Please enter a valid 10-digit mobile number starting with 6-9"


class IntakeValidationError(ValueError):
    def __init__(self, message: str, step: int):
        super().__init__(message)
        self.message = message
        self.step = step


def is_valid_mobile(mobile: Optional[str]) -> bool:
    return bool(mobile) and MOBILE_PATTERN.fullmatch(mobile) is not None


def step_error(state: IntakeState) -> Optional[str]:
    """Why the current step can't be left forward, or None if it can."""
    if state.step == NAME_STEP and not state.name.strip():
        return NAME_REQUIRED
    if state.step == MOBILE_STEP and not is_valid_mobile(state.mobile):
        return MOBILE_INVALID
    return None


def advance(state: IntakeState) -> IntakeState:
    """Move to the next step, or raise if the current step's input is invalid."""
    error = step_error(state)
    if error:
        raise IntakeValidationError(error, state.step)
    return state.model_copy(update={"step": min(state.step + 1, SITE_STEP)})


def back(state: IntakeState) -> IntakeState:
    return state.model_copy(update={"step": max(state.step - 1, NAME_STEP)})


def reset() -> IntakeState:
    return IntakeState()


def validate_for_commit(name: str, mobile: str) -> None:
    """Everything the earlier steps check must still hold when the site is picked."""
    if not name.strip():
        raise IntakeValidationError(NAME_REQUIRED, NAME_STEP)
    if not is_valid_mobile(mobile):
        raise IntakeValidationError(MOBILE_INVALID, MOBILE_STEP)
