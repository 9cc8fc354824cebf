"""Public intake endpoints used by the landing page."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.common.db import get_db
from app.intake import flow
from app.intake import schemas as intake_schema
from app.intake.service import IntakeService

router = APIRouter()


def _reject(exc: flow.IntakeValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": exc.message, "step": exc.step},
    )


@router.get("/sites", response_model=intake_schema.IntakeSites)
def list_sites(db: Session = Depends(get_db)):
    """Sites to pick from in step three."""
    return IntakeService(db).sites()


@router.get("/contact", response_model=intake_schema.ContactNumber)
def contact_number(db: Session = Depends(get_db)):
    return intake_schema.ContactNumber(number=IntakeService(db).contact_number())


@router.post("/next", response_model=intake_schema.IntakeState)
def next_step(state: intake_schema.IntakeState):
    """Validate the current step and move forward."""
    try:
        return flow.advance(state)
    except flow.IntakeValidationError as exc:
        raise _reject(exc) from exc


@router.post("/back", response_model=intake_schema.IntakeState)
def previous_step(state: intake_schema.IntakeState):
    return flow.back(state)


@router.post("/submit", response_model=intake_schema.IntakeSubmitResponse, status_code=status.HTTP_201_CREATED)
def submit(data: intake_schema.IntakeSubmit, db: Session = Depends(get_db)):
    """
    "Get ID": record the lead and return the WhatsApp link to open.

    The returned state is reset to step one. On failure the client keeps
    its own state and stays on the site step.
    """
    try:
        return IntakeService(db).submit(data)
    except flow.IntakeValidationError as exc:
        raise _reject(exc) from exc
