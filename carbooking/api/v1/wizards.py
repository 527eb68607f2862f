from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Request

from carbooking.api.v1.schemas import (
    FieldUpdateSchema,
    OpenWizardRequestSchema,
    TermsAcceptSchema,
    WizardResultSchema,
    WizardStateSchema,
)
from carbooking.application.exceptions import (
    WizardConflictError,
    WizardFieldError,
    WizardNotFoundError,
    WizardStepError,
)
from carbooking.application.use_cases.wizard import WizardResult, WizardUseCase
from carbooking.wiring.dependencies import get_wizard_use_case

router = APIRouter()


def get_customer_token(request: Request) -> str | None:
    """Bearer token of the calling customer, forwarded to the rental backend."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _execute(operation: Callable[[], WizardResult]) -> WizardResultSchema:
    try:
        result = operation()
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (WizardStepError, WizardConflictError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except WizardFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return WizardResultSchema(
        action=result.action,
        message=result.message,
        state=WizardStateSchema.from_state(result.state) if result.state else None,
        response=result.response,
    )


@router.post("/wizards", response_model=WizardResultSchema, status_code=201)
def open_wizard(
    req: OpenWizardRequestSchema,
    customer_token: str | None = Depends(get_customer_token),
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _execute(lambda: uc.open([car.to_entity() for car in req.cars], customer_token=customer_token))


@router.get("/wizards/{session_id}", response_model=WizardStateSchema)
def get_wizard(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    try:
        state = uc.get(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return WizardStateSchema.from_state(state)


@router.patch("/wizards/{session_id}/common", response_model=WizardResultSchema)
def update_common(
    session_id: str,
    req: FieldUpdateSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _execute(lambda: uc.set_common_field(session_id, req.field, req.value))


@router.patch("/wizards/{session_id}/cars/{index}", response_model=WizardResultSchema)
def update_car(
    session_id: str,
    index: int,
    req: FieldUpdateSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _execute(lambda: uc.set_car_field(session_id, index, req.field, req.value))


@router.post("/wizards/{session_id}/cars/{index}/toggle-common", response_model=WizardResultSchema)
def toggle_common(session_id: str, index: int, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.toggle_use_common_data(session_id, index))


@router.delete("/wizards/{session_id}/cars/{index}", response_model=WizardResultSchema)
def remove_car(session_id: str, index: int, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.remove_car(session_id, index))


@router.post("/wizards/{session_id}/next", response_model=WizardResultSchema)
def next_step(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.next_step(session_id))


@router.post("/wizards/{session_id}/back", response_model=WizardResultSchema)
def back(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.back(session_id))


@router.post("/wizards/{session_id}/terms/view", response_model=WizardResultSchema)
def view_terms(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.view_terms(session_id))


@router.post("/wizards/{session_id}/terms/accept", response_model=WizardResultSchema)
def accept_terms(
    session_id: str,
    req: TermsAcceptSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _execute(lambda: uc.set_terms_accepted(session_id, req.accepted))


@router.post("/wizards/{session_id}/submit", response_model=WizardResultSchema)
def submit(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _execute(lambda: uc.submit(session_id))


@router.delete("/wizards/{session_id}", status_code=204)
def close_wizard(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    if not uc.close(session_id):
        raise HTTPException(status_code=404, detail=f"Booking wizard {session_id} is not open")
