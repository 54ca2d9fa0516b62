"""Calculator session endpoints.

A session wraps one CalculatorFramework: answers are set field by field,
then submitted, reset or exported.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from clinicalscore.api.calculators import result_schema
from clinicalscore.core.errors import CalculatorBusyError, ConfigurationError, ValidationError
from clinicalscore.schemas.base import ExportFormat
from clinicalscore.schemas.calculator import (
    FieldUpdate,
    SessionCreate,
    SessionState,
    SubmissionInfo,
    SubmitResponse,
)
from clinicalscore.services.framework import CalculatorFramework
from clinicalscore.services.sessions import SessionRegistry, get_session_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def _state(handle: str, framework: CalculatorFramework) -> SessionState:
    snapshot = framework.snapshot()
    snapshot["result"] = result_schema(framework.result) if framework.result else None
    return SessionState(id=handle, **snapshot)


def _get_or_404(registry: SessionRegistry, handle: str) -> CalculatorFramework:
    framework = registry.get(handle)
    if framework is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {handle} not found",
        )
    return framework


@router.post(
    "",
    response_model=SessionState,
    status_code=status.HTTP_201_CREATED,
    summary="Start a calculator session",
)
async def create_session(
    request: SessionCreate,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionState:
    try:
        handle, framework = registry.create(request.calculator_type)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _state(handle, framework)


@router.get("/{handle}", response_model=SessionState, summary="Get session state")
async def get_session(
    handle: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionState:
    return _state(handle, _get_or_404(registry, handle))


@router.put("/{handle}/fields", response_model=SessionState, summary="Set a field value")
async def set_field(
    handle: str,
    update: FieldUpdate,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionState:
    """Write one patient or calculator field.

    Values are not range-checked here; checks run on submit.

    Raises:
        HTTPException: 404 if the session is unknown, 422 if the value
            cannot be stored (e.g. an unknown gender).
    """
    framework = _get_or_404(registry, handle)
    try:
        framework.set_field_value(update.bucket, update.key, update.value)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return _state(handle, framework)


@router.post(
    "/{handle}/submit",
    response_model=SubmitResponse,
    summary="Submit the calculation",
    description="Validate and score the session. Remote submission failure still returns 200 "
    "with submission.status 'degraded'.",
)
async def submit_session(
    handle: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SubmitResponse:
    """Submit a session for scoring.

    Raises:
        HTTPException: 404 unknown session, 409 submission in progress,
            422 validation failed.
    """
    framework = _get_or_404(registry, handle)
    try:
        outcome = await framework.submit_calculation()
    except CalculatorBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "violations": [v.to_dict() for v in e.violations]},
        )

    return SubmitResponse(
        session=_state(handle, framework),
        submission=SubmissionInfo(
            status=outcome.status,
            error=str(outcome.error) if outcome.error else None,
            attempts=outcome.error.attempts if outcome.error else None,
        ),
    )


@router.post("/{handle}/reset", response_model=SessionState, summary="Reset the session")
async def reset_session(
    handle: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionState:
    framework = _get_or_404(registry, handle)
    framework.reset_calculator()
    return _state(handle, framework)


@router.get("/{handle}/export", summary="Export the session result")
async def export_session(
    handle: str,
    format: ExportFormat = Query(ExportFormat.JSON, description="Export format"),
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    """Download the result as JSON or plain text.

    Raises:
        HTTPException: 404 if the session is unknown, 409 if it has no result.
    """
    framework = _get_or_404(registry, handle)
    if framework.result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session has no result to export",
        )

    exported = framework.export_results(format)
    return Response(
        content=exported.content,
        media_type=exported.content_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.delete("/{handle}", status_code=status.HTTP_204_NO_CONTENT, summary="End a session")
async def delete_session(
    handle: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    if not registry.remove(handle):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {handle} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
