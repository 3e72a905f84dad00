"""
Health Analysis API Endpoints

Public endpoint: validates biometric input, computes the BMI analysis,
stores a snapshot and returns the full result.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import HealthDataValidationError, PersistenceError
from schemas import ErrorResponse, HealthAnalysisData, HealthAnalysisResponse
from services.health_analysis import format_health_analysis, utc_timestamp
from services.health_records import save_health_record, to_health_record
from services.health_validator import parse_health_input, validate_health_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.post(
    "/analyze",
    response_model=HealthAnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze_health(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Analyze health data and calculate BMI.

    Body: name, age (1-120), gender (male/female), height (50-250 cm),
    weight (10-300 kg).

    Nothing is returned unless validation passes and the record is saved.
    """
    validation = validate_health_data(payload)
    if not validation.is_valid:
        logger.info(
            "Health data rejected",
            extra={"extra_fields": {"errors": validation.errors}},
        )
        raise HealthDataValidationError(validation.errors)

    analysis = format_health_analysis(parse_health_input(payload))

    result = save_health_record(db, to_health_record(analysis))
    if not result.success:
        raise PersistenceError(result.error)

    data = HealthAnalysisData(
        **analysis.model_dump(exclude={"timestamp"}),
        record_id=result.record_id,
        timestamp=utc_timestamp(),
    )
    return HealthAnalysisResponse(message="Health analysis completed", data=data)
