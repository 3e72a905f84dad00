"""
Health record persistence.

Stores a flattened snapshot of an AnalysisResult. Failures are reported,
not raised, so the caller decides what a failed save means for the request.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import HealthRecord
from schemas import AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    success: bool
    record_id: Optional[int] = None
    error: Optional[str] = None


def to_health_record(analysis: AnalysisResult) -> HealthRecord:
    """Flatten an analysis into the seven persisted fields."""
    user = analysis.user_info
    return HealthRecord(
        name=user.name,
        age=user.age,
        gender=user.gender,
        height=user.height,
        weight=user.weight,
        bmi=analysis.analysis.bmi,
        bmi_category=analysis.analysis.category,
    )


def save_health_record(db: Session, record: HealthRecord) -> SaveResult:
    """
    Insert one health record and commit.

    Returns:
        SaveResult with the generated id, or with the database error message
    """
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        error = str(getattr(e, "orig", None) or e)
        logger.error(
            f"Failed to save health record: {error}",
            extra={"extra_fields": {"error_type": type(e).__name__}},
        )
        return SaveResult(success=False, error=error)

    logger.info(
        f"Health record saved: {record.id}",
        extra={"extra_fields": {"record_id": record.id, "bmi_category": record.bmi_category}},
    )
    return SaveResult(success=True, record_id=record.id)
