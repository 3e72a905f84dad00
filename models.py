from sqlalchemy import Column, Integer, Float, DateTime, String, CheckConstraint, Index
from sqlalchemy.sql import func
from core.database import Base


class HealthRecord(Base):
    """
    One row per successful health analysis.

    Append-only: rows are written once and never updated or deleted.
    bmi_category holds the category display name shown to the user.
    """
    __tablename__ = "health_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)  # 'male' | 'female'
    height = Column(Float, nullable=False)  # cm
    weight = Column(Float, nullable=False)  # kg
    bmi = Column(Float, nullable=False)  # weight / (height_m)², 1 decimal
    bmi_category = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("gender IN ('male', 'female')", name="ck_health_records_gender"),
        Index("ix_health_records_created_at", "created_at"),
    )
