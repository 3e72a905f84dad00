"""
Request/response schemas for the health analysis API.

Wire format is camelCase (``userInfo``, ``categoryKey``, ``recordId``);
Python attributes stay snake_case through alias generation.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Union


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthInput(CamelModel):
    """Health data that has already passed validate_health_data."""
    name: str
    age: int
    gender: Literal["male", "female"]
    height: Union[int, float]  # cm
    weight: Union[int, float]  # kg


class ValidationResult(CamelModel):
    """Outcome of validating raw health data"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)


class UserInfo(CamelModel):
    name: str
    age: int
    gender: str
    height: Union[int, float]
    weight: Union[int, float]


class BMIAnalysis(CamelModel):
    bmi: float
    category: str  # Display name, e.g. "Normal"
    category_key: str  # 'underweight' | 'normal' | 'overweight' | 'obese'
    color: str
    range: str  # e.g. "18.5 - 25" or "30 - ∞"


class IdealWeight(CamelModel):
    min: float
    max: float


class Recommendations(CamelModel):
    general: str
    specific: List[str] = Field(default_factory=list)


class AnalysisResult(CamelModel):
    """Full output of one analysis run."""
    user_info: UserInfo
    analysis: BMIAnalysis
    ideal_weight: IdealWeight
    recommendations: Recommendations
    timestamp: str  # ISO-8601, UTC


class HealthAnalysisData(AnalysisResult):
    """AnalysisResult after it has been stored."""
    record_id: int


class HealthAnalysisResponse(CamelModel):
    success: bool = True
    message: str
    data: HealthAnalysisData


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    errors: Optional[List[str]] = None
    error: Optional[str] = None
