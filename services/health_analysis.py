"""
Health Analysis Formatter

Runs the calculation pipeline for one validated input and assembles the
AnalysisResult returned to the caller. No persistence happens here.
"""
from datetime import datetime, timezone

from schemas import AnalysisResult, HealthInput, UserInfo
from services.bmi_calculator import calculate_bmi, calculate_ideal_weight_range
from services.bmi_classifier import get_bmi_category, to_bmi_analysis
from services.health_recommendations import get_health_recommendations


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-15T08:30:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_health_analysis(health_input: HealthInput) -> AnalysisResult:
    """
    Compute BMI, category, ideal weight and recommendations.

    Deterministic apart from the timestamp.
    """
    bmi = calculate_bmi(health_input.weight, health_input.height)
    classification = get_bmi_category(bmi)
    ideal_weight = calculate_ideal_weight_range(health_input.height, health_input.gender)
    recommendations = get_health_recommendations(
        bmi, health_input.age, health_input.gender, classification
    )

    return AnalysisResult(
        user_info=UserInfo(
            name=health_input.name.strip(),
            age=health_input.age,
            gender=health_input.gender,
            height=health_input.height,
            weight=health_input.weight,
        ),
        analysis=to_bmi_analysis(bmi, classification),
        ideal_weight=ideal_weight,
        recommendations=recommendations,
        timestamp=utc_timestamp(),
    )
