"""
BMI Category Classification

Maps a BMI value onto one of four WHO adult bands. The band table is
built once at import and shared read-only by every request.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from schemas import BMIAnalysis


@dataclass(frozen=True)
class BMICategory:
    """One contiguous BMI band: min <= bmi < max."""
    key: str
    min: float
    max: float
    name: str
    color: str
    advice: str

    def contains(self, bmi: float) -> bool:
        return self.min <= bmi < self.max

    @property
    def range_label(self) -> str:
        upper = "∞" if math.isinf(self.max) else _format_bound(self.max)
        return f"{_format_bound(self.min)} - {upper}"


@dataclass(frozen=True)
class BMIClassification:
    category_key: str
    name: str
    color: str
    advice: str
    range: str


def _format_bound(value: float) -> str:
    # 25.0 -> "25", 18.5 -> "18.5"
    return f"{value:g}"


# Ascending by min; classification walks this order
BMI_CATEGORIES: Tuple[BMICategory, ...] = (
    BMICategory(
        key="underweight",
        min=0,
        max=18.5,
        name="Underweight",
        color="#3498db",
        advice=(
            "Your weight is below the healthy range. Increase your intake of balanced, "
            "nutritious food and consult a nutritionist about a healthy weight gain program."
        ),
    ),
    BMICategory(
        key="normal",
        min=18.5,
        max=25,
        name="Normal",
        color="#27ae60",
        advice=(
            "Congratulations! Your weight is in the ideal range. Keep up a healthy diet "
            "and regular exercise to stay in optimal health."
        ),
    ),
    BMICategory(
        key="overweight",
        min=25,
        max=30,
        name="Overweight",
        color="#f39c12",
        advice=(
            "Your weight is slightly above the healthy range. Reduce your calorie intake, "
            "increase physical activity and consult a doctor if needed."
        ),
    ),
    BMICategory(
        key="obese",
        min=30,
        max=math.inf,
        name="Obese",
        color="#e74c3c",
        advice=(
            "Your weight is in the obese range. You are strongly advised to consult a doctor "
            "or nutritionist about a safe and effective weight loss program."
        ),
    ),
)

DEFAULT_CATEGORY_KEY = "normal"


def get_category(key: str) -> BMICategory:
    """Look up a band by key."""
    for category in BMI_CATEGORIES:
        if category.key == key:
            return category
    raise KeyError(f"Unknown BMI category: {key}")


def _to_classification(category: BMICategory) -> BMIClassification:
    return BMIClassification(
        category_key=category.key,
        name=category.name,
        color=category.color,
        advice=category.advice,
        range=category.range_label,
    )


def get_bmi_category(bmi: float) -> BMIClassification:
    """
    Classify a BMI value.

    Returns the first band (in ascending order) whose half-open range
    contains bmi. Values outside every band (negative or NaN) fall back
    to the normal band.
    """
    for category in BMI_CATEGORIES:
        if category.contains(bmi):
            return _to_classification(category)

    return _to_classification(get_category(DEFAULT_CATEGORY_KEY))


def to_bmi_analysis(bmi: float, classification: BMIClassification) -> BMIAnalysis:
    return BMIAnalysis(
        bmi=bmi,
        category=classification.name,
        category_key=classification.category_key,
        color=classification.color,
        range=classification.range,
    )
