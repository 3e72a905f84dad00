"""
Health Recommendation Engine

Builds the advice shown next to a BMI result. The specific list is always
assembled in the same order (age, then gender, then BMI category) so the
same input produces the same output.
"""
from schemas import Recommendations
from services.bmi_classifier import BMIClassification

PEDIATRIC_AGE_LIMIT = 18
SENIOR_AGE_LIMIT = 65

PEDIATRIC_NOTE = "Consult a pediatrician for proper nutrition guidance"
SENIOR_NOTE = "Consider the special nutritional needs of older adults"

FEMALE_NOTE = "Make sure you get enough calcium and iron"
MALE_NOTE = "Watch your protein intake to maintain muscle mass"

UNDERWEIGHT_NOTES = (
    "Eat more often with small but frequent portions",
    "Choose nutritious, calorie-dense foods",
)
EXCESS_WEIGHT_NOTES = (
    "Do at least 150 minutes of cardio exercise per week",
    "Cut down on foods high in sugar and saturated fat",
)
MAINTENANCE_NOTES = (
    "Keep up the healthy lifestyle you already have",
)


def get_health_recommendations(
    bmi: float,
    age: int,
    gender: str,
    classification: BMIClassification,
) -> Recommendations:
    """
    Produce general and specific recommendations.

    bmi is part of the signature for rules that need the exact value;
    current rules only look at the category.
    """
    specific = []

    # Age-specific recommendations
    if age < PEDIATRIC_AGE_LIMIT:
        specific.append(PEDIATRIC_NOTE)
    elif age > SENIOR_AGE_LIMIT:
        specific.append(SENIOR_NOTE)

    # Gender-specific recommendations
    if gender == "female":
        specific.append(FEMALE_NOTE)
    else:
        specific.append(MALE_NOTE)

    # BMI-specific recommendations
    if classification.category_key == "underweight":
        specific.extend(UNDERWEIGHT_NOTES)
    elif classification.category_key in ("overweight", "obese"):
        specific.extend(EXCESS_WEIGHT_NOTES)
    else:
        specific.extend(MAINTENANCE_NOTES)

    return Recommendations(general=classification.advice, specific=specific)
