"""
BMI Calculation Service

BMI = weight_kg / (height_m)²

The ideal weight range is the weight band that keeps BMI inside the
normal range (18.5 - 24.9) for a given height.
"""
import math

from schemas import IdealWeight

IDEAL_BMI_MIN = 18.5
IDEAL_BMI_MAX = 24.9


def round_one_decimal(value: float) -> float:
    """
    Round to 1 decimal place, halves rounding up.

    Python's round() rounds halves to even, so round(0.25, 1) is 0.2.

    Examples:
        >>> round_one_decimal(0.25)
        0.3
        >>> round_one_decimal(22.491)
        22.5
    """
    return math.floor(value * 10 + 0.5) / 10


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """
    Calculate BMI from weight (kg) and height (cm).

    Formula: BMI = weight_kg / (height_m)²
    where height_m = height_cm / 100

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters

    Returns:
        BMI value rounded to 1 decimal place

    Examples:
        >>> calculate_bmi(65, 170)
        22.5
        >>> calculate_bmi(70, 175)
        22.9
    """
    # Convert height from cm to meters
    height_m = height_cm / 100

    bmi = weight_kg / (height_m * height_m)

    return round_one_decimal(bmi)


def calculate_ideal_weight_range(height_cm: float, gender: str) -> IdealWeight:
    """
    Weight range (kg) that corresponds to a normal BMI at this height.

    gender is accepted for a future sex-specific formula; today both
    genders share the BMI 18.5 - 24.9 band.
    """
    height_m = height_cm / 100
    height_sq = height_m * height_m

    return IdealWeight(
        min=round_one_decimal(IDEAL_BMI_MIN * height_sq),
        max=round_one_decimal(IDEAL_BMI_MAX * height_sq),
    )
