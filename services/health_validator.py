"""
Health Data Validation

Checks raw request bodies against the accepted biometric ranges.
Every rule is evaluated so the caller sees all problems at once.
Missing, wrong-typed and out-of-range values share one message per field.
"""
import math
from typing import Any, Mapping

from schemas import HealthInput, ValidationResult

NAME_MAX_LENGTH = 100
AGE_RANGE = (1, 120)
HEIGHT_RANGE_CM = (50, 250)
WEIGHT_RANGE_KG = (10, 300)
GENDERS = ("male", "female")

NAME_REQUIRED = "Full name is required"
NAME_TOO_LONG = f"Name is too long (maximum {NAME_MAX_LENGTH} characters)"
AGE_INVALID = f"Age must be between {AGE_RANGE[0]}-{AGE_RANGE[1]} years"
GENDER_INVALID = "Gender must be selected (male/female)"
HEIGHT_INVALID = f"Height must be between {HEIGHT_RANGE_CM[0]}-{HEIGHT_RANGE_CM[1]} cm"
WEIGHT_INVALID = f"Weight must be between {WEIGHT_RANGE_KG[0]}-{WEIGHT_RANGE_KG[1]} kg"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but true/false are not JSON numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are exact and can exceed float range; isfinite would overflow
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def _in_range(value: Any, bounds) -> bool:
    low, high = bounds
    return _is_number(value) and low <= value <= high


def validate_health_data(data: Any) -> ValidationResult:
    """
    Validate a raw health data payload.

    Args:
        data: Decoded JSON body. Anything other than an object is treated
            as an empty object.

    Returns:
        ValidationResult with is_valid and the ordered list of messages
    """
    if not isinstance(data, Mapping):
        data = {}

    errors = []

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append(NAME_REQUIRED)
    elif len(name.strip()) > NAME_MAX_LENGTH:
        errors.append(NAME_TOO_LONG)

    age = data.get("age")
    if not _in_range(age, AGE_RANGE) or age != int(age):
        errors.append(AGE_INVALID)

    if data.get("gender") not in GENDERS:
        errors.append(GENDER_INVALID)

    if not _in_range(data.get("height"), HEIGHT_RANGE_CM):
        errors.append(HEIGHT_INVALID)

    if not _in_range(data.get("weight"), WEIGHT_RANGE_KG):
        errors.append(WEIGHT_INVALID)

    return ValidationResult(is_valid=not errors, errors=errors)


def parse_health_input(data: Mapping[str, Any]) -> HealthInput:
    """Build a HealthInput from a payload that passed validate_health_data."""
    return HealthInput(
        name=data["name"],
        age=int(data["age"]),
        gender=data["gender"],
        height=data["height"],
        weight=data["weight"],
    )
