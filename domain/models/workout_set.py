"""
WorkoutSet value object and numeric input coercion.

Weight, reps and rest arrive as free text from input fields. Bad input is
never an error: weight and reps fall back to 0 and rest falls back to the
default rest period.
"""

import math
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


DEFAULT_REST_SECONDS = 90


def _parse_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _compact(number: float) -> Union[int, float]:
    """Return an int for integral values so 135.0 renders as 135."""
    return int(number) if number.is_integer() else number


def coerce_amount(value: Any) -> Union[int, float]:
    """
    Coerce a weight or rep count.

    Args:
        value: Raw input (number, numeric string, None, garbage)

    Returns:
        Non-negative number; 0 when the input is missing or unparseable.

    Examples:
        >>> coerce_amount("135")
        135
        >>> coerce_amount("abc")
        0
        >>> coerce_amount(-5)
        0
    """
    number = _parse_number(value)
    if number is None or number < 0:
        return 0
    return _compact(number)


def coerce_rest(value: Any) -> int:
    """Coerce a rest period in seconds, defaulting to 90."""
    number = _parse_number(value)
    if number is None or number <= 0:
        return DEFAULT_REST_SECONDS
    return int(round(number))


class WorkoutSet(BaseModel):
    """
    One set of an exercise within a live or finished workout.

    Examples:
        >>> WorkoutSet(id="s1", weight="135", reps="8").weight
        135
        >>> WorkoutSet(id="s2", rest="").rest
        90
    """

    id: str = Field(..., min_length=1, description="Set identifier")
    weight: Union[int, float] = Field(default=0, ge=0, description="Load (or added load)")
    reps: Union[int, float] = Field(default=0, ge=0, description="Repetitions performed")
    completed: bool = Field(default=False)
    rest: int = Field(
        default=DEFAULT_REST_SECONDS, ge=0, description="Rest after the set in seconds"
    )

    @field_validator("weight", "reps", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Union[int, float]:
        return coerce_amount(v)

    @field_validator("rest", mode="before")
    @classmethod
    def validate_rest(cls, v: Any) -> int:
        return coerce_rest(v)

    def with_updates(self, **fields: Any) -> "WorkoutSet":
        """
        Return a new set with the given fields merged in.

        Only weight, reps, completed and rest may change. Values are run
        through validation so text input is coerced the same way as on
        construction.

        Raises:
            ValueError: If an unknown field name is supplied.
        """
        unknown = set(fields) - {"weight", "reps", "completed", "rest"}
        if unknown:
            raise ValueError(f"Cannot update set fields: {sorted(unknown)}")
        return WorkoutSet.model_validate({**self.model_dump(), **fields})

    model_config = {"frozen": True}
