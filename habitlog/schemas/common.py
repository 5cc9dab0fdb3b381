"""
Shared schema primitives used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from habitlog.services.units import UnitKind


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class HabitUnitIn(BaseModel):
    kind: UnitKind = Field(description='"none" | "reps" | "time" | "custom"')
    label: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Unit label for custom units (e.g. km). Ignored otherwise.",
        examples=["km"],
    )


class HabitUnitOut(BaseModel):
    kind: str
    label: Optional[str] = None
    display: str = Field(description='Long label: "reps", "minutes", the custom label, or "—".')
    short: str = Field(description='Short label: "reps", "min", the custom label, or "—".')


# JSON integers, or text for duration / digit-string input.
AmountIn = Optional[StrictInt | str]
