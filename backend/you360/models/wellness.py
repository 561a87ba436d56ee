"""
Wellness Models - dashboard inputs and adapter results.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class WellnessSample(BaseModel):
    """Inputs of the wellness score. Transient, never persisted."""
    sleep_hours: float = Field(0.0, ge=0, allow_inf_nan=False)
    steps_today: int = Field(0, ge=0)
    glucose_reading: float = Field(0.0, ge=0, allow_inf_nan=False)


class WellnessScore(BaseModel):
    """Score together with the sample it was computed from."""
    score: int = Field(..., ge=0, le=100)
    sample: WellnessSample


class DistanceUnit(str, Enum):
    KM = "km"
    M = "m"


class SkinType(str, Enum):
    DRY = "dry"
    OILY = "oily"
    COMBINATION = "combination"


class ExerciseMode(str, Enum):
    HOME = "home"
    GYM = "gym"


class MoodRequest(BaseModel):
    emoji: str = Field(..., min_length=1)


class SleepRequest(BaseModel):
    hours: float = Field(..., ge=0, allow_inf_nan=False)


class StepsRequest(BaseModel):
    distance: float = Field(..., allow_inf_nan=False)
    unit: DistanceUnit = DistanceUnit.KM


class HairRequest(BaseModel):
    issue: str = ""


class SkinRequest(BaseModel):
    skin_type: SkinType = SkinType.OILY


class SugarRequest(BaseModel):
    food: str = ""


class ExerciseRequest(BaseModel):
    mode: ExerciseMode = ExerciseMode.HOME


class MeditationRequest(BaseModel):
    minutes: float = Field(..., allow_inf_nan=False)


class AdapterResult(BaseModel):
    """
    What a feature card displays after a request.

    ``display`` holds the adapter specific fields; on failure ``error`` names
    the error kind and ``message`` is the text to show.
    """
    ok: bool
    adapter: str
    display: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MeditationStatus(BaseModel):
    running: bool
    remaining_seconds: int
    display: str
