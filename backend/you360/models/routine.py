"""
Routine Models - user-defined task groups with completion state.
"""

from enum import Enum
from typing import List, Union
from pydantic import BaseModel, Field


class TimeOfDay(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    WELLNESS = "Wellness"


class RoutineTask(BaseModel):
    name: str
    completed: bool = False


class Routine(BaseModel):
    """A named routine; each task carries its own completion flag."""
    id: int
    name: str
    time_of_day: TimeOfDay
    tasks: List[RoutineTask] = Field(default_factory=list)


class RoutineInput(BaseModel):
    """
    Create/edit payload.

    ``tasks`` accepts a list or the comma-separated string the routine form
    produces.
    """
    name: str
    time_of_day: TimeOfDay = TimeOfDay.MORNING
    tasks: Union[List[str], str]


class RoutineView(Routine):
    progress: float


class RoutineBoard(BaseModel):
    routines: List[RoutineView]
    overall_progress: int
