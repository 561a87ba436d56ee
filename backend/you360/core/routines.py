"""
Routine Tracker - in-memory task groups with completion state and progress.
"""

import math
from typing import Dict, Iterable, List, Optional, Union

from .exceptions import ValidationError
from ..models.routine import Routine, RoutineTask, TimeOfDay

DEFAULT_ROUTINES = [
    ("Morning Habits", TimeOfDay.MORNING, ["Wake up", "Drink water"]),
    ("Afternoon Workout", TimeOfDay.AFTERNOON, ["20 push-ups", "30 sit-ups", "10 squats"]),
    ("Evening Chill", TimeOfDay.EVENING, ["Read a book", "Eat dinner"]),
    ("Yoga & Meditation", TimeOfDay.WELLNESS, ["10-minute meditation", "Gentle stretches"]),
]


def normalize_tasks(tasks: Union[str, Iterable[str]]) -> List[str]:
    """Accept a list or a comma-separated string; trim and drop blanks."""
    if isinstance(tasks, str):
        tasks = tasks.split(",")
    return [task.strip() for task in tasks if task and task.strip()]


def progress(routine: Routine) -> float:
    """Percentage of completed tasks, 0 for a routine without tasks."""
    total = len(routine.tasks)
    if total == 0:
        return 0.0
    completed = sum(1 for task in routine.tasks if task.completed)
    return completed / total * 100


def _time_of_day(value: Union[TimeOfDay, str]) -> TimeOfDay:
    try:
        return TimeOfDay(value)
    except ValueError:
        raise ValidationError(f"Unknown time of day: {value}")


class RoutineTracker:
    """
    Ordered collection of routines for one session.
    Ids increase monotonically and are never reused after a delete.
    """

    def __init__(self):
        self._routines: Dict[int, Routine] = {}
        self._next_id = 1

    @classmethod
    def with_defaults(cls) -> "RoutineTracker":
        """Tracker seeded with the starter routines."""
        tracker = cls()
        for name, time_of_day, tasks in DEFAULT_ROUTINES:
            tracker.add_routine(name, time_of_day, tasks)
        return tracker

    @property
    def routines(self) -> List[Routine]:
        return list(self._routines.values())

    def get(self, routine_id: int) -> Routine:
        """Raises KeyError for an unknown id."""
        return self._routines[routine_id]

    @staticmethod
    def _validate(name: str, tasks: Union[str, Iterable[str]]) -> List[str]:
        if not name or not name.strip():
            raise ValidationError("Routine name cannot be empty.")
        task_names = normalize_tasks(tasks)
        if not task_names:
            raise ValidationError("Add at least one task to the routine.")
        return task_names

    def add_routine(
        self,
        name: str,
        time_of_day: Union[TimeOfDay, str],
        tasks: Union[str, Iterable[str]],
    ) -> Routine:
        task_names = self._validate(name, tasks)
        routine = Routine(
            id=self._next_id,
            name=name.strip(),
            time_of_day=_time_of_day(time_of_day),
            tasks=[RoutineTask(name=task) for task in task_names],
        )
        self._routines[routine.id] = routine
        self._next_id += 1
        return routine

    def edit_routine(
        self,
        routine_id: int,
        name: str,
        time_of_day: Union[TimeOfDay, str],
        tasks: Union[str, Iterable[str]],
    ) -> Routine:
        """Replace name, time of day and tasks. Completion state starts over."""
        existing = self.get(routine_id)
        task_names = self._validate(name, tasks)
        updated = existing.model_copy(update={
            "name": name.strip(),
            "time_of_day": _time_of_day(time_of_day),
            "tasks": [RoutineTask(name=task) for task in task_names],
        })
        self._routines[routine_id] = updated
        return updated

    def delete_routine(self, routine_id: int) -> None:
        del self._routines[routine_id]

    def toggle_task(self, routine_id: int, task_index: int) -> Routine:
        """
        Flip the completion flag of one task.

        ``task_index`` must be within range; violating that raises IndexError.
        """
        routine = self.get(routine_id)
        if not 0 <= task_index < len(routine.tasks):
            raise IndexError(f"Task index {task_index} out of range for routine {routine_id}")
        task = routine.tasks[task_index]
        task.completed = not task.completed
        return routine

    def progress(self, routine: Union[Routine, int]) -> float:
        if isinstance(routine, int):
            routine = self.get(routine)
        return progress(routine)

    def overall_progress(self) -> int:
        """Completed tasks over all tasks as a floored percentage, 0 when empty."""
        total = sum(len(r.tasks) for r in self._routines.values())
        if total == 0:
            return 0
        completed = sum(1 for r in self._routines.values() for t in r.tasks if t.completed)
        return math.floor(completed / total * 100)

    def by_time_of_day(self, time_of_day: Optional[TimeOfDay] = None) -> Dict[TimeOfDay, List[Routine]]:
        """Routines grouped for display, optionally limited to one slot."""
        slots = [time_of_day] if time_of_day else list(TimeOfDay)
        return {
            slot: [r for r in self._routines.values() if r.time_of_day == slot]
            for slot in slots
        }
