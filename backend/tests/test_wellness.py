"""
Unit tests for the self-contained core: scoring engine, step and sleep
conversions, routine tracker and meditation timer.
"""

import math

import pytest

from you360.core import compute_score, RoutineTracker, MeditationTimer, ValidationError
from you360.core.routines import normalize_tasks
from you360.agents.sleep_agent import split_sleep
from you360.agents.steps_agent import distance_to_steps, ratchet_steps
from you360.models import WellnessSample, TimeOfDay


def sample(sleep=6.0, steps=0, glucose=120.0):
    return WellnessSample(sleep_hours=sleep, steps_today=steps, glucose_reading=glucose)


class TestComputeScore:
    """Tests for the wellness score formula."""

    def test_dashboard_defaults(self):
        assert compute_score(sample(sleep=7.5, steps=5000, glucose=105)) == 81

    def test_baseline(self):
        assert compute_score(sample()) == 55

    def test_step_bonus_saturates(self):
        assert compute_score(sample(steps=2400)) == 75
        assert compute_score(sample(steps=10_000_000)) == 75

    def test_short_sleep_never_penalizes(self):
        assert compute_score(sample(sleep=3)) == 55
        assert compute_score(sample(sleep=0)) == 55

    def test_sleep_bonus_saturates(self):
        assert compute_score(sample(sleep=11)) == 75
        assert compute_score(sample(sleep=24)) == 75

    def test_high_glucose_penalty(self):
        assert compute_score(sample(glucose=145)) == 50

    def test_clamped_at_zero(self):
        assert compute_score(sample(glucose=2000)) == 0

    def test_rounds_half_up(self):
        # 55 + 180/120 = 56.5
        assert compute_score(sample(steps=180)) == 57

    def test_always_in_range(self):
        for sleep in (0, 5.9, 6, 8, 30):
            for steps in (0, 1, 1000, 10 ** 7):
                for glucose in (0, 120, 121, 500, 10 ** 5):
                    assert 0 <= compute_score(sample(sleep, steps, glucose)) <= 100

    def test_monotone_in_steps_and_sleep(self):
        scores = [compute_score(sample(steps=s)) for s in range(0, 3000, 100)]
        assert scores == sorted(scores)
        scores = [compute_score(sample(sleep=h / 2)) for h in range(12, 30)]
        assert scores == sorted(scores)

    def test_non_increasing_in_glucose(self):
        scores = [compute_score(sample(glucose=g)) for g in range(120, 400, 10)]
        assert scores == sorted(scores, reverse=True)

    def test_negative_inputs_rejected(self):
        with pytest.raises(ValueError):
            WellnessSample(sleep_hours=-1, steps_today=0, glucose_reading=100)
        with pytest.raises(ValueError):
            WellnessSample(sleep_hours=7, steps_today=-5, glucose_reading=100)

    @pytest.mark.parametrize("field", ["sleep_hours", "glucose_reading"])
    def test_non_finite_inputs_rejected(self, field):
        values = {"sleep_hours": 7, "steps_today": 0, "glucose_reading": 100}
        for bad in (math.inf, math.nan):
            with pytest.raises(ValueError):
                WellnessSample(**{**values, field: bad})


class TestStepConversion:
    """Tests for distance -> steps and the daily ratchet."""

    def test_kilometers(self):
        assert distance_to_steps(3, "km") == 3846

    def test_meters(self):
        assert distance_to_steps(780, "m") == 1000

    def test_zero_distance(self):
        assert distance_to_steps(0, "km") == 0

    def test_negative_distance_floors_at_zero(self):
        assert distance_to_steps(-2, "km") == 0

    def test_unknown_unit(self):
        with pytest.raises(ValidationError):
            distance_to_steps(3, "miles")

    @pytest.mark.parametrize("distance", [math.inf, -math.inf, math.nan, 1e308])
    def test_non_finite_distance_rejected(self, distance):
        with pytest.raises(ValidationError):
            distance_to_steps(distance, "km")

    def test_ratchet_keeps_larger_total(self):
        assert ratchet_steps(5000, 3846) == 5000
        assert ratchet_steps(3846, 5000) == 5000


class TestSleepSplit:
    def test_eight_hours(self):
        assert split_sleep(8) == (1.8, 6.2)

    def test_ten_hours(self):
        assert split_sleep(10) == (2.2, 7.8)

    def test_zero_hours(self):
        assert split_sleep(0) == (0.0, 0.0)


class TestRoutineTracker:
    """Tests for routine CRUD and progress."""

    def test_defaults(self):
        tracker = RoutineTracker.with_defaults()
        names = [r.name for r in tracker.routines]
        assert names == ["Morning Habits", "Afternoon Workout", "Evening Chill", "Yoga & Meditation"]
        assert tracker.overall_progress() == 0

    def test_add_routine_from_comma_string(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("Night", "Evening", "Brush teeth, , Journal ")
        assert [t.name for t in routine.tasks] == ["Brush teeth", "Journal"]
        assert all(not t.completed for t in routine.tasks)
        assert routine.time_of_day is TimeOfDay.EVENING

    def test_add_rejects_empty_name(self):
        tracker = RoutineTracker()
        with pytest.raises(ValidationError):
            tracker.add_routine("  ", "Morning", ["Stretch"])

    def test_add_rejects_empty_tasks(self):
        tracker = RoutineTracker()
        with pytest.raises(ValidationError):
            tracker.add_routine("Morning", "Morning", [])
        with pytest.raises(ValidationError):
            tracker.add_routine("Morning", "Morning", " , ")

    def test_add_rejects_unknown_time_of_day(self):
        with pytest.raises(ValidationError):
            RoutineTracker().add_routine("Late", "Midnight", ["Sleep"])

    def test_edit_rejects_empty_input(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("Morning", "Morning", ["Stretch"])
        with pytest.raises(ValidationError):
            tracker.edit_routine(routine.id, "", "Morning", ["Stretch"])

    def test_edit_replaces_tasks_and_resets_completion(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("Morning", "Morning", ["Stretch", "Water"])
        tracker.toggle_task(routine.id, 0)
        edited = tracker.edit_routine(routine.id, "Early", "Wellness", ["Breathe"])
        assert edited.id == routine.id
        assert edited.name == "Early"
        assert [t.name for t in edited.tasks] == ["Breathe"]
        assert not edited.tasks[0].completed

    def test_ids_not_reused_after_delete(self):
        tracker = RoutineTracker()
        first = tracker.add_routine("A", "Morning", ["x"])
        second = tracker.add_routine("B", "Morning", ["y"])
        tracker.delete_routine(second.id)
        third = tracker.add_routine("C", "Morning", ["z"])
        assert third.id not in (first.id, second.id)

    def test_delete_unknown(self):
        with pytest.raises(KeyError):
            RoutineTracker().delete_routine(42)

    def test_toggle_flips(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("A", "Morning", ["x", "y"])
        tracker.toggle_task(routine.id, 1)
        assert [t.completed for t in tracker.get(routine.id).tasks] == [False, True]
        tracker.toggle_task(routine.id, 1)
        assert [t.completed for t in tracker.get(routine.id).tasks] == [False, False]

    def test_toggle_out_of_range(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("A", "Morning", ["x"])
        with pytest.raises(IndexError):
            tracker.toggle_task(routine.id, 1)
        with pytest.raises(IndexError):
            tracker.toggle_task(routine.id, -1)

    def test_progress_two_of_three(self):
        tracker = RoutineTracker()
        routine = tracker.add_routine("A", "Morning", ["x", "y", "z"])
        tracker.toggle_task(routine.id, 0)
        tracker.toggle_task(routine.id, 2)
        assert tracker.progress(routine.id) == pytest.approx(66.67, abs=0.01)

    def test_overall_progress_empty(self):
        assert RoutineTracker().overall_progress() == 0

    def test_overall_progress_is_floored(self):
        tracker = RoutineTracker.with_defaults()  # 9 tasks
        tracker.toggle_task(tracker.routines[0].id, 0)
        assert tracker.overall_progress() == 11

    def test_by_time_of_day(self):
        grouped = RoutineTracker.with_defaults().by_time_of_day()
        assert [r.name for r in grouped[TimeOfDay.WELLNESS]] == ["Yoga & Meditation"]

    def test_normalize_tasks_list(self):
        assert normalize_tasks([" a ", "", "b"]) == ["a", "b"]


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestMeditationTimer:
    def test_countdown(self):
        clock = FakeClock()
        timer = MeditationTimer(clock=clock)
        timer.start(2)
        assert timer.is_running()
        assert timer.display() == "2:00"
        clock.now += 59
        assert timer.display() == "1:01"
        clock.now += 61
        assert not timer.is_running()
        assert timer.display() == "0:00"

    def test_rejects_non_positive_minutes(self):
        timer = MeditationTimer(clock=FakeClock())
        with pytest.raises(ValidationError):
            timer.start(0)

    @pytest.mark.parametrize("minutes", [math.inf, math.nan, 1e308])
    def test_rejects_non_finite_minutes(self, minutes):
        timer = MeditationTimer(clock=FakeClock())
        with pytest.raises(ValidationError):
            timer.start(minutes)
        assert not timer.is_running()

    def test_idle_timer(self):
        timer = MeditationTimer(clock=FakeClock())
        assert timer.remaining_seconds() == 0
        assert not timer.is_running()
