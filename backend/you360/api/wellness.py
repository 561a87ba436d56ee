"""
Wellness API endpoints - dashboard cards, score and meditation timer.

Card endpoints always answer 200 with an AdapterResult; a failed request is
reported in the result so the card can show the message.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, status

from ..core import compute_score
from ..core.exceptions import ValidationError
from ..core.session import SessionStore, WellnessSession
from ..models import (
    AdapterResult, WellnessSample, WellnessScore, SessionSummary, MoodRequest, SleepRequest,
    StepsRequest, HairRequest, SkinRequest, SugarRequest, ExerciseRequest,
    MeditationRequest, MeditationStatus,
)
from ..utils.auth import get_optional_user_id
from .deps import get_session, get_session_store

router = APIRouter(prefix="/wellness", tags=["wellness"])


def _summary(session: WellnessSession) -> SessionSummary:
    return SessionSummary(
        session_id=session.session_id,
        mood=session.mood,
        sleep_hours=session.sleep_hours,
        steps_today=session.steps_today,
        glucose_reading=session.glucose_reading,
        wellness_score=session.score(),
        message_count=len(session.conversation),
        created_at=session.created_at,
    )


@router.get("/summary", response_model=SessionSummary)
async def get_summary(session: WellnessSession = Depends(get_session)):
    """Summary pills: mood, sleep, steps, glucose and the wellness score."""
    return _summary(session)


@router.post("/score", response_model=WellnessScore)
async def score(sample: WellnessSample):
    """Score an arbitrary sample without touching session state."""
    return WellnessScore(score=compute_score(sample), sample=sample)


@router.delete("/session", response_model=SessionSummary)
async def reset_session(
    x_session_id: str = Header("default"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: SessionStore = Depends(get_session_store),
):
    """Drop the session's state (conversation included) and start fresh."""
    return _summary(store.reset(x_session_id, owner_id=user_id or "guest"))


@router.post("/mood", response_model=AdapterResult)
async def save_mood(body: MoodRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("mood").run(emoji=body.emoji)


@router.post("/sleep", response_model=AdapterResult)
async def analyze_sleep(body: SleepRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("sleep").run(hours=body.hours)


@router.post("/steps", response_model=AdapterResult)
async def steps_from_distance(body: StepsRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("steps").run(distance=body.distance, unit=body.unit)


@router.post("/hair", response_model=AdapterResult)
async def hair_tips(body: HairRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("hair").run(issue=body.issue)


@router.post("/skin", response_model=AdapterResult)
async def skin_routine(body: SkinRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("skin").run(skin_type=body.skin_type)


@router.post("/sugar", response_model=AdapterResult)
async def sugar_estimate(body: SugarRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("sugar").run(food=body.food)


@router.post("/exercise", response_model=AdapterResult)
async def exercise_plan(body: ExerciseRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("exercise").run(mode=body.mode)


def _meditation_status(session: WellnessSession) -> MeditationStatus:
    timer = session.meditation
    return MeditationStatus(
        running=timer.is_running(),
        remaining_seconds=timer.remaining_seconds(),
        display=timer.display(),
    )


@router.post("/meditation", response_model=MeditationStatus)
async def start_meditation(body: MeditationRequest, session: WellnessSession = Depends(get_session)):
    try:
        session.meditation.start(body.minutes)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _meditation_status(session)


@router.get("/meditation", response_model=MeditationStatus)
async def meditation_status(session: WellnessSession = Depends(get_session)):
    return _meditation_status(session)
