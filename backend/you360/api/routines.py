"""
Routine API endpoints - create, edit, delete and tick off routine tasks.
"""

from fastapi import APIRouter, HTTPException, Depends, status, Response

from ..core.exceptions import ValidationError
from ..core.routines import RoutineTracker
from ..core.session import WellnessSession
from ..models import Routine, RoutineInput, RoutineView, RoutineBoard
from .deps import get_session

router = APIRouter(prefix="/routines", tags=["routines"])


def _view(tracker: RoutineTracker, routine: Routine) -> RoutineView:
    return RoutineView(**routine.model_dump(), progress=tracker.progress(routine))


def _not_found(routine_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Routine {routine_id} not found")


@router.get("", response_model=RoutineBoard)
async def list_routines(session: WellnessSession = Depends(get_session)):
    tracker = session.routines
    return RoutineBoard(
        routines=[_view(tracker, r) for r in tracker.routines],
        overall_progress=tracker.overall_progress(),
    )


@router.post("", response_model=RoutineView, status_code=status.HTTP_201_CREATED)
async def add_routine(body: RoutineInput, session: WellnessSession = Depends(get_session)):
    try:
        routine = session.routines.add_routine(body.name, body.time_of_day, body.tasks)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _view(session.routines, routine)


@router.put("/{routine_id}", response_model=RoutineView)
async def edit_routine(routine_id: int, body: RoutineInput, session: WellnessSession = Depends(get_session)):
    try:
        routine = session.routines.edit_routine(routine_id, body.name, body.time_of_day, body.tasks)
    except KeyError:
        raise _not_found(routine_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _view(session.routines, routine)


@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_routine(routine_id: int, session: WellnessSession = Depends(get_session)):
    try:
        session.routines.delete_routine(routine_id)
    except KeyError:
        raise _not_found(routine_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{routine_id}/tasks/{task_index}/toggle", response_model=RoutineView)
async def toggle_task(routine_id: int, task_index: int, session: WellnessSession = Depends(get_session)):
    try:
        routine = session.routines.toggle_task(routine_id, task_index)
    except KeyError:
        raise _not_found(routine_id)
    except IndexError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _view(session.routines, routine)
