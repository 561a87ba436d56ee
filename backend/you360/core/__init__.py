"""Core module - scoring, routines, timers and the shared error taxonomy."""

from .exceptions import (
    WellnessError, ValidationError, MissingCredential, RateLimited,
    ProviderError, MalformedResponse, EmptyResponse, AdapterBusy,
)
from .wellness import compute_score
from .routines import RoutineTracker
from .meditation import MeditationTimer

__all__ = [
    'WellnessError', 'ValidationError', 'MissingCredential', 'RateLimited',
    'ProviderError', 'MalformedResponse', 'EmptyResponse', 'AdapterBusy',
    'compute_score', 'RoutineTracker', 'MeditationTimer',
]
