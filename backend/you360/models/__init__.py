"""Models module."""

from .user import User, UserCreate, UserLogin, UserInDB, AuthResponse, TokenData
from .wellness import (
    WellnessSample, WellnessScore, AdapterResult, DistanceUnit, SkinType, ExerciseMode,
    MoodRequest, SleepRequest, StepsRequest, HairRequest, SkinRequest, SugarRequest,
    ExerciseRequest, MeditationRequest, MeditationStatus,
)
from .food import FoodScanResult, HealthRating, Recipe, RecipeRequest, LastRecipe
from .routine import TimeOfDay, RoutineTask, Routine, RoutineInput, RoutineView, RoutineBoard
from .session import MessageRole, ConversationMessage, ChatRequest, ChatReply, SessionSummary

__all__ = [
    'User', 'UserCreate', 'UserLogin', 'UserInDB', 'AuthResponse', 'TokenData',
    'WellnessSample', 'WellnessScore', 'AdapterResult', 'DistanceUnit', 'SkinType', 'ExerciseMode',
    'MoodRequest', 'SleepRequest', 'StepsRequest', 'HairRequest', 'SkinRequest', 'SugarRequest',
    'ExerciseRequest', 'MeditationRequest', 'MeditationStatus',
    'FoodScanResult', 'HealthRating', 'Recipe', 'RecipeRequest', 'LastRecipe',
    'TimeOfDay', 'RoutineTask', 'Routine', 'RoutineInput', 'RoutineView', 'RoutineBoard',
    'MessageRole', 'ConversationMessage', 'ChatRequest', 'ChatReply', 'SessionSummary',
]
