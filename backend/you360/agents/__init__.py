"""Agents module - one feature adapter per dashboard card."""

from .base_agent import BaseAdapter, AdapterState
from .mood_agent import MoodAdapter
from .sleep_agent import SleepAdapter
from .steps_agent import StepsAdapter
from .care_agent import HairAdapter, SkinAdapter
from .diet_agent import SugarAdapter
from .fitness_agent import ExerciseAdapter
from .food_scan_agent import FoodScanAdapter
from .recipe_agent import RecipeAdapter
from .chat_agent import ChatAdapter

ADAPTER_CLASSES = {
    adapter.name: adapter
    for adapter in (
        MoodAdapter, SleepAdapter, StepsAdapter, HairAdapter, SkinAdapter,
        SugarAdapter, ExerciseAdapter, FoodScanAdapter, RecipeAdapter, ChatAdapter,
    )
}

__all__ = [
    'BaseAdapter',
    'AdapterState',
    'MoodAdapter',
    'SleepAdapter',
    'StepsAdapter',
    'HairAdapter',
    'SkinAdapter',
    'SugarAdapter',
    'ExerciseAdapter',
    'FoodScanAdapter',
    'RecipeAdapter',
    'ChatAdapter',
    'ADAPTER_CLASSES',
]
