"""
Last Recipe Storage - keeps the most recently generated recipe across sessions.
"""

import json
import logging
from typing import Optional

import pydantic

from .interface import StorageInterface
from ..models.food import LastRecipe

logger = logging.getLogger(__name__)

LAST_RECIPE_KEY = "lastRecipe"


class LastRecipeStore:
    """One stored recipe per namespace (a user id, or "guest")."""

    def __init__(self, storage: StorageInterface, namespace: str = "guest"):
        self.storage = storage
        self.namespace = namespace

    @property
    def path(self) -> str:
        return f"recipes/{self.namespace}/{LAST_RECIPE_KEY}.json"

    async def save(self, recipe: LastRecipe) -> bool:
        content = json.dumps(recipe.model_dump(mode="json"), indent=2, ensure_ascii=False)
        return await self.storage.save(self.path, content)

    async def load(self) -> Optional[LastRecipe]:
        content = await self.storage.load(self.path)
        if content is None:
            return None
        try:
            return LastRecipe(**json.loads(content.decode('utf-8')))
        except (ValueError, pydantic.ValidationError) as e:
            logger.warning(f"Ignoring unreadable last recipe at {self.path}: {e}")
            return None

    async def clear(self) -> bool:
        return await self.storage.delete(self.path)
