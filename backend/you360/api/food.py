"""
Food API endpoints - food-image scan and recipe generation.
"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, status, UploadFile, File

from ..agents.food_scan_agent import SUPPORTED_IMAGE_TYPES
from ..core.session import WellnessSession
from ..llm.base import ImagePayload
from ..models import AdapterResult, RecipeRequest, LastRecipe
from .deps import get_session

router = APIRouter(prefix="/food", tags=["food"])


@router.post("/scan", response_model=AdapterResult)
async def scan_food(
    image: Optional[UploadFile] = File(None),
    session: WellnessSession = Depends(get_session),
):
    """
    Identify the food in a photo and estimate its nutrition.

    A missing or empty image comes back as a failed result
    ("no image selected"); a non-image upload is rejected with 400.
    """
    payload = None
    if image is not None:
        if image.content_type not in SUPPORTED_IMAGE_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported image type: {image.content_type}"
            )
        payload = ImagePayload(mime_type=image.content_type, data=await image.read())

    return await session.adapter("food_scan").run(image=payload)


@router.post("/recipe", response_model=AdapterResult)
async def generate_recipe(body: RecipeRequest, session: WellnessSession = Depends(get_session)):
    return await session.adapter("recipe").run(ingredients=body.ingredients)


@router.get("/recipe/last", response_model=LastRecipe)
async def last_recipe(session: WellnessSession = Depends(get_session)):
    """Most recently generated recipe, kept across sessions."""
    recipe = await session.recipe_store.load() if session.recipe_store is not None else None
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No recipe generated yet")
    return recipe
