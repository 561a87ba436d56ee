"""
Unit tests for the feature adapters.
Tests the shared run flow, the busy gate and each dashboard card.
"""

import asyncio
import json
import math
import random

import pytest

from you360.agents import ADAPTER_CLASSES, SugarAdapter
from you360.agents.base_agent import BaseAdapter, AdapterState
from you360.agents.chat_agent import CHAT_ERROR_SENTINEL
from you360.agents.food_scan_agent import FOOD_SCAN_SCHEMA
from you360.agents.recipe_agent import split_instructions
from you360.core.exceptions import MissingCredential, ProviderError, RateLimited
from you360.core.session import WellnessSession
from you360.llm.base import AIRequest, ImagePayload, LLMResponse
from you360.llm.gateway import AIGateway
from you360.models import MessageRole
from you360.storage import LocalStorage, LastRecipeStore

from conftest import FakeProvider

SCAN_REPLY = json.dumps({
    "foodName": "Caesar salad",
    "calories": "350 kcal",
    "carbs": "12 g",
    "protein": "18 g",
    "fats": "25 g",
    "healthRating": "Healthy",
    "tips": ["Go light on dressing"],
})

RECIPE_REPLY = json.dumps({
    "title": "Veggie Omelette",
    "ingredientsList": ["2 eggs", "1 tomato", "spinach"],
    "instructions": "1. Whisk eggs 2. Add vegetables 3. Cook 4 minutes",
    "healthyNote": "High in protein",
})


@pytest.fixture
def session(gateway, tmp_path):
    recipe_store = LastRecipeStore(LocalStorage(str(tmp_path)), "guest")
    return WellnessSession(gateway, session_id="test", recipe_store=recipe_store)


class EchoAdapter(BaseAdapter):
    name = "echo"

    def build_request(self, text="", **inputs):
        return AIRequest(prompt_text=text)


class BlockingProvider(FakeProvider):
    """Holds every call open until released."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()

    async def generate_content(self, messages, **kwargs):
        self.calls.append({"messages": messages, **kwargs})
        await self.release.wait()
        return LLMResponse(content="done")


class TestBaseAdapter:
    """Tests for the shared adapter flow."""

    @pytest.mark.asyncio
    async def test_success(self, gateway, fake_provider):
        fake_provider.replies = ["*Hello*"]
        result = await EchoAdapter(gateway).run(text="Hi")
        assert result.ok
        assert result.adapter == "echo"
        assert result.display == {"text": "Hello"}
        assert result.message == "Hello"

    @pytest.mark.asyncio
    async def test_missing_credential(self):
        adapter = EchoAdapter(AIGateway(None))
        result = await adapter.run(text="Hi")
        assert not result.ok
        assert result.error == "MissingCredential"
        assert result.message == MissingCredential.user_message
        assert adapter.state is AdapterState.IDLE

    @pytest.mark.asyncio
    async def test_provider_error_uses_card_message(self):
        gateway = AIGateway(FakeProvider([ProviderError("boom", status_code=500)]))
        result = await EchoAdapter(gateway).run(text="Hi")
        assert result.error == "ProviderError"
        assert result.message == EchoAdapter.error_message

    @pytest.mark.asyncio
    async def test_rate_limited_message(self):
        gateway = AIGateway(FakeProvider([RateLimited(attempts=6)]))
        result = await EchoAdapter(gateway).run(text="Hi")
        assert result.error == "RateLimited"
        assert result.message == RateLimited.user_message

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self):
        gateway = AIGateway(FakeProvider([RuntimeError("unexpected")]))
        adapter = EchoAdapter(gateway)
        result = await adapter.run(text="Hi")
        assert not result.ok
        assert result.error == "RuntimeError"
        assert not adapter.busy

    @pytest.mark.asyncio
    async def test_failure_hook_error_is_contained(self, gateway, fake_provider):
        class BrokenHookAdapter(EchoAdapter):
            async def on_failure(self, error, **inputs):
                raise OverflowError("cannot convert float infinity to integer")

        adapter = BrokenHookAdapter(gateway)
        fake_provider.replies = [ProviderError("upstream down")]
        result = await adapter.run(text="Hi")
        assert not result.ok
        assert result.error == "ProviderError"
        assert result.display == {}
        assert not adapter.busy

    @pytest.mark.asyncio
    async def test_busy_adapter_rejects_second_request(self):
        provider = BlockingProvider()
        adapter = EchoAdapter(AIGateway(provider))

        first = asyncio.create_task(adapter.run(text="one"))
        for _ in range(3):
            await asyncio.sleep(0)
        assert adapter.busy

        second = await adapter.run(text="two")
        assert not second.ok
        assert second.error == "AdapterBusy"

        provider.release.set()
        result = await first
        assert result.ok
        assert len(provider.calls) == 1
        assert adapter.state is AdapterState.IDLE

    @pytest.mark.asyncio
    async def test_adapters_are_independent(self):
        provider = BlockingProvider()
        gateway = AIGateway(provider)
        first = EchoAdapter(gateway)
        other = EchoAdapter(gateway)

        task = asyncio.create_task(first.run(text="one"))
        for _ in range(3):
            await asyncio.sleep(0)
        assert first.busy and not other.busy

        provider.release.set()
        assert (await other.run(text="two")).ok
        assert (await task).ok

    def test_session_has_every_adapter(self, session):
        assert set(session.adapters) == set(ADAPTER_CLASSES)
        assert session.adapter("chat").session is session


class TestCardAdapters:
    """Tests for the wellness card adapters."""

    @pytest.mark.asyncio
    async def test_mood_updates_session(self, session, fake_provider):
        fake_provider.replies = ["Take a short walk."]
        result = await session.adapter("mood").run(emoji="😔")
        assert result.ok
        assert result.display == {"mood": "😔", "text": "Take a short walk."}
        assert session.mood == "😔"
        assert "😔" in fake_provider.calls[0]["messages"][-1].parts[0]["text"]

    @pytest.mark.asyncio
    async def test_sleep_split_and_message(self, session, fake_provider):
        fake_provider.replies = ["Below 8 hours."]
        result = await session.adapter("sleep").run(hours=8)
        assert result.display["deep_hours"] == 1.8
        assert result.display["light_hours"] == 6.2
        assert result.message == "Deep: 1.8h\nLight: 6.2h\n\nBelow 8 hours."
        assert session.sleep_hours == 8

    @pytest.mark.asyncio
    async def test_steps_conversion(self, session):
        result = await session.adapter("steps").run(distance=3, unit="km")
        assert result.display["steps"] == 3846
        assert session.steps_today == 3846

    @pytest.mark.asyncio
    async def test_steps_never_decrease(self, session):
        session.steps_today = 5000
        result = await session.adapter("steps").run(distance=3, unit="km")
        assert result.display["steps"] == 3846
        assert result.display["steps_today"] == 5000
        assert session.steps_today == 5000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("distance", [math.inf, math.nan, 1e308])
    async def test_steps_reject_non_finite_distance(self, session, fake_provider, distance):
        result = await session.adapter("steps").run(distance=distance, unit="km")
        assert not result.ok
        assert result.error == "ValidationError"
        assert session.steps_today == 0
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_sleep_rejects_non_finite_hours(self, session, fake_provider):
        result = await session.adapter("sleep").run(hours=math.nan)
        assert not result.ok
        assert result.error == "ValidationError"
        assert session.sleep_hours == 7.5
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_steps_recorded_even_when_ai_fails(self):
        session = WellnessSession(AIGateway(None))
        result = await session.adapter("steps").run(distance=780, unit="m")
        assert not result.ok
        assert result.display["steps"] == 1000
        assert session.steps_today == 1000

    @pytest.mark.asyncio
    async def test_hair_requires_description(self, session, fake_provider):
        result = await session.adapter("hair").run(issue="   ")
        assert not result.ok
        assert result.error == "ValidationError"
        assert result.message == "Please describe your hair issue clearly (e.g. dry, hairfall, thin, oily)."
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_skin_prompt_mentions_type(self, session, fake_provider):
        await session.adapter("skin").run(skin_type="combination")
        assert "combination" in fake_provider.calls[0]["messages"][-1].parts[0]["text"]

    @pytest.mark.asyncio
    async def test_skin_rejects_unknown_type(self, session, fake_provider):
        result = await session.adapter("skin").run(skin_type="scaly")
        assert result.error == "ValidationError"
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_exercise_gym_plan(self, session, fake_provider):
        await session.adapter("exercise").run(mode="gym")
        assert "push/pull/legs" in fake_provider.calls[0]["messages"][-1].parts[0]["text"]

    @pytest.mark.asyncio
    async def test_sugar_sets_post_meal_estimate(self, gateway, fake_provider):
        session = WellnessSession(gateway)
        adapter = SugarAdapter(gateway, session, rng=random.Random(7))
        expected = 110 + random.Random(7).randint(0, 24)

        fake_provider.replies = ["Moderate spike expected."]
        result = await adapter.run(food="rice and dal")

        assert result.ok
        assert result.display["glucose_reading"] == expected
        assert session.glucose_reading == expected
        assert 110 <= expected <= 134

    @pytest.mark.asyncio
    async def test_sugar_failure_keeps_reading(self):
        session = WellnessSession(AIGateway(None))
        result = await session.adapter("sugar").run(food="cake")
        assert not result.ok
        assert session.glucose_reading == 105.0


class TestFoodScanAdapter:
    """Tests for the food-image scan card."""

    @pytest.mark.asyncio
    async def test_no_image_makes_no_call(self, session, fake_provider):
        result = await session.adapter("food_scan").run(image=None)
        assert not result.ok
        assert result.message == "no image selected"
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_unsupported_type(self, session, fake_provider):
        image = ImagePayload(mime_type="application/pdf", data=b"%PDF")
        result = await session.adapter("food_scan").run(image=image)
        assert result.error == "ValidationError"
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_scan_success(self, session, fake_provider):
        fake_provider.replies = [SCAN_REPLY]
        image = ImagePayload(mime_type="image/jpeg", data=b"jpeg-bytes")
        result = await session.adapter("food_scan").run(image=image)

        assert result.ok
        assert result.display["foodName"] == "Caesar salad"
        assert result.display["healthRating"] == "Healthy"
        assert result.message == "Caesar salad (Healthy)"

        call = fake_provider.calls[0]
        assert call["response_schema"] == FOOD_SCAN_SCHEMA
        assert call["max_retries"] == 5
        assert call["model"] == "fake-vision"

    @pytest.mark.asyncio
    async def test_scan_missing_fields(self, session, fake_provider):
        fake_provider.replies = ['{"foodName": "Salad"}']
        image = ImagePayload(mime_type="image/png", data=b"png-bytes")
        result = await session.adapter("food_scan").run(image=image)
        assert result.error == "MalformedResponse"
        assert result.message == "Failed to analyze the image. Please try again."

    @pytest.mark.asyncio
    async def test_scan_bad_rating(self, session, fake_provider):
        reply = json.loads(SCAN_REPLY)
        reply["healthRating"] = "Great"
        fake_provider.replies = [json.dumps(reply)]
        image = ImagePayload(mime_type="image/png", data=b"png-bytes")
        result = await session.adapter("food_scan").run(image=image)
        assert result.error == "MalformedResponse"


class TestRecipeAdapter:
    """Tests for recipe generation and the last-recipe record."""

    def test_split_instructions(self):
        steps = split_instructions("1. Whisk eggs 2. Add vegetables 3. Cook 4 minutes")
        assert steps == ["Whisk eggs", "Add vegetables", "Cook 4 minutes"]

    @pytest.mark.asyncio
    async def test_blank_ingredients(self, session, fake_provider):
        result = await session.adapter("recipe").run(ingredients="  ")
        assert result.message == "Please enter some ingredients."
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_recipe_saved_as_last(self, session, fake_provider):
        fake_provider.replies = [RECIPE_REPLY]
        result = await session.adapter("recipe").run(ingredients="eggs, tomato, spinach")

        assert result.ok
        assert result.message == "Veggie Omelette"
        assert result.display["steps"] == ["Whisk eggs", "Add vegetables", "Cook 4 minutes"]
        assert fake_provider.calls[0]["max_retries"] == 0

        saved = await session.recipe_store.load()
        assert saved.title == "Veggie Omelette"
        assert saved.timestamp == result.display["timestamp"]

    @pytest.mark.asyncio
    async def test_failed_recipe_keeps_previous(self, session, fake_provider):
        fake_provider.replies = [RECIPE_REPLY, "not json at all"]
        await session.adapter("recipe").run(ingredients="eggs")
        result = await session.adapter("recipe").run(ingredients="bread")

        assert result.error == "MalformedResponse"
        assert (await session.recipe_store.load()).title == "Veggie Omelette"


class TestChatAdapter:
    """Tests for the chat conversation."""

    @pytest.mark.asyncio
    async def test_reply_appended(self, session, fake_provider):
        fake_provider.replies = ["Drink water regularly."]
        result = await session.adapter("chat").run(message="Any tips?")

        assert result.ok
        messages = session.conversation.messages
        assert [m.role for m in messages] == [MessageRole.USER, MessageRole.ASSISTANT]
        assert messages[1].text == "Drink water regularly."

    @pytest.mark.asyncio
    async def test_history_sent_with_prompt(self, session, fake_provider):
        fake_provider.replies = ["Hello!", "Try chamomile tea."]
        chat = session.adapter("chat")
        await chat.run(message="Hi")
        await chat.run(message="I can't sleep")

        second = fake_provider.calls[1]["messages"]
        assert [m.role for m in second] == ["user", "model", "user"]
        assert second[-1].parts[0]["text"] == "I can't sleep"
        assert len(session.conversation) == 4

    @pytest.mark.asyncio
    async def test_failure_appends_sentinel(self):
        session = WellnessSession(AIGateway(FakeProvider([ProviderError("down", status_code=503)])))
        result = await session.adapter("chat").run(message="Hello")

        assert not result.ok
        assert result.message == CHAT_ERROR_SENTINEL
        texts = [m.text for m in session.conversation.messages]
        assert texts == ["Hello", CHAT_ERROR_SENTINEL]

    @pytest.mark.asyncio
    async def test_blank_message_leaves_conversation(self, session, fake_provider):
        result = await session.adapter("chat").run(message=" ")
        assert result.error == "ValidationError"
        assert len(session.conversation) == 0
        assert fake_provider.calls == []
