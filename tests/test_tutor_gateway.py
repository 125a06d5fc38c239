"""
Tests for the tutor gateway's request/response contract
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from tutor_gateway import (
    CONNECTION_ERROR_REPLY,
    EMPTY_RESPONSE_REPLY,
    TutorGateway,
    build_tutor_prompt,
)


def test_prompt_embeds_topic_and_verbatim_question():
    prompt = build_tutor_prompt("Algebra", "What is x in 2x = 4?")
    assert '"Algebra"' in prompt
    assert '"What is x in 2x = 4?"' in prompt
    assert "concise" in prompt


@pytest.mark.asyncio
async def test_returns_model_text_verbatim(gateway, genai_model):
    answer = await gateway.ask("JavaScript Fundamentals", "What is a variable?")

    assert answer == "A variable stores a value."
    genai_model.generate_content_async.assert_awaited_once_with(
        build_tutor_prompt("JavaScript Fundamentals", "What is a variable?")
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("question", ["", "   ", "\n\t"])
async def test_blank_question_sends_nothing(gateway, genai_model, question):
    assert await gateway.ask("Algebra", question) == ""
    genai_model.generate_content_async.assert_not_called()


@pytest.mark.asyncio
async def test_transport_failure_returns_fallback(gateway, genai_model):
    genai_model.generate_content_async.side_effect = ConnectionError("network down")

    assert await gateway.ask("Algebra", "Why?") == CONNECTION_ERROR_REPLY
    assert genai_model.generate_content_async.await_count == 1


@pytest.mark.asyncio
async def test_empty_text_returns_placeholder(gateway, genai_model):
    genai_model.generate_content_async.return_value = SimpleNamespace(text="")
    assert await gateway.ask("Algebra", "Why?") == EMPTY_RESPONSE_REPLY


@pytest.mark.asyncio
async def test_missing_text_returns_placeholder(gateway, genai_model):
    genai_model.generate_content_async.return_value = SimpleNamespace()
    assert await gateway.ask("Algebra", "Why?") == EMPTY_RESPONSE_REPLY


@pytest.mark.asyncio
async def test_blocked_response_text_error_returns_placeholder(gateway, genai_model):
    class BlockedResponse:
        @property
        def text(self):
            raise ValueError("response has no parts")

    genai_model.generate_content_async.return_value = BlockedResponse()

    assert await gateway.ask("Algebra", "Why?") == EMPTY_RESPONSE_REPLY


@pytest.mark.asyncio
async def test_slow_service_times_out_to_fallback(genai_model):
    async def hang(prompt):
        await asyncio.sleep(1)

    genai_model.generate_content_async = AsyncMock(side_effect=hang)
    gateway = TutorGateway(genai_model=genai_model, timeout=0.01)

    assert await gateway.ask("Algebra", "Why?") == CONNECTION_ERROR_REPLY


@pytest.mark.asyncio
async def test_unconfigured_gateway_never_raises():
    gateway = TutorGateway.from_api_key(None)

    assert not gateway.is_configured
    assert await gateway.ask("Algebra", "Why?") == CONNECTION_ERROR_REPLY


def test_from_api_key_configures_google_ai():
    with patch("tutor_gateway.genai") as genai:
        gateway = TutorGateway.from_api_key("secret", model_name="gemini-test", timeout=3)

    genai.configure.assert_called_once_with(api_key="secret")
    genai.GenerativeModel.assert_called_once_with("gemini-test")
    assert gateway.genai_model is genai.GenerativeModel.return_value
    assert gateway.timeout == 3
