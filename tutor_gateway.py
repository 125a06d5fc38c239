"""
Tutor Gateway

Turns a (course topic, question) pair into an answer from the Gemini
text-generation service. Every call is independent: only the latest question
is sent, never the earlier turns of the conversation.
"""

import asyncio
import logging
from typing import Optional

import google.generativeai as genai

logger = logging.getLogger(__name__)

DEFAULT_TUTOR_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT_SECONDS = 30.0

CONNECTION_ERROR_REPLY = "Error connecting to AI Tutor. Please check your internet connection."
EMPTY_RESPONSE_REPLY = "I'm sorry, I couldn't process that. Try again!"


class TutorServiceFailure(Exception):
    """Raised inside the gateway when the service cannot produce an answer"""


def build_tutor_prompt(topic: str, question: str) -> str:
    """Build the single instructional prompt sent for one question"""
    return (
        f'You are a helpful educational tutor for a student learning "{topic}". '
        f'The student asks: "{question}". '
        "Provide a clear, encouraging, and educational answer. Keep it concise."
    )


class TutorGateway:
    """Sends tutor questions to a Gemini model with fallback-on-failure replies"""

    def __init__(self, genai_model=None, timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS):
        self.genai_model = genai_model
        self.timeout = timeout

    @classmethod
    def from_api_key(
        cls,
        api_key: Optional[str],
        model_name: str = DEFAULT_TUTOR_MODEL,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    ) -> "TutorGateway":
        """Configure Google AI and build a gateway; no key gives an offline gateway"""
        if not api_key:
            logger.warning("No Google AI API key configured; tutor replies will use the error fallback")
            return cls(genai_model=None, timeout=timeout)
        genai.configure(api_key=api_key)
        return cls(genai_model=genai.GenerativeModel(model_name), timeout=timeout)

    @property
    def is_configured(self) -> bool:
        return self.genai_model is not None

    async def ask(self, topic: str, question: str) -> str:
        """Answer ``question`` about ``topic``; never raises.

        Blank questions return an empty string without contacting the service.
        """
        if not question or not question.strip():
            logger.debug("Ignoring blank tutor question")
            return ""

        try:
            return await self._generate(build_tutor_prompt(topic, question))
        except Exception as e:
            logger.error(f"AI Tutor error: {e}")
            return CONNECTION_ERROR_REPLY

    async def _generate(self, prompt: str) -> str:
        if self.genai_model is None:
            raise TutorServiceFailure("Tutor model is not configured")

        call = self.genai_model.generate_content_async(prompt)
        if self.timeout is not None:
            try:
                response = await asyncio.wait_for(call, timeout=self.timeout)
            except asyncio.TimeoutError as e:
                raise TutorServiceFailure(f"No reply within {self.timeout}s") from e
        else:
            response = await call

        # response.text raises ValueError when the candidate has no text parts
        try:
            model_text = response.text
        except (AttributeError, ValueError):
            model_text = None
        if not model_text:
            logger.warning("Tutor model returned an empty response")
            return EMPTY_RESPONSE_REPLY
        return model_text
