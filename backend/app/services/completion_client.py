"""Completion client backed by the Google Gemini API"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from app.config import Settings
from app.errors import UpstreamError, UpstreamTimeoutError
from app.services.completion_extractor import extract_completion_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    """Inline binary payload sent alongside a prompt"""

    data: bytes
    mime_type: str = "image/jpeg"


class CompletionClient(Protocol):
    """Anything that turns a prompt (plus optional attachment) into completion text"""

    async def generate_completion(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        ...


class GeminiCompletionClient:
    """
    Gemini-backed completion client.

    Created once at startup from settings and shared by every request; it
    holds no per-request state. Prompts with an attachment go to the vision
    model, plain prompts to the text model.
    """

    def __init__(self, settings: Settings):
        """
        Initialize Gemini API

        Args:
            settings: Application settings carrying the API key, model names
                and the upstream timeout
        """
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set; completion requests will fail upstream")

        genai.configure(api_key=settings.gemini_api_key)

        generation_config = None
        if settings.generation_temperature is not None:
            generation_config = genai.GenerationConfig(temperature=settings.generation_temperature)

        self.timeout_seconds = settings.request_timeout_seconds
        self.text_model = genai.GenerativeModel(settings.text_model, generation_config=generation_config)
        self.vision_model = genai.GenerativeModel(settings.vision_model, generation_config=generation_config)
        logger.info(
            f"Gemini API initialized (text: {settings.text_model}, vision: {settings.vision_model}, "
            f"timeout: {self.timeout_seconds:g}s)"
        )

    async def generate_completion(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        """
        Send one prompt to Gemini and return the completion text.

        Args:
            prompt: Instruction text
            attachment: Optional inline image

        Returns:
            Raw completion text (may still contain code fences)

        Raises:
            UpstreamTimeoutError: No response within the timeout ceiling
            UpstreamError: Gemini answered with a non-success status
            BlockedOrEmptyCompletionError: Gemini answered without usable content
        """
        if attachment is None:
            model = self.text_model
            contents = prompt
        else:
            model = self.vision_model
            contents = [prompt, {"mime_type": attachment.mime_type, "data": attachment.data}]

        logger.debug(f"Prompt being sent to {model.model_name}:\n{prompt[:500]}")
        try:
            response = await asyncio.wait_for(
                model.generate_content_async(
                    contents,
                    # retry=None turns off the transport's default AsyncRetry
                    request_options={"timeout": self.timeout_seconds, "retry": None},
                ),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, google_exceptions.DeadlineExceeded):
            logger.error(f"Gemini call to {model.model_name} timed out after {self.timeout_seconds:g}s")
            raise UpstreamTimeoutError(self.timeout_seconds)
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Gemini call to {model.model_name} failed with status {e.code}: {e.message}")
            raise UpstreamError(status=e.code, body=e.message or "") from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini call to {model.model_name} failed: {e}")
            raise UpstreamError(status=None, body=str(e)) from e

        text = extract_completion_text(response)
        logger.info(f"Received response from {model.model_name} (length: {len(text)} chars)")
        return text
