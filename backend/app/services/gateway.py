"""Prompted-completion gateway: validate, prompt, call Gemini, shape the result"""
import base64
import logging

from app.errors import CompletionError
from app.models.request import AnalysisRequest, GenerationRequest, ReplyRequest
from app.models.response import AnalysisResult, GenerationResult, ReplyResult
from app.services.completion_client import Attachment, CompletionClient
from app.services.completion_extractor import parse_json_completion
from app.services.prompt_builder import (
    ANALYSIS_FIELDS,
    build_analysis_prompt,
    build_back_translation_prompt,
    build_generation_prompt,
    build_reply_prompt,
)
from app.services.validation import NO_IMAGE_MESSAGE, require_fields

logger = logging.getLogger(__name__)

# Returned as replyTranslation when the back-translation call fails
TRANSLATION_UNAVAILABLE = "（翻译暂时不可用，请自行核对回复内容）"


def decode_base64_image(base64_image: str) -> bytes:
    """Decode a base64 image string, accepting an optional data URL prefix."""
    image_data = base64_image
    if ',' in image_data and image_data.startswith('data:image'):
        image_data = image_data.split(',', 1)[1]
    return base64.b64decode(image_data)


class PromptedCompletionGateway:
    """
    Runs the three gateway operations against a completion client.

    Args:
        client: Completion client shared across requests
    """

    def __init__(self, client: CompletionClient):
        self.client = client

    async def analyze_image(self, request: AnalysisRequest) -> AnalysisResult:
        """Extract text from an image, detect its language and translate it to Chinese."""
        require_fields(request, ["image"], NO_IMAGE_MESSAGE)

        attachment = Attachment(data=decode_base64_image(request.image), mime_type="image/jpeg")
        logger.info(f"Analyzing image ({len(attachment.data)} bytes)")

        text = await self.client.generate_completion(build_analysis_prompt(), attachment)
        data = parse_json_completion(text, ANALYSIS_FIELDS)
        return AnalysisResult(
            originalText=data["originalText"].strip(),
            language=data["language"].strip(),
            translatedText=data["translatedText"].strip(),
        )

    async def generate_message(self, request: GenerationRequest) -> GenerationResult:
        """Write a new message in the target language, then back-translate it."""
        require_fields(request, ["targetLanguage", "userIntent", "tone"])
        logger.info(f"Generating message: lang={request.targetLanguage}, tone={request.tone}")

        prompt = build_generation_prompt(request.targetLanguage, request.userIntent, request.tone)
        reply = (await self.client.generate_completion(prompt)).strip()
        translation = await self._back_translate(request.targetLanguage, reply)
        return GenerationResult(reply=reply, replyTranslation=translation)

    async def generate_reply(self, request: ReplyRequest) -> ReplyResult:
        """Write a reply to a received message, then back-translate it."""
        require_fields(request, ["originalText", "language", "userIntent", "tone"])
        logger.info(f"Generating reply: lang={request.language}, tone={request.tone}")

        prompt = build_reply_prompt(request.originalText, request.language, request.userIntent, request.tone)
        reply = (await self.client.generate_completion(prompt)).strip()
        translation = await self._back_translate(request.language, reply)
        return ReplyResult(reply=reply, replyTranslation=translation)

    async def _back_translate(self, language: str, reply: str) -> str:
        """
        Translate a generated reply back into Chinese.

        A failure here keeps the already generated reply: the caller gets
        TRANSLATION_UNAVAILABLE instead of an error.
        """
        try:
            translation = await self.client.generate_completion(build_back_translation_prompt(language, reply))
        except CompletionError as e:
            logger.warning(f"Back-translation failed, returning reply without translation: {e}")
            return TRANSLATION_UNAVAILABLE
        return translation.strip()
