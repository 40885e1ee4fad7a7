"""Tests for app.services.gateway: PromptedCompletionGateway operations."""

from __future__ import annotations

import asyncio
import base64

import pytest

from app.errors import (
    BlockedOrEmptyCompletionError,
    MalformedCompletionError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from app.models.request import AnalysisRequest, GenerationRequest, ReplyRequest
from app.services.gateway import TRANSLATION_UNAVAILABLE, PromptedCompletionGateway, decode_base64_image
from app.services.prompt_builder import TONE_INSTRUCTIONS

ANALYSIS_JSON = '{"originalText": " Hola ", "language": "Spanish", "translatedText": "你好"}'


class TestDecodeBase64Image:
    def test_plain_base64(self):
        assert decode_base64_image(base64.b64encode(b"jpeg").decode()) == b"jpeg"

    def test_data_url_prefix_is_stripped(self):
        encoded = base64.b64encode(b"jpeg").decode()
        assert decode_base64_image(f"data:image/jpeg;base64,{encoded}") == b"jpeg"


class TestAnalyzeImage:
    def test_returns_trimmed_fields(self, make_client, jpeg_base64):
        client = make_client(f"```json\n{ANALYSIS_JSON}\n```")
        result = asyncio.run(PromptedCompletionGateway(client).analyze_image(AnalysisRequest(image=jpeg_base64)))
        assert result.originalText == "Hola"
        assert result.language == "Spanish"
        assert result.translatedText == "你好"

    def test_sends_decoded_jpeg_attachment(self, make_client, jpeg_base64):
        client = make_client(ANALYSIS_JSON)
        asyncio.run(PromptedCompletionGateway(client).analyze_image(AnalysisRequest(image=jpeg_base64)))
        _, attachment = client.calls[0]
        assert attachment.mime_type == "image/jpeg"
        assert attachment.data == base64.b64decode(jpeg_base64)

    def test_missing_image_makes_no_call(self, make_client):
        client = make_client()
        with pytest.raises(ValidationError):
            asyncio.run(PromptedCompletionGateway(client).analyze_image(AnalysisRequest()))
        assert client.calls == []

    def test_malformed_json_fails(self, make_client, jpeg_base64):
        client = make_client("I could not read any text.")
        with pytest.raises(MalformedCompletionError):
            asyncio.run(PromptedCompletionGateway(client).analyze_image(AnalysisRequest(image=jpeg_base64)))


class TestGenerateMessage:
    def _request(self, tone="polite"):
        return GenerationRequest(targetLanguage="English", userIntent="我明天请假", tone=tone)

    def test_generate_then_back_translate(self, make_client):
        client = make_client("  I will be off tomorrow. \n", " 我明天休假。 ")
        result = asyncio.run(PromptedCompletionGateway(client).generate_message(self._request()))
        assert result.reply == "I will be off tomorrow."
        assert result.replyTranslation == "我明天休假。"
        assert len(client.calls) == 2
        assert '"I will be off tomorrow."' in client.calls[1][0]

    def test_unknown_tone_uses_friendly(self, make_client):
        client = make_client("Hi", "嗨")
        asyncio.run(PromptedCompletionGateway(client).generate_message(self._request(tone="snarky")))
        assert TONE_INSTRUCTIONS["friendly"] in client.calls[0][0]

    @pytest.mark.parametrize(
        "error",
        [
            UpstreamTimeoutError(60),
            UpstreamError(500, "internal"),
            BlockedOrEmptyCompletionError(),
        ],
    )
    def test_back_translation_failure_keeps_reply(self, make_client, error):
        client = make_client("I will be off tomorrow.", error)
        result = asyncio.run(PromptedCompletionGateway(client).generate_message(self._request()))
        assert result.reply == "I will be off tomorrow."
        assert result.replyTranslation == TRANSLATION_UNAVAILABLE

    def test_first_step_failure_aborts(self, make_client):
        client = make_client(UpstreamError(503, "unavailable"))
        with pytest.raises(UpstreamError):
            asyncio.run(PromptedCompletionGateway(client).generate_message(self._request()))
        assert len(client.calls) == 1


class TestGenerateReply:
    def _request(self, **overrides):
        values = {
            "originalText": "Can we move the call?",
            "language": "English",
            "userIntent": "可以，改到周五",
            "tone": "business",
        }
        values.update(overrides)
        return ReplyRequest(**values)

    def test_reply_prompt_contains_original(self, make_client):
        client = make_client("Sure, Friday works.", "当然，周五可以。")
        result = asyncio.run(PromptedCompletionGateway(client).generate_reply(self._request()))
        assert result.reply == "Sure, Friday works."
        assert "Can we move the call?" in client.calls[0][0]

    def test_missing_field_makes_no_call(self, make_client):
        client = make_client()
        with pytest.raises(ValidationError):
            asyncio.run(PromptedCompletionGateway(client).generate_reply(self._request(language=None)))
        assert client.calls == []

    def test_back_translation_failure_keeps_reply(self, make_client):
        client = make_client("Sure, Friday works.", MalformedCompletionError())
        result = asyncio.run(PromptedCompletionGateway(client).generate_reply(self._request()))
        assert result.replyTranslation == TRANSLATION_UNAVAILABLE
