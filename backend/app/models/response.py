"""Response models for the completion gateway API"""
from pydantic import BaseModel, Field
from typing import Optional


class AnalysisResult(BaseModel):
    """Response model for /api/analyzeImage"""

    originalText: str = Field(description="Text extracted from the image")
    language: str = Field(description="Detected language of the extracted text")
    translatedText: str = Field(description="Simplified Chinese translation")

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "originalText": "Hi",
                "language": "English",
                "translatedText": "你好"
            }]
        }
    }


class ReplyResult(BaseModel):
    """Response model for /api/generateMessage and /api/generateReply"""

    reply: str = Field(description="Generated message in the target language")
    replyTranslation: Optional[str] = Field(
        default=None,
        description="Chinese back-translation, or a fixed fallback if it failed"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "reply": "Saturday works for me, but Sunday doesn't.",
                "replyTranslation": "周六可以，但周日不行。"
            }]
        }
    }


# Generating a fresh message and replying to one share the same result shape.
GenerationResult = ReplyResult


class ErrorResponse(BaseModel):
    """Body returned for every failed request"""

    error: str
    details: Optional[str] = None
