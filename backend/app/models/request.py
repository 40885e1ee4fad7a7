"""Request models for the completion gateway API"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class Tone(str, Enum):
    """Style directive for generated messages"""

    CASUAL = "casual"
    FRIENDLY = "friendly"
    POLITE = "polite"
    BUSINESS = "business"


# Fields are optional at the schema level so that a missing value is reported
# by the gateway as a 400 with the operation's own error message.


class AnalysisRequest(BaseModel):
    """Request model for /api/analyzeImage"""

    image: Optional[str] = Field(
        default=None,
        description="Base64-encoded JPEG image, optionally as a data URL"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [{"image": "/9j/4AAQSkZJRg..."}]
        }
    }


class GenerationRequest(BaseModel):
    """Request model for /api/generateMessage"""

    targetLanguage: Optional[str] = Field(default=None, description="Language to write the message in")
    userIntent: Optional[str] = Field(default=None, description="What the user wants to say, in Chinese")
    tone: Optional[str] = Field(default=None, description="casual, friendly, polite or business")

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "targetLanguage": "English",
                "userIntent": "问一下明天的会议是否改到下午三点",
                "tone": "polite"
            }]
        }
    }


class ReplyRequest(BaseModel):
    """Request model for /api/generateReply"""

    originalText: Optional[str] = Field(default=None, description="Message being replied to")
    language: Optional[str] = Field(default=None, description="Language of the original message")
    userIntent: Optional[str] = Field(default=None, description="What the user wants to reply, in Chinese")
    tone: Optional[str] = Field(default=None, description="casual, friendly, polite or business")

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "originalText": "Are you free this weekend?",
                "language": "English",
                "userIntent": "周六可以，周日不行",
                "tone": "friendly"
            }]
        }
    }
