"""Prompt templates for the Gemini completion gateway"""
from typing import Dict, Optional

from app.models.request import Tone

TONE_INSTRUCTIONS: Dict[str, str] = {
    Tone.CASUAL.value: "语气要非常随意、口语化，就像和好朋友聊天一样。",
    Tone.FRIENDLY.value: "语气要友好、标准，适合大多数日常场景。",
    Tone.POLITE.value: "语气要礼貌、客气，可以稍微正式一点。",
    Tone.BUSINESS.value: "语气要非常商务、正式，适合工作场合。",
}

# Shared by every prompt that writes text on the user's behalf
FIDELITY_RULES = (
    "请严格忠实于我的意思：保持人称代词和主语、宾语关系不变（例如“我”和“你”不能对调），"
    "不要添加我没有表达的内容、承诺、细节或情绪。"
)

ANALYSIS_FIELDS = ("originalText", "language", "translatedText")


def tone_instruction(tone: Optional[str]) -> str:
    """
    Map a tone value to its style instruction.

    Tones are matched exactly. Unknown or missing tones fall back to the
    friendly instruction instead of failing the request.
    """
    return TONE_INSTRUCTIONS.get(tone or "", TONE_INSTRUCTIONS[Tone.FRIENDLY.value])


def build_analysis_prompt() -> str:
    """
    Build the vision prompt for text extraction, language detection and translation.

    Returns:
        Prompt string requesting a strict JSON object with the fields in
        ANALYSIS_FIELDS
    """
    return (
        "从这张图片中提取所有文字。然后，判断这些文字是什么语言（例如：English, Spanish, Japanese）。"
        "最后，将提取的文字翻译成简体中文。\n"
        "请只返回一个 JSON 对象，不要包含任何解释、标题或 Markdown 代码块，格式严格如下：\n"
        '{"originalText": "提取的原文", "language": "检测到的语言", "translatedText": "简体中文翻译"}\n'
        "翻译时保持原文的人称代词和主语、宾语关系，不要添加原文中没有的内容。"
    )


def build_generation_prompt(target_language: str, user_intent: str, tone: Optional[str]) -> str:
    """
    Build the prompt for writing a new message from the user's intent.

    Args:
        target_language: Language the message must be written in
        user_intent: What the user wants to say, described in Chinese
        tone: Tone enum value; unknown values use the friendly instruction

    Returns:
        Formatted prompt string
    """
    return f"""你是一位精通 {target_language} 的语言专家和写作助手。
你的任务是根据我的意图，用 {target_language} 写一条信息。
我的意图是（用中文描述）：“{user_intent}”
{tone_instruction(tone)}
{FIDELITY_RULES}
请直接生成 {target_language} 的信息内容，不要包含任何额外的解释或标题。"""


def build_reply_prompt(original_text: str, language: str, user_intent: str, tone: Optional[str]) -> str:
    """
    Build the prompt for replying to a received message.

    Args:
        original_text: The message being replied to
        language: Language of the original message and of the reply
        user_intent: What the user wants to reply, described in Chinese
        tone: Tone enum value; unknown values use the friendly instruction

    Returns:
        Formatted prompt string
    """
    return f"""你是一位精通 {language} 的语言专家和沟通高手。你的任务是帮我回复一条信息。
原始信息是（用 {language} 写的）：“{original_text}”
我想表达的意思是（用中文描述）：“{user_intent}”
{tone_instruction(tone)}
{FIDELITY_RULES}
请为我生成一个自然、地道、符合本地人习惯的 {language} 回复。你的回复应该优先使用 'Hi', 'Hello' 等通用问候语，避免使用和时间相关的问候语（如 'Good morning'），除非在上下文中非常必要和自然。
请直接生成 {language} 的回复内容，不要包含任何额外的解释或标题。"""


def build_back_translation_prompt(language: str, text: str) -> str:
    """Build the prompt that translates generated text back into Chinese for review."""
    return (
        f"请将以下 {language} 文本翻译成自然流畅的中文，保持人称和语气，"
        f"只返回译文，不要包含任何解释：\n\n\"{text}\""
    )
