"""Completion gateway endpoints - image analysis, message and reply generation"""
import logging
import time
from typing import Awaitable, Callable, Type

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.errors import BlockedOrEmptyCompletionError, CompletionError, GatewayError
from app.models.request import AnalysisRequest, GenerationRequest, ReplyRequest
from app.models.response import AnalysisResult, ErrorResponse, GenerationResult, ReplyResult
from app.services.completion_client import CompletionClient
from app.services.gateway import PromptedCompletionGateway
from app.services.validation import parse_body

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_completion_client(request: Request) -> CompletionClient:
    """Completion client created in the app lifespan"""
    return request.app.state.completion_client


def get_gateway(client: CompletionClient = Depends(get_completion_client)) -> PromptedCompletionGateway:
    return PromptedCompletionGateway(client)


def json_body(model: Type[BaseModel]) -> Callable[[Request], Awaitable[BaseModel]]:
    """Dependency that parses the raw body as JSON whatever its Content-Type"""

    async def dependency(request: Request) -> BaseModel:
        return parse_body(await request.body(), model)

    return dependency


async def _run_operation(name: str, failure_message: str, call: Awaitable[BaseModel]):
    """
    Await a gateway operation and map completion failures to a 500 body.

    Validation errors propagate to the app-level handler unchanged.
    """
    start_time = time.time()
    logger.info(f"--- [{name}] request received ---")
    try:
        result = await call
    except BlockedOrEmptyCompletionError as e:
        logger.error(f"[{name}] model returned no usable content: {e.details}")
        return _failure(e.message, e.details)
    except CompletionError as e:
        logger.error(f"[{name}] completion failed: {e}")
        return _failure(failure_message, e.details)
    except GatewayError:
        raise
    except Exception as e:
        logger.error(f"[{name}] unexpected error: {e}", exc_info=True)
        return _failure(failure_message, type(e).__name__)

    elapsed_time = time.time() - start_time
    logger.info(f"--- [{name}] completed in {elapsed_time:.2f} seconds ---")
    return result


def _failure(message: str, details: str | None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


@router.post("/analyzeImage", response_model=AnalysisResult, responses=ERROR_RESPONSES)
async def analyze_image(
    request: AnalysisRequest = Depends(json_body(AnalysisRequest)),
    gateway: PromptedCompletionGateway = Depends(get_gateway),
):
    """
    Analyze an image:
    1. Decode the base64 JPEG
    2. Ask the vision model to extract, identify and translate the text
    3. Strip code fences and parse the JSON answer
    """
    return await _run_operation("analyzeImage", "Failed to analyze image.", gateway.analyze_image(request))


@router.post("/generateMessage", response_model=GenerationResult, responses=ERROR_RESPONSES)
async def generate_message(
    request: GenerationRequest = Depends(json_body(GenerationRequest)),
    gateway: PromptedCompletionGateway = Depends(get_gateway),
):
    """Compose a message in the target language, plus a Chinese back-translation"""
    return await _run_operation("generateMessage", "Failed to generate message.", gateway.generate_message(request))


@router.post("/generateReply", response_model=ReplyResult, responses=ERROR_RESPONSES)
async def generate_reply(
    request: ReplyRequest = Depends(json_body(ReplyRequest)),
    gateway: PromptedCompletionGateway = Depends(get_gateway),
):
    """Compose a reply to a received message, plus a Chinese back-translation"""
    return await _run_operation("generateReply", "Failed to generate reply.", gateway.generate_reply(request))
