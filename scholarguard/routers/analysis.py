from fastapi import APIRouter, Depends, HTTPException
import logging

from scholarguard.dependencies.gateway import get_gateway
from scholarguard.errors import (
    AnalysisError,
    InputEmptyError,
    MissingCredentialError,
    ResponseFormatError,
    UpstreamRequestError,
    UpstreamUnavailableError,
)
from scholarguard.schemas.analysis_schemas import AIDetectionResult, HumanizeResult
from scholarguard.schemas.report_schemas import HumanizePayload, PlagiarismReport, TextPayload
from scholarguard.utils.alignment_utils import align_matches, source_legend
from scholarguard.utils.gateway import AnalysisGateway

router = APIRouter(tags=["analysis"])

logger = logging.getLogger("analysis")

RETRY_PROMPT = "Analysis failed. Please try again later or ensure your API key is active."


def to_http_error(exc: AnalysisError) -> HTTPException:
    if isinstance(exc, InputEmptyError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, MissingCredentialError):
        return HTTPException(status_code=500, detail=RETRY_PROMPT)
    if isinstance(exc, UpstreamUnavailableError):
        return HTTPException(status_code=503, detail=RETRY_PROMPT)
    if isinstance(exc, (ResponseFormatError, UpstreamRequestError)):
        return HTTPException(status_code=502, detail=RETRY_PROMPT)
    return HTTPException(status_code=500, detail=RETRY_PROMPT)


@router.post("/plagiarism", response_model=PlagiarismReport)
async def check_plagiarism(
    payload: TextPayload,
    gateway: AnalysisGateway = Depends(get_gateway),
):
    try:
        result = await gateway.check_plagiarism(payload.text)
    except AnalysisError as e:
        logger.error(f"❌ Plagiarism check failed: {e}")
        raise to_http_error(e)

    # highlight against the text the model actually saw
    analyzed = payload.text[:gateway.config.max_input_chars]
    spans = align_matches(analyzed, result.matches)
    logger.info(f"   ➤ Score {result.score}%, {len(result.matches)} matches")

    return PlagiarismReport(
        result=result,
        spans=spans,
        legend=source_legend(result.matches),
    )


@router.post("/ai-detection", response_model=AIDetectionResult)
async def detect_ai_content(
    payload: TextPayload,
    gateway: AnalysisGateway = Depends(get_gateway),
):
    try:
        return await gateway.detect_ai_content(payload.text)
    except AnalysisError as e:
        logger.error(f"❌ AI detection failed: {e}")
        raise to_http_error(e)


@router.post("/humanize", response_model=HumanizeResult)
async def humanize(
    payload: HumanizePayload,
    gateway: AnalysisGateway = Depends(get_gateway),
):
    try:
        return await gateway.humanize(payload.text, payload.tone)
    except AnalysisError as e:
        logger.error(f"❌ Humanize failed: {e}")
        raise to_http_error(e)
