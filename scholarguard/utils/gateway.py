"""
Analysis gateway: turns text into a validated plagiarism, AI-detection or
humanize result using the Gemini API.

Every kind shares the same retry wrapper. Plagiarism requests use search
grounding, which rules out a server-side response schema, so that payload
is parsed defensively from free-form text. The other kinds request
schema-conformant JSON. Both paths validate every field before a result is
handed back.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict

from scholarguard.config import (
    AI_DETECTION_TEMPERATURE,
    BASE_DELAY_MS,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    HUMANIZE_TEMPERATURE,
    MAX_ATTEMPTS,
    MAX_INPUT_CHARS,
    PLAGIARISM_TEMPERATURE,
)
from scholarguard.errors import InputEmptyError, MissingCredentialError
from scholarguard.schemas.analysis_schemas import (
    AIDetectionResult,
    AnalysisKind,
    AnalysisRequest,
    HumanizeResult,
    HumanizeTone,
    PlagiarismResult,
)
from scholarguard.utils.gemini_client import (
    AI_DETECTION_SCHEMA,
    HUMANIZE_SCHEMA,
    GeminiBackend,
    ModelBackend,
    grounded_config,
    structured_config,
)
from scholarguard.utils.prompts import ai_detection_prompt, humanize_prompt, plagiarism_prompt
from scholarguard.utils.response_utils import parse_free_form, parse_structured
from scholarguard.utils.retry_utils import with_retry

logger = logging.getLogger("gateway")

AnalysisResult = Union[PlagiarismResult, AIDetectionResult, HumanizeResult]


class GatewayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    model: str = GEMINI_MODEL
    max_input_chars: int = MAX_INPUT_CHARS
    max_attempts: int = MAX_ATTEMPTS
    base_delay_ms: int = BASE_DELAY_MS

    @classmethod
    def from_settings(cls) -> "GatewayConfig":
        return cls(api_key=GEMINI_API_KEY)


class AnalysisGateway:
    def __init__(
        self,
        config: GatewayConfig,
        backend: Optional[ModelBackend] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.backend = backend
        self.sleep = sleep

    def _resolve_backend(self) -> ModelBackend:
        if not self.config.api_key:
            raise MissingCredentialError("API key is missing. Set GEMINI_API_KEY.")
        if self.backend is not None:
            return self.backend
        return GeminiBackend(api_key=self.config.api_key, model=self.config.model)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Run one analysis, retrying transient upstream failures.

        Raises InputEmptyError, MissingCredentialError, ResponseFormatError,
        UpstreamRequestError or UpstreamUnavailableError. No result is
        returned unless every field validated.
        """
        if not request.text.strip():
            raise InputEmptyError("Text to analyze is empty.")
        backend = self._resolve_backend()
        text = request.text[:self.config.max_input_chars]

        if request.kind == AnalysisKind.PLAGIARISM:
            async def attempt():
                raw = await backend.generate(
                    plagiarism_prompt(text), grounded_config(PLAGIARISM_TEMPERATURE)
                )
                return parse_free_form(raw, PlagiarismResult)
        elif request.kind == AnalysisKind.AI_DETECTION:
            async def attempt():
                raw = await backend.generate(
                    ai_detection_prompt(text),
                    structured_config(AI_DETECTION_SCHEMA, AI_DETECTION_TEMPERATURE),
                )
                return parse_structured(raw, AIDetectionResult)
        else:
            tone = request.tone or HumanizeTone.SCIENTIFIC_FORMAL

            async def attempt():
                raw = await backend.generate(
                    humanize_prompt(text, tone),
                    structured_config(HUMANIZE_SCHEMA, HUMANIZE_TEMPERATURE),
                )
                return parse_structured(raw, HumanizeResult)

        logger.info(f"🔍 Starting {request.kind.value} analysis ({len(text)} chars)")
        result = await with_retry(
            attempt,
            max_attempts=self.config.max_attempts,
            base_delay_ms=self.config.base_delay_ms,
            sleep=self.sleep,
        )
        logger.info(f"✅ {request.kind.value} analysis complete")
        return result

    def _request(self, kind: AnalysisKind, text: str, tone: Optional[HumanizeTone] = None) -> AnalysisRequest:
        return AnalysisRequest.build(kind, text, tone, max_chars=self.config.max_input_chars)

    async def check_plagiarism(self, text: str) -> PlagiarismResult:
        return await self.analyze(self._request(AnalysisKind.PLAGIARISM, text))

    async def detect_ai_content(self, text: str) -> AIDetectionResult:
        return await self.analyze(self._request(AnalysisKind.AI_DETECTION, text))

    async def humanize(self, text: str, tone: Optional[HumanizeTone] = None) -> HumanizeResult:
        return await self.analyze(self._request(AnalysisKind.HUMANIZE, text, tone))
