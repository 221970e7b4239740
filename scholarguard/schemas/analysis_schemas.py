from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from scholarguard.config import AI_LIKELY_THRESHOLD, AI_MIXED_THRESHOLD, MAX_INPUT_CHARS
from scholarguard.errors import InputEmptyError


def clamp_percent(value: float) -> float:
    return min(max(value, 0.0), 100.0)


class AnalysisKind(str, Enum):
    PLAGIARISM = "plagiarism"
    AI_DETECTION = "ai_detection"
    HUMANIZE = "humanize"


class HumanizeTone(str, Enum):
    SCIENTIFIC_FORMAL = "Scientific Formal"
    REVIEWER_ACADEMIC = "Reviewer-Level Academic"
    STUDENT_ACADEMIC = "Student-Level Academic"


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: AnalysisKind
    text: str
    tone: Optional[HumanizeTone] = None

    @classmethod
    def build(
        cls,
        kind: AnalysisKind,
        text: str,
        tone: Optional[HumanizeTone] = None,
        max_chars: int = MAX_INPUT_CHARS,
    ) -> "AnalysisRequest":
        """
        Validate and normalise caller input.

        Blank text raises InputEmptyError. Text longer than ``max_chars``
        characters is cut down to that many code points. Tone only applies
        to humanize requests and defaults to Scientific Formal there.
        """
        if not text or not text.strip():
            raise InputEmptyError("Text to analyze is empty.")
        if kind == AnalysisKind.HUMANIZE:
            tone = tone or HumanizeTone.SCIENTIFIC_FORMAL
        else:
            tone = None
        return cls(kind=kind, text=text[:max_chars], tone=tone)


# ---- Plagiarism ----

class PlagiarismMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    sentence: str
    source: str
    sourceType: Literal["Journal", "Book", "Conference", "Website"]
    similarity: float = Field(allow_inf_nan=False)  # 0–100
    url: Optional[str] = None

    @field_validator("similarity")
    @classmethod
    def clamp_similarity(cls, value: float) -> float:
        return clamp_percent(value)


class PlagiarismResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(allow_inf_nan=False)  # 0–100
    summary: str
    matches: List[PlagiarismMatch]

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return clamp_percent(value)


# ---- AI detection ----

class AIDetectionSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    isAI: bool
    reason: str


class AIDetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(allow_inf_nan=False)  # 0–100 AI probability
    overallAnalysis: str
    segments: List[AIDetectionSegment]

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return clamp_percent(value)

    @computed_field
    @property
    def verdict(self) -> str:
        if self.score > AI_LIKELY_THRESHOLD:
            return "Likely AI-Generated"
        if self.score > AI_MIXED_THRESHOLD:
            return "Mixed / Edited Content"
        return "Likely Human-Written"


# ---- Humanizer ----

class HumanizeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    originalText: str
    humanizedText: str
    changesNote: str
