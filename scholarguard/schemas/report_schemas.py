from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from scholarguard.schemas.analysis_schemas import HumanizeTone, PlagiarismResult


# ---- Request bodies ----

class TextPayload(BaseModel):
    text: str


class HumanizePayload(BaseModel):
    text: str
    tone: Optional[HumanizeTone] = None


# ---- Aligned plagiarism report ----

class AlignedSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    source: Optional[str] = None      # None when the span is unmatched
    colorIndex: Optional[int] = None  # palette slot for source


class SourceLegendEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    colorIndex: int


class PlagiarismReport(BaseModel):
    result: PlagiarismResult
    spans: List[AlignedSpan] = Field(default_factory=list)
    legend: List[SourceLegendEntry] = Field(default_factory=list)


# ---- Uploads ----

class ExtractedDocument(BaseModel):
    filename: str
    text: str
    wordCount: int
