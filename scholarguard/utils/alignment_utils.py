"""
Aligns the excerpts returned with a plagiarism result back onto the
submitted text, so every sentence can be attributed to a source.

The model gives no character offsets, only approximate quoted excerpts, so
matching is a loose prefix-overlap test and the first match in list order
wins.
"""
import re
from typing import Dict, List, Optional, Sequence

from scholarguard.config import MIN_UNIT_LENGTH, PALETTE_SIZE, PREFIX_WINDOW
from scholarguard.schemas.analysis_schemas import PlagiarismMatch
from scholarguard.schemas.report_schemas import AlignedSpan, SourceLegendEntry

_SENTENCE_BREAK = re.compile(r"(?<=[.?!])(\s+)")


def split_units(paragraph: str) -> List[str]:
    """Split a paragraph after . ? or ! followed by whitespace.
    The whitespace run stays attached to the unit before it."""
    parts = _SENTENCE_BREAK.split(paragraph)
    units = []
    for i in range(0, len(parts), 2):
        unit = parts[i]
        if i + 1 < len(parts):
            unit += parts[i + 1]
        if unit:
            units.append(unit)
    return units


def assign_colors(matches: Sequence[PlagiarismMatch], palette_size: int = PALETTE_SIZE) -> Dict[str, int]:
    colors: Dict[str, int] = {}
    for m in matches:
        if m.source not in colors:
            colors[m.source] = len(colors) % palette_size
    return colors


def source_legend(matches: Sequence[PlagiarismMatch], palette_size: int = PALETTE_SIZE) -> List[SourceLegendEntry]:
    return [
        SourceLegendEntry(source=source, colorIndex=idx)
        for source, idx in assign_colors(matches, palette_size).items()
    ]


def _prefix_overlap(unit: str, excerpt: str, window: int = PREFIX_WINDOW) -> bool:
    # Callers pass stripped strings. A blank excerpt is rejected here because
    # its empty prefix would otherwise be a substring of every unit.
    if not excerpt:
        return False
    return unit[:window] in excerpt or excerpt[:window] in unit


def find_match(unit: str, matches: Sequence[PlagiarismMatch]) -> Optional[PlagiarismMatch]:
    """Return the first match whose excerpt overlaps ``unit``, or None.
    Units shorter than MIN_UNIT_LENGTH never match."""
    clean = unit.strip()
    if len(clean) < MIN_UNIT_LENGTH:
        return None
    for m in matches:
        if _prefix_overlap(clean, m.sentence.strip()):
            return m
    return None


def align_matches(
    text: str,
    matches: Sequence[PlagiarismMatch],
    palette_size: int = PALETTE_SIZE,
) -> List[AlignedSpan]:
    """
    Tag every sentence-like unit of ``text`` with the source it matches.

    Joining the ``text`` of the returned spans reproduces the input exactly,
    line breaks and blank lines included.
    """
    colors = assign_colors(matches, palette_size)
    spans: List[AlignedSpan] = []

    for idx, paragraph in enumerate(text.split("\n")):
        if idx > 0:
            spans.append(AlignedSpan(text="\n"))
        for unit in split_units(paragraph):
            m = find_match(unit, matches)
            if m is None:
                spans.append(AlignedSpan(text=unit))
            else:
                spans.append(AlignedSpan(text=unit, source=m.source, colorIndex=colors[m.source]))

    return spans
