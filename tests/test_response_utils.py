import pytest

from scholarguard.errors import ResponseFormatError
from scholarguard.schemas.analysis_schemas import AIDetectionResult, HumanizeResult, PlagiarismResult
from scholarguard.utils.response_utils import extract_json_object, parse_free_form, parse_structured


def test_strips_fences_and_clamps_score():
    raw = '```json\n{"score": 150, "summary": "x", "matches": []}\n```'
    result = parse_free_form(raw, PlagiarismResult)
    assert result.score == 100
    assert result.matches == []


def test_slices_object_out_of_commentary():
    raw = (
        'Here is the analysis you asked for:\n'
        '{"score": 42, "summary": "Some overlap", "matches": [{"sentence": "A", '
        '"source": "Nature", "sourceType": "Journal", "similarity": 88, "url": "https://nature.com/x"}]}\n'
        'Let me know if you need anything else.'
    )
    assert extract_json_object(raw).startswith('{"score"')
    result = parse_free_form(raw, PlagiarismResult)
    assert result.score == 42
    assert result.matches[0].source == "Nature"
    assert result.matches[0].url == "https://nature.com/x"


def test_url_is_optional_and_similarity_clamped():
    raw = '{"score": -5, "summary": "s", "matches": [{"sentence": "A", "source": "B", "sourceType": "Book", "similarity": 180}]}'
    result = parse_free_form(raw, PlagiarismResult)
    assert result.score == 0
    assert result.matches[0].similarity == 100
    assert result.matches[0].url is None


def test_match_order_and_duplicates_are_kept():
    raw = (
        '{"score": 10, "summary": "s", "matches": ['
        '{"sentence": "one", "source": "S", "sourceType": "Website", "similarity": 10},'
        '{"sentence": "two", "source": "S", "sourceType": "Website", "similarity": 20},'
        '{"sentence": "one", "source": "S", "sourceType": "Website", "similarity": 10}]}'
    )
    result = parse_free_form(raw, PlagiarismResult)
    assert [m.sentence for m in result.matches] == ["one", "two", "one"]


@pytest.mark.parametrize("raw", [
    "",
    "no json here at all",
    "} backwards {",
    '{"score": 10, "summary": "s", "matches": [',
    '{"score": 10, "summary": "s"}',
    '{"score": "high", "summary": "s", "matches": []}',
    '{"score": NaN, "summary": "s", "matches": []}',
    '{"score": 1, "summary": "s", "matches": [{"sentence": "a", "source": "b", "sourceType": "Blog", "similarity": 1}]}',
])
def test_uninterpretable_payloads_raise(raw):
    with pytest.raises(ResponseFormatError):
        parse_free_form(raw, PlagiarismResult)


def test_structured_payload_validates_every_field():
    raw = '{"score": 71, "overallAnalysis": "Uniform rhythm", "segments": [{"text": "t", "isAI": true, "reason": "r"}]}'
    result = parse_structured(raw, AIDetectionResult)
    assert result.segments[0].isAI is True
    assert result.verdict == "Likely AI-Generated"

    with pytest.raises(ResponseFormatError):
        parse_structured('{"score": 71, "segments": []}', AIDetectionResult)


def test_structured_payload_must_be_an_object():
    with pytest.raises(ResponseFormatError):
        parse_structured('["originalText"]', HumanizeResult)
    with pytest.raises(ResponseFormatError):
        parse_structured("", HumanizeResult)
