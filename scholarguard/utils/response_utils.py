import json
import re
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from scholarguard.errors import ResponseFormatError

M = TypeVar("M", bound=BaseModel)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(raw: str) -> str:
    return _CODE_FENCE.sub("", raw or "")


def extract_json_object(raw: str) -> str:
    """Slice from the first '{' to the last '}' once fences are removed."""
    cleaned = strip_code_fences(raw)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        raise ResponseFormatError("No JSON object found in model response.")
    return cleaned[start:end + 1]


def decode_payload(raw_json: str, model: Type[M]) -> M:
    """Parse and validate every field; no partial results."""
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Model response is not valid JSON: {e}") from e
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(
            f"Model response does not match {model.__name__}: {e.error_count()} error(s)"
        ) from e


def parse_free_form(raw: str, model: Type[M]) -> M:
    return decode_payload(extract_json_object(raw), model)


def parse_structured(raw: str, model: Type[M]) -> M:
    return decode_payload(raw or "", model)
