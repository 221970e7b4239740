"""
Thin async wrapper around the Gemini API (google-genai).
One short-lived client is opened per call and closed on every exit path.
"""
import logging
from typing import Protocol

from google import genai
from google.genai import types

logger = logging.getLogger("gemini_client")


class ModelBackend(Protocol):
    async def generate(self, prompt: str, config: types.GenerateContentConfig) -> str:
        ...


class GeminiBackend:
    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    async def generate(self, prompt: str, config: types.GenerateContentConfig) -> str:
        client = genai.Client(api_key=self.api_key)
        try:
            logger.info(f"Sending request to {self.model}...")
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        finally:
            # aclose only releases the async transport
            try:
                await client.aio.aclose()
            finally:
                client.close()

        text = response.text or ""
        logger.info(f"✅ Received {len(text)} chars from {self.model}")
        return text


# ---- Generation configs ----

AI_DETECTION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "score": types.Schema(
            type=types.Type.NUMBER,
            description="Probability that the text is AI generated (0-100).",
        ),
        "overallAnalysis": types.Schema(
            type=types.Type.STRING,
            description="Why the text reads as AI or human written.",
        ),
        "segments": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "text": types.Schema(type=types.Type.STRING, description="A sentence or phrase analyzed."),
                    "isAI": types.Schema(type=types.Type.BOOLEAN, description="True if the segment shows AI patterns."),
                    "reason": types.Schema(type=types.Type.STRING, description="Why the segment was flagged."),
                },
                required=["text", "isAI", "reason"],
            ),
        ),
    },
    required=["score", "overallAnalysis", "segments"],
)

HUMANIZE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "originalText": types.Schema(type=types.Type.STRING),
        "humanizedText": types.Schema(type=types.Type.STRING, description="The rewritten text."),
        "changesNote": types.Schema(type=types.Type.STRING, description="Summary of the stylistic changes made."),
    },
    required=["originalText", "humanizedText", "changesNote"],
)


def grounded_config(temperature: float) -> types.GenerateContentConfig:
    # Search grounding and response_schema cannot be combined.
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
        temperature=temperature,
    )


def structured_config(schema: types.Schema, temperature: float) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=schema,
        temperature=temperature,
    )
