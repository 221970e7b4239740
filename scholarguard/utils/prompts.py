from scholarguard.schemas.analysis_schemas import HumanizeTone


def plagiarism_prompt(text: str) -> str:
    return f'''
You are an expert plagiarism detector for scientific writing.
Check whether any sentences or phrases in the text below match content
already published online. Use Google Search to verify every source.

Text to analyze:
"""{text}"""

Instructions:
1. Identify sentences that closely resemble existing published work.
2. Only report sources you found through Google Search, with their REAL URLs.
3. Reply with a single raw JSON object and nothing else. Do not use Markdown.

The JSON object must have this structure:
{{
  "score": number,          // overall plagiarism percentage, 0-100
  "summary": "string",      // short executive summary
  "matches": [
    {{
      "sentence": "string",   // the sentence from the input text
      "source": "string",     // title of the matching source
      "sourceType": "Journal" | "Book" | "Conference" | "Website",
      "similarity": number,   // 0-100
      "url": "string"         // the real URL found through search
    }}
  ]
}}
'''


def ai_detection_prompt(text: str) -> str:
    return f'''Analyze the following academic text for signs of AI generation
(low burstiness, repetitive structure, generic phrasing and similar patterns).
Break the analysis down by the sentences or segments that look suspicious.

Text:
"""{text}"""'''


def humanize_prompt(text: str, tone: HumanizeTone) -> str:
    return f'''Rewrite the following text so it reads as natural human writing
fit for a high-quality academic submission.
Target tone: {tone.value}
Keep every scientific claim accurate. Vary sentence length and structure.

Text:
"""{text}"""'''
