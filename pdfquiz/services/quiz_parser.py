import json
import logging
import re

from pydantic import ValidationError

from pdfquiz.errors import MalformedJson, NoJsonFound
from pdfquiz.schemas.pdf_quiz import Quiz

logger = logging.getLogger(__name__)

# Greedy: from the first "{" to the last "}" in the completion
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_json_from_response(content: str) -> dict:
    """
    Extract the JSON object embedded in a Gemini completion and parse it.

    The model is asked for JSON but nothing enforces it, so the completion
    may wrap the object in prose or markdown fences. Raises NoJsonFound when
    the completion has no opening brace and MalformedJson when the candidate
    span does not parse to a JSON object.
    """
    content = content or ""
    match = JSON_OBJECT_PATTERN.search(content)
    if match:
        candidate = match.group()
    elif "{" in content:
        # Opened but never closed, most likely a truncated completion
        candidate = content[content.index("{"):]
    else:
        logger.error("❌ No JSON object found in the API response")
        raise NoJsonFound()

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"❌ JSON parsing error: {e}")
        raise MalformedJson() from e

    if not isinstance(data, dict):
        logger.error(f"❌ Expected a JSON object, got {type(data).__name__}")
        raise MalformedJson()
    return data


def parse_quiz_from_response(content: str) -> Quiz:
    data = extract_json_from_response(content)
    try:
        quiz = Quiz.model_validate(data)
    except ValidationError as e:
        logger.error(f"❌ Quiz data does not match the expected shape: {e}")
        raise MalformedJson() from e

    logger.info("Successfully parsed quiz data")
    return quiz
