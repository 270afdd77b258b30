"""
Response parsing - turn raw model text into a JSON object.

Providers are asked for strict JSON but still wrap it in markdown code
fences now and then. Parsing is two-tier: the raw text first, then the
text with every fence marker removed.
"""
import json
import re
from typing import Any, Dict

from weather_api.core.exceptions import ParseFailure
from weather_api.core.logging_config import get_logger

logger = get_logger(__name__)

# Opening fences with a language tag and bare fences, anywhere in the text
_FENCE_PATTERN = re.compile(r"```json|```")


def strip_code_fences(text: str) -> str:
    """Remove all code-fence markers and surrounding whitespace."""
    return _FENCE_PATTERN.sub("", text).strip()


def normalize(raw_text: str) -> Any:
    """
    Parse model output as JSON.

    Args:
        raw_text: Text returned by the successful provider attempt

    Returns:
        The parsed JSON value

    Raises:
        ParseFailure: If neither the raw nor the fence-stripped text parses
    """
    try:
        return json.loads(raw_text)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Failed to parse AI response directly, retrying without code fences")

    clean_text = strip_code_fences(raw_text or "")
    try:
        return json.loads(clean_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response: {raw_text!r}")
        raise ParseFailure(f"AI response is not valid JSON: {e}", raw_text=raw_text) from e


def annotate(result: Dict[str, Any], model_used: str) -> Dict[str, Any]:
    """
    Attach the producing model to a parsed result.

    Returns a new dict; the input is left untouched.
    """
    annotated = dict(result)
    annotated["_meta"] = {"model_used": model_used}
    return annotated
