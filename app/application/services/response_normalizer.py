"""Turn free-text model output into result dictionaries.

Gemini is asked for bare JSON but frequently wraps it in prose or markdown
fences, and sometimes quotes numbers. The helpers here take the greedy
``{ ... }`` span of the text, parse it, and coerce the numeric fields the
result schemas expect as integers. Anything unusable raises
:class:`ResponseParseError` so the caller can fall back.
"""

import json
import math
import re
from typing import Any, Dict, Iterable

_JSON_SPAN = re.compile(r"\{[\s\S]*\}")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MAX_FEEDBACK_ITEMS = 3


class ResponseParseError(ValueError):
    pass


def _reject_constant(name: str):
    raise ResponseParseError(f"Non-finite number in model response: {name}")


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the span from the first ``{`` to the last ``}`` of ``text``."""
    if not text:
        raise ResponseParseError("Empty model response")
    match = _JSON_SPAN.search(text)
    if not match:
        raise ResponseParseError("No JSON object found in model response")
    try:
        data = json.loads(match.group(0), parse_constant=_reject_constant)
    except ResponseParseError:
        raise
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, over-long integer literals and deep nesting
        raise ResponseParseError(f"Malformed JSON in model response: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("Model response JSON is not an object")
    return data


def parse_leading_int(value: str) -> int:
    """Integer prefix of ``value``, so ``"7/10"`` gives 7."""
    match = _LEADING_INT.match(value)
    if not match:
        raise ResponseParseError(f"Not a number: {value!r}")
    try:
        return int(match.group(1))
    except ValueError as e:
        raise ResponseParseError(f"Number too long: {e}") from e


def coerce_int_fields(data: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    for name in fields:
        value = data.get(name)
        if isinstance(value, str):
            data[name] = parse_leading_int(value)
        elif isinstance(value, float):
            # 1e999 parses to inf
            if not math.isfinite(value):
                raise ResponseParseError(f"Non-finite value for {name}")
            data[name] = int(round(value))
    return data


def normalize_startup_analysis(text: str) -> Dict[str, Any]:
    data = coerce_int_fields(extract_json_object(text), ["marketFit"])
    emoji = data.get("emoji")
    if isinstance(emoji, str) and emoji.strip():
        # "⚠️" carries a variation selector; keep the base character
        data["emoji"] = emoji.strip()[0]
    return data


def normalize_design_roast(text: str) -> Dict[str, Any]:
    data = coerce_int_fields(extract_json_object(text), ["score"])
    feedback = data.get("feedback")
    if isinstance(feedback, list):
        data["feedback"] = feedback[:MAX_FEEDBACK_ITEMS]
    return data


def normalize_persona_reply(text: str) -> Dict[str, Any]:
    reply = (text or "").strip()
    if not reply:
        raise ResponseParseError("Empty persona reply")
    return {"response": reply}
