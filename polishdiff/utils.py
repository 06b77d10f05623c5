"""
Utilities: word counting, safe JSON extraction, and small helpers.
"""

from __future__ import annotations

import json
import re
import time


def count_words(text: str) -> int:
    """Whitespace tokenization, as used for metadata and the structure rule."""
    return len(text.split())


def new_trace_id() -> str:
    """Millisecond timestamp, e.g. '1732701603123'."""
    return str(time.time_ns() // 1_000_000)


def preview(text: str, limit: int = 60) -> str:
    """Single-line preview for progress output."""
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def extract_first_json_object(text: str) -> str:
    """
    Extract the first JSON object from an LLM response.
    Handles markdown code fences and extra text.
    """
    t = text.strip()
    t = t.replace("```json", "```")
    t = t.replace("```", "")

    start = t.find("{")
    if start < 0:
        raise ValueError("No JSON object found.")

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(t)):
        ch = t[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                cand = t[start:i + 1].strip()
                json.loads(cand)
                return cand

    raise ValueError("Unbalanced JSON braces.")
