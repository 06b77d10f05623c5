"""
Polished-text producer using OpenRouter (OpenAI SDK compatible) + Pydantic parsing.

The comparison engine never imports this module; the pipeline injects a
Polisher when a polished text is not supplied directly.
"""

from __future__ import annotations

from typing import Protocol

from openai import OpenAI
from pydantic import BaseModel, Field, ValidationError

from .utils import extract_first_json_object


class Polisher(Protocol):
    def polish(self, text: str, *, style: str, language: str) -> str:
        ...


class PolishResponse(BaseModel):
    """LLM output schema."""
    polished_text: str = Field(..., description="The full polished text.")


class OpenRouterPolisher:
    """
    Polishes academic text using OpenRouter via OpenAI SDK.
    Style and output language are enforced via system prompt.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        site_url: str = "",
        site_name: str = "",
        timeout_sec: float = 90.0,
        max_retries: int = 2,
        verbose: bool = True,
    ):
        self.client = OpenAI(base_url=base_url, api_key=api_key, timeout=timeout_sec, max_retries=max_retries)
        self.model = model
        self.site_url = site_url
        self.site_name = site_name
        self.verbose = verbose

    def polish(self, text: str, *, style: str = "academic", language: str = "English") -> str:
        headers = {}
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.site_name:
            headers["X-Title"] = self.site_name

        system = (
            "You are a careful editor of academic papers.\n"
            f"Polish the user's text in a {style} style, writing in {language}.\n"
            "Improve vocabulary, grammar and sentence structure; keep the meaning, "
            "paragraphs and line breaks.\n"
            "Return ONLY valid JSON matching the schema.\n"
        )

        user = (
            "TEXT:\n"
            f"{text}\n\n"
            "JSON schema:\n"
            "{\n"
            '  "polished_text": string\n'
            "}\n"
        )

        if self.verbose:
            print(f"[LLM] Polishing {len(text)} characters ({style}, {language})...")

        completion = self.client.chat.completions.create(
            extra_headers=headers or None,
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )

        content = completion.choices[0].message.content or ""

        try:
            j = extract_first_json_object(content)
            return PolishResponse.model_validate_json(j).polished_text
        except (ValueError, ValidationError) as e:
            # Fallback: treat the raw reply as the polished text
            if self.verbose:
                print(f"[WARN] Could not parse polisher JSON ({type(e).__name__}); using raw reply.")
            return content.strip()
