"""Compose Stage - Structured content from a request and a style profile.

Asks an OpenAI-compatible chat-completions backend for a JSON outline when
one is configured. Any backend problem (not configured, HTTP error, timeout,
unusable reply) falls back to the heuristic parser, so compose() always
returns valid content.
"""

import json
import re
from typing import Any, Optional

import httpx

from docstyle.config import Settings, settings as default_settings
from docstyle.logger import get_logger
from docstyle.models import ParsedContent, Section, StyleProfile

from .stage_parse import StructuralContentParser

logger = get_logger(__name__)

JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")

MAX_SOURCE_CHARS = 8000

SYSTEM_PROMPT = """You are an expert at creating professional project estimates.
Analyze the client request and reference documents to create a structured estimate.
Return ONLY valid JSON with this exact structure:
{
  "title": "Project Title",
  "intro": "Brief introduction paragraph",
  "sections": [
    {"heading": "Section Name", "bullets": ["Item 1", "Item 2"]}
  ]
}
Ensure all sections have meaningful headings and 2-6 bullet points each."""

USER_PROMPT_TEMPLATE = """Create a professional estimate based on this client request:

{prompt}

Style profile from reference documents:
{style_hint}

Reference text from similar documents (for style and tone):
{source_text}

Generate a comprehensive estimate that matches the style and structure of the reference documents."""


def style_hint(profile: StyleProfile) -> str:
    """Compact JSON summary of the profile for the backend prompt."""
    return json.dumps(
        {
            "primaryFont": profile.primary_font,
            "secondaryFont": profile.secondary_font,
            "sizes": profile.sizes.model_dump(),
            "punctuation": profile.punctuation.model_dump(),
            "boldRatio": profile.emphasis.bold_ratio,
            "colors": list(profile.colors[:3]),
        },
        indent=2,
    )


def parse_backend_reply(raw: Optional[str]) -> Optional[ParsedContent]:
    """Validate a backend reply into ParsedContent.

    Returns None when the reply is missing, not JSON, not an object, or
    has no section with a heading and at least one non-blank bullet.
    """
    if not raw:
        return None

    fenced = JSON_FENCE_RE.search(raw)
    json_text = fenced.group(1) if fenced else raw

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse LLM JSON response: %s", e)
        return None

    if not isinstance(data, dict):
        return None
    raw_sections = data.get("sections")
    if not isinstance(raw_sections, list) or not raw_sections:
        return None

    sections = []
    for item in raw_sections:
        if not isinstance(item, dict) or not item.get("heading"):
            continue
        bullets = item.get("bullets")
        if not isinstance(bullets, list):
            continue
        cleaned = tuple(str(b).strip() for b in bullets if b is not None and str(b).strip())
        if not cleaned:
            continue
        sections.append(Section(heading=str(item["heading"]).strip() or "Section", bullets=cleaned))

    if not sections:
        return None

    return ParsedContent(
        title=str(data.get("title") or "Project Estimate").strip(),
        intro=str(data.get("intro") or "").strip(),
        sections=tuple(sections),
    )


class ContentComposer:
    """Produces ParsedContent through the backend or the fallback parser."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        parser: Optional[StructuralContentParser] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the composer.

        Args:
            config: Backend settings. Defaults to the global settings.
            parser: Fallback parser.
            client: Preconfigured HTTP client, mainly for tests.
        """
        self.config = config or default_settings
        self.parser = parser or StructuralContentParser()
        self.client = client

    @property
    def llm_configured(self) -> bool:
        return self.config.llm_configured

    def build_request(self, prompt: str, profile: StyleProfile, source_text: str) -> dict[str, Any]:
        return {
            "model": self.config.llm_model,
            "temperature": 0.3,
            "max_tokens": 2000,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": USER_PROMPT_TEMPLATE.format(
                        prompt=prompt,
                        style_hint=style_hint(profile),
                        source_text=(source_text or "")[:MAX_SOURCE_CHARS],
                    ),
                },
            ],
        }

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self.config.llm_base_url.rstrip('/')}/chat/completions"
        headers = {"Content-Type": "application/json"}
        if self.config.llm_api_key:
            headers["Authorization"] = f"Bearer {self.config.llm_api_key}"

        if self.client is not None:
            return self.client.post(url, json=payload, headers=headers, timeout=self.config.llm_timeout)
        with httpx.Client(timeout=self.config.llm_timeout) as client:
            return client.post(url, json=payload, headers=headers)

    def request_backend(
        self,
        prompt: str,
        profile: StyleProfile,
        source_text: str = "",
    ) -> Optional[ParsedContent]:
        """Ask the backend for content. Returns None on any failure."""
        if not self.llm_configured:
            return None

        try:
            response = self._post(self.build_request(prompt, profile, source_text))
        except httpx.TimeoutException:
            logger.warning("LLM request timed out")
            return None
        except httpx.HTTPError as e:
            logger.warning("LLM request failed: %s", e)
            return None

        if not response.is_success:
            logger.warning("LLM API error (%d): %s", response.status_code, response.text[:500])
            return None

        try:
            body = response.json()
            raw = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("Unexpected LLM response shape: %s", e)
            return None

        return parse_backend_reply(raw)

    def compose(
        self,
        prompt: str,
        profile: StyleProfile,
        source_text: Optional[str] = None,
    ) -> ParsedContent:
        """Compose content for a request, falling back to the parser.

        Args:
            prompt: Free-text client request.
            profile: Style profile of the reference documents.
            source_text: Reference text. Defaults to the profile's sample text.
        """
        if source_text is None:
            source_text = profile.sample_text

        content = self.request_backend(prompt, profile, source_text)
        if content is not None:
            return content

        if self.llm_configured:
            logger.warning("Falling back to heuristic outline parser")
        return self.parser.parse(prompt)
