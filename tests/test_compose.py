"""Tests for the compose stage."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from docstyle.config import Settings
from docstyle.models import StyleProfile
from docstyle.pipeline.stage_compose import (
    ContentComposer,
    parse_backend_reply,
    style_hint,
)

PROMPT = "Need a logo redesign\nBudget is flexible"

GOOD_REPLY = {
    "title": "Logo Redesign",
    "intro": "A refreshed identity.",
    "sections": [
        {"heading": "Scope", "bullets": ["Research", "Concepts"]},
        {"heading": "Pricing", "bullets": ["Fixed fee"]},
    ],
}


@pytest.fixture
def profile():
    return StyleProfile(
        fonts=("Inter", "Lora"),
        primary_font="Inter",
        secondary_font="Lora",
        colors=("#111111", "#222222", "#333333", "#444444"),
        sample_text="reference text",
    )


@pytest.fixture
def backend_settings():
    return Settings(llm_base_url="http://llm.local/v1/", llm_model="test-model", llm_api_key="secret")


def make_response(content=None, status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.text = "error body"
    if body is None:
        body = {"choices": [{"message": {"content": content}}]}
    response.json.return_value = body
    return response


class TestStyleHint:
    """Tests for the style hint payload."""

    def test_first_three_colors(self, profile):
        """Test the style hint lists at most three colors."""
        hint = json.loads(style_hint(profile))

        assert hint["primaryFont"] == "Inter"
        assert hint["colors"] == ["#111111", "#222222", "#333333"]
        assert hint["sizes"]["body"] == 11.0


class TestParseBackendReply:
    """Tests for backend reply validation."""

    def test_valid_reply(self):
        """Test a well-formed reply is parsed."""
        content = parse_backend_reply(json.dumps(GOOD_REPLY))

        assert content.title == "Logo Redesign"
        assert len(content.sections) == 2

    def test_fenced_reply(self):
        """Test a reply wrapped in a code fence is parsed."""
        raw = f"Here you go:\n```json\n{json.dumps(GOOD_REPLY)}\n```"
        assert parse_backend_reply(raw).title == "Logo Redesign"

    @pytest.mark.parametrize(
        "raw",
        [None, "", "not json", "[1, 2]", json.dumps({"title": "x"}), json.dumps({"sections": []})],
    )
    def test_rejected(self, raw):
        """Test malformed replies are rejected."""
        assert parse_backend_reply(raw) is None

    def test_invalid_sections_dropped(self):
        """Test unusable sections and blank bullets are dropped."""
        reply = {
            "sections": [
                {"heading": "", "bullets": ["a"]},
                {"heading": "No bullets", "bullets": []},
                {"heading": "Blank bullets", "bullets": ["  ", None]},
                {"heading": " Kept ", "bullets": [" one ", 2, ""]},
            ]
        }
        content = parse_backend_reply(json.dumps(reply))

        assert len(content.sections) == 1
        assert content.sections[0].heading == "Kept"
        assert content.sections[0].bullets == ("one", "2")
        assert content.title == "Project Estimate"
        assert content.intro == ""

    def test_all_sections_invalid(self):
        """Test a reply with no usable sections is rejected."""
        reply = {"sections": [{"heading": "x", "bullets": "not a list"}]}
        assert parse_backend_reply(json.dumps(reply)) is None


class TestContentComposer:
    """Tests for ContentComposer."""

    def test_not_configured_uses_fallback(self, profile):
        """Test the parser is used when no backend is configured."""
        client = MagicMock()
        composer = ContentComposer(config=Settings(llm_base_url=None, llm_model=None), client=client)
        content = composer.compose(PROMPT, profile)

        assert not composer.llm_configured
        assert content.title == "Need a logo redesign"
        assert [s.heading for s in content.sections][0] == "Scope Overview"
        client.post.assert_not_called()

    def test_backend_success(self, profile, backend_settings):
        """Test a backend reply becomes the content."""
        client = MagicMock()
        client.post.return_value = make_response(json.dumps(GOOD_REPLY))
        composer = ContentComposer(config=backend_settings, client=client)

        content = composer.compose(PROMPT, profile)

        assert content.title == "Logo Redesign"
        args, kwargs = client.post.call_args
        assert args[0] == "http://llm.local/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        payload = kwargs["json"]
        assert payload["model"] == "test-model"
        assert payload["temperature"] == 0.3
        assert "reference text" in payload["messages"][1]["content"]

    def test_source_text_truncated(self, profile, backend_settings):
        """Test long source text is cut before sending."""
        client = MagicMock()
        client.post.return_value = make_response(json.dumps(GOOD_REPLY))
        composer = ContentComposer(config=backend_settings, client=client)

        composer.compose(PROMPT, profile, source_text="z" * 9000)

        user_message = client.post.call_args.kwargs["json"]["messages"][1]["content"]
        assert "z" * 8000 in user_message
        assert "z" * 8001 not in user_message

    def test_no_api_key_no_auth_header(self, profile):
        """Test no Authorization header is sent without a key."""
        client = MagicMock()
        client.post.return_value = make_response(json.dumps(GOOD_REPLY))
        config = Settings(llm_base_url="http://llm.local", llm_model="m", llm_api_key=None)

        ContentComposer(config=config, client=client).compose(PROMPT, profile)

        assert "Authorization" not in client.post.call_args.kwargs["headers"]

    @pytest.mark.parametrize(
        "error",
        [httpx.ReadTimeout("timed out"), httpx.ConnectError("refused")],
    )
    def test_transport_errors_fall_back(self, profile, backend_settings, error):
        """Test transport errors fall back to the parser."""
        client = MagicMock()
        client.post.side_effect = error
        content = ContentComposer(config=backend_settings, client=client).compose(PROMPT, profile)

        assert content.intro == "Need a logo redesign"

    def test_http_error_status_falls_back(self, profile, backend_settings):
        """Test an error status falls back to the parser."""
        client = MagicMock()
        client.post.return_value = make_response(status_code=500)
        content = ContentComposer(config=backend_settings, client=client).compose(PROMPT, profile)

        assert content.sections[1].heading == "Deliverables"

    def test_unexpected_body_falls_back(self, profile, backend_settings):
        """Test an unexpected body falls back to the parser."""
        client = MagicMock()
        client.post.return_value = make_response(body={"choices": []})
        content = ContentComposer(config=backend_settings, client=client).compose(PROMPT, profile)

        assert content.title == "Need a logo redesign"

    def test_invalid_reply_falls_back(self, profile, backend_settings):
        """Test an invalid reply falls back to the parser."""
        client = MagicMock()
        client.post.return_value = make_response("I cannot help with that")
        content = ContentComposer(config=backend_settings, client=client).compose(PROMPT, profile)

        assert content.title == "Need a logo redesign"

    @patch("docstyle.pipeline.stage_compose.httpx.Client")
    def test_default_client_used(self, mock_client_cls, profile, backend_settings):
        """Test a client is built from settings when none is injected."""
        mock_client = MagicMock()
        mock_client.post.return_value = make_response(json.dumps(GOOD_REPLY))
        mock_client_cls.return_value.__enter__.return_value = mock_client

        content = ContentComposer(config=backend_settings).compose(PROMPT, profile)

        assert content.title == "Logo Redesign"
        mock_client_cls.assert_called_once_with(timeout=60.0)
