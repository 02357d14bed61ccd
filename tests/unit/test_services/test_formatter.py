"""
Test Content Formatter
"""

import json

import httpx
import pytest

from content_store.services.formatter import ContentFormatter, build_prompt, fallback_html


def test_fallback_escapes_and_splits_paragraphs():
    fragment = fallback_html("<Title>", "one\n\ntwo\nthree & more", ["x.png"])

    assert "<h1>&lt;Title&gt;</h1>" in fragment
    assert "<p>one</p><p>two<br/>three &amp; more</p>" in fragment
    assert '<img src="x.png" alt="&lt;Title&gt; image"/>' in fragment


def test_prompt_lists_images():
    prompt = build_prompt("default", "T", "C", ["a.png", "b.png"])

    assert "- Image 1: a.png" in prompt
    assert "- Image 2: b.png" in prompt
    assert build_prompt("default", "T", "C", []).count("- None") == 1


@pytest.mark.asyncio
async def test_generate_without_api_key_uses_fallback():
    formatter = ContentFormatter(api_key="")

    assert await formatter.generate("default", "T", "C", []) == fallback_html("T", "C", [])


@pytest.mark.asyncio
async def test_generate_uses_completion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"choices": [{"message": {"content": "  <article>AI</article>\n"}}]}
        )

    formatter = ContentFormatter(
        api_key="sk-test",
        base_url="https://llm.test/v1",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )

    assert await formatter.generate("default", "T", "C", []) == "<article>AI</article>"
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "test-model"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": "   "}}]}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_generate_falls_back_on_bad_response(response):
    formatter = ContentFormatter(
        api_key="sk-test",
        base_url="https://llm.test/v1",
        transport=httpx.MockTransport(lambda request: response),
    )

    assert await formatter.generate("default", "T", "C", []) == fallback_html("T", "C", [])


@pytest.mark.asyncio
async def test_generate_falls_back_on_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    formatter = ContentFormatter(
        api_key="sk-test",
        base_url="https://llm.test/v1",
        transport=httpx.MockTransport(handler),
    )

    assert await formatter.generate("default", "T", "C", []) == fallback_html("T", "C", [])
