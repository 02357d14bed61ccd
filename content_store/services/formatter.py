"""
Content Formatter Module

Turns post source text into a semantic HTML fragment. When an OpenAI API key
is configured the fragment is generated by a chat completion; any failure
there falls back to a plain deterministic rendering. ``generate`` never
raises.
"""

import html
import logging
import re
from typing import Optional

import httpx

from content_store.config import get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You format posts into clean, semantic HTML fragments without inline styles."
)

_PARAGRAPH_BREAK = re.compile(r"\n\n+")


def build_prompt(site: str, title: str, content: str, images: list[str]) -> str:
    image_lines = "\n".join(f"- Image {i + 1}: {url}" for i, url in enumerate(images))
    return f"""You are generating a blog post HTML fragment for the site "{site}".
Constraints:
- Output ONLY a semantic HTML fragment (no <html>, <head>, or <body> tags)
- Do NOT include <style> or inline styles; use semantic tags
- The HTML must inherit styling from the parent site CSS
- Use accessible markup (alt text for images, headings, lists, figure/figcaption)

Post metadata:
- Title: {title}
- Site context: {site}
- Images:
{image_lines or '- None'}

Source content:
{content}

Return only the HTML fragment."""


def fallback_html(title: str, content: str, images: list[str]) -> str:
    """Render a post without any external service"""
    figures = "\n".join(
        f'<figure><img src="{html.escape(url)}" alt="{html.escape(title)} image"/>'
        f"<figcaption></figcaption></figure>"
        for url in images
    )
    body = _PARAGRAPH_BREAK.sub("</p><p>", html.escape(content)).replace("\n", "<br/>")
    return (
        "<article>\n"
        f"  <header>\n    <h1>{html.escape(title)}</h1>\n  </header>\n"
        f"  {figures}\n"
        f"  <section>\n    <p>{body}</p>\n  </section>\n"
        "</article>"
    )


class ContentFormatter:
    """
    Content Formatter

    Wraps an httpx.AsyncClient for the chat completion call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.base_url = base_url or settings.OPENAI_BASE_URL
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self._transport = transport

    async def _complete(self, prompt: str) -> str:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.4,
        }
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            response = await client.post(
                "/chat/completions",
                json=body,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
            data = response.json()

        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    async def generate(self, site: str, title: str, content: str, images: list[str]) -> str:
        """Return an HTML fragment for the post; falls back instead of raising"""
        if self.api_key:
            try:
                fragment = await self._complete(build_prompt(site, title, content, images))
                if fragment.strip():
                    return fragment.strip()
                logger.warning("Formatter returned an empty fragment, using fallback")
            except Exception as e:
                logger.warning(f"Formatter request failed, using fallback: {e}")
        return fallback_html(title, content, images)
