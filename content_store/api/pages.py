"""
Public Pages

Renders stored post fragments inside a minimal page that inherits the
site's stylesheet, and serves each site's index.html and style.css from
``SITES_DIR``.
"""

import html
import logging
from pathlib import Path

from fastapi import APIRouter, Response
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse

from content_store.api.deps import EventLogDep, PostServiceDep, SiteDep
from content_store.common.errors import BackendError, BackendUnavailable, NotFoundError
from content_store.config import get_settings
from content_store.domain.post import PostModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


def site_asset(site: str, name: str) -> Path:
    """Path of a per-site static file; ``site`` is already restricted to [a-z0-9_-]"""
    return Path(get_settings().SITES_DIR) / site / name


def render_welcome_page(site: str) -> str:
    location = html.escape(str(site_asset(site, "index.html")))
    site = html.escape(site)
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Welcome</title>
  <link rel="stylesheet" href="/site-style.css">
</head>
<body>
  <main style="max-width:700px;margin:2rem auto;padding:1rem">
    <h1>Welcome</h1>
    <p>No index.html for site <code>{site}</code>. Create one at <code>{location}</code>.</p>
  </main>
</body>
</html>"""


def render_post_page(site: str, post: PostModel) -> str:
    title = html.escape(post.title)
    body = post.html or (
        f"<article><h1>{title}</h1><div>{html.escape(post.content)}</div></article>"
    )
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{title} – {html.escape(site)}</title>
  <link rel="stylesheet" href="/site-style.css">
  <style>main{{max-width:800px;margin:2rem auto;padding:0 1rem}}</style>
</head>
<body>
  <main>
    {body}
  </main>
</body>
</html>"""


@router.get("/posts/{slug}", response_class=HTMLResponse)
@router.get("/p/{slug}", response_class=HTMLResponse)
async def show_post(slug: str, site: SiteDep, service: PostServiceDep, event_log: EventLogDep):
    try:
        post = await service.get_post(site, slug)
    except NotFoundError:
        return PlainTextResponse("Post not found", status_code=404)
    except (BackendUnavailable, BackendError) as e:
        logger.error(f"Failed to render post {slug!r}: {e.message}")
        await event_log.log("render_post_error", {"message": e.message, "slug": slug})
        return PlainTextResponse("Failed to render post", status_code=500)
    return HTMLResponse(render_post_page(site, post))


@router.get("/site-style.css")
async def site_style(site: SiteDep):
    path = site_asset(site, "style.css")
    if not path.is_file():
        return Response(content="", status_code=404, media_type="text/css")
    return FileResponse(path, media_type="text/css")


@router.get("/", response_class=HTMLResponse)
async def site_index(site: SiteDep):
    path = site_asset(site, "index.html")
    if not path.is_file():
        return HTMLResponse(render_welcome_page(site))
    return FileResponse(path, media_type="text/html")
