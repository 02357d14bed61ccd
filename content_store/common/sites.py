"""
Site Resolution

Every hostname maps to one content "site". Sites share the storage owner
namespace and are separated purely by key prefix (``post:<site>:<slug>``).
"""

import re

DEFAULT_SITE = "default"

_UNSAFE = re.compile(r"[^a-z0-9.-]")


def site_from_host(hostname: str | None) -> str:
    """Derive the site key from a request hostname."""
    if not hostname:
        return DEFAULT_SITE
    host = str(hostname).lower()
    # local development always lands on the default site
    if host.startswith("localhost") or host.startswith("127.0.0.1"):
        return DEFAULT_SITE
    return _UNSAFE.sub("", host).replace(".", "_") or DEFAULT_SITE


def post_key(site: str, slug: str) -> str:
    return f"post:{site}:{slug}"


def post_prefix(site: str) -> str:
    return f"post:{site}:"
