"""
Post Service Module

Provides business logic for per-site posts stored in the KV store under
``post:<site>:<slug>``.
"""

import logging

from pydantic import ValidationError as PydanticValidationError

from content_store.common.errors import NotFoundError, ValidationError
from content_store.common.sites import post_key, post_prefix
from content_store.common.slugify import slugify
from content_store.common.time import utc_now_iso
from content_store.domain.post import PostCreate, PostModel, PostSummary
from content_store.repositories.event_log_repo import EventLogRepository
from content_store.repositories.kv_store_repo import KVStoreRepository
from content_store.services.formatter import ContentFormatter, fallback_html

logger = logging.getLogger(__name__)


class PostService:
    """
    Post Service

    Handles business logic related to posts.
    """

    def __init__(
        self,
        kv: KVStoreRepository,
        event_log: EventLogRepository,
        formatter: ContentFormatter,
    ):
        """
        Initialize Service

        Args:
            kv: Key-Value Store Repository
            event_log: Audit sink
            formatter: HTML fragment generator
        """
        self.kv = kv
        self.event_log = event_log
        self.formatter = formatter

    async def _load(self, key: str) -> PostModel | None:
        raw = await self.kv.get(key)
        if raw is None:
            return None
        try:
            return PostModel.model_validate(raw)
        except PydanticValidationError:
            logger.warning(f"Skipping malformed post record {key!r}")
            return None

    async def list_posts(self, site: str) -> list[PostSummary]:
        """
        List posts of a site

        Returns:
            list[PostSummary]: Summaries in descending key order
        """
        keys = await self.kv.list_keys_with_prefix(post_prefix(site))
        posts = []
        for key in keys:
            post = await self._load(key)
            if post is not None:
                posts.append(PostSummary.model_validate(post.model_dump()))
        return posts

    async def get_post(self, site: str, slug: str) -> PostModel:
        """
        Get a post

        Raises:
            NotFoundError: Post not found
        """
        post = await self._load(post_key(site, slug.lower()))
        if post is None:
            raise NotFoundError(message="Post not found", code="post_not_found")
        return post

    async def save_post(self, site: str, data: PostCreate) -> PostModel:
        """
        Create or update a post

        The original ``created_at`` is preserved on update. A formatter
        failure degrades to the fallback rendering instead of failing the save.
        """
        slug = slugify(data.slug or data.title)
        if not slug:
            raise ValidationError(message="Slug cannot be empty", code="invalid_slug")
        key = post_key(site, slug)

        try:
            fragment = await self.formatter.generate(site, data.title, data.content, data.images)
        except Exception as e:
            logger.warning(f"Formatter raised, using fallback: {e}")
            fragment = fallback_html(data.title, data.content, data.images)

        now = utc_now_iso()
        existing = await self._load(key)
        post = PostModel(
            site=site,
            slug=slug,
            title=data.title,
            content=data.content,
            images=data.images,
            html=fragment,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        await self.kv.put(key, post.model_dump())
        await self.event_log.log(
            "admin_post_saved", {"site": site, "slug": slug, "title": data.title}
        )
        return post

    async def delete_post(self, site: str, slug: str) -> None:
        """Delete a post; deleting a missing post succeeds"""
        slug = slug.lower()
        await self.kv.delete(post_key(site, slug))
        await self.event_log.log("admin_post_deleted", {"site": site, "slug": slug})
