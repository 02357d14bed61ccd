"""
Post Management API

Provides create, read, update and delete endpoints for the posts of the
site resolved from the request hostname.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from content_store.api.deps import EventLogDep, PostServiceDep, SiteDep, require_admin_auth
from content_store.common.errors import BackendError, BackendUnavailable
from content_store.domain.post import PostCreate, PostModel, PostSummary

router = APIRouter(
    prefix="/admin/posts",
    tags=["Admin - Posts"],
    dependencies=[Depends(require_admin_auth)],
)

_BACKEND_ERRORS = (BackendUnavailable, BackendError)


class PostListResponse(BaseModel):
    """Post List Response"""
    ok: bool = True
    site: str
    posts: list[PostSummary]


class PostResponse(BaseModel):
    """Post Detail Response"""
    ok: bool = True
    site: str
    post: PostModel


class PostActionResponse(BaseModel):
    """Save/Delete Response"""
    ok: bool = True
    site: str
    slug: str
    message: str


@router.get("", response_model=PostListResponse)
async def list_posts(site: SiteDep, service: PostServiceDep, event_log: EventLogDep):
    """List posts of the current site"""
    try:
        posts = await service.list_posts(site)
    except _BACKEND_ERRORS as e:
        await event_log.log("admin_list_error", {"message": e.message})
        raise
    return PostListResponse(site=site, posts=posts)


@router.get("/{slug}", response_model=PostResponse)
async def get_post(slug: str, site: SiteDep, service: PostServiceDep, event_log: EventLogDep):
    """Get a post"""
    try:
        post = await service.get_post(site, slug)
    except _BACKEND_ERRORS as e:
        await event_log.log("admin_get_error", {"message": e.message, "slug": slug})
        raise
    return PostResponse(site=site, post=post)


@router.post("", response_model=PostActionResponse)
async def save_post(
    data: PostCreate, site: SiteDep, service: PostServiceDep, event_log: EventLogDep
):
    """Create or update a post"""
    try:
        post = await service.save_post(site, data)
    except _BACKEND_ERRORS as e:
        await event_log.log("admin_save_error", {"message": e.message})
        raise
    return PostActionResponse(site=site, slug=post.slug, message="Post saved")


@router.delete("/{slug}", response_model=PostActionResponse)
async def delete_post(
    slug: str, site: SiteDep, service: PostServiceDep, event_log: EventLogDep
):
    """Delete a post"""
    try:
        await service.delete_post(site, slug)
    except _BACKEND_ERRORS as e:
        await event_log.log("admin_delete_error", {"message": e.message, "slug": slug})
        raise
    return PostActionResponse(site=site, slug=slug.lower(), message="Post deleted")
