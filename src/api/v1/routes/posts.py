"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_comment_service, get_post_service
from api.v1.schemas.comment import CommentCreate, CommentDetailResponse, CommentResponse
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.post import (
    PostCountersDetailResponse,
    PostCountersResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
    PostWithCommentsDetailResponse,
    PostWithCommentsResponse,
)
from api.v1.schemas.profile import AuthorSummary
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.comment import Comment
from domain.entities.post import Post, PostDetail
from domain.entities.profile import AuthorSummary as AuthorSummaryEntity
from domain.services.comment_service import CommentService
from domain.services.post_service import PostService

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    responses={429: {"model": ErrorResponse, "description": "Rate limit exceeded"}},
)


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
    responses={
        200: {"description": "All posts, newest first"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    service: PostService = Depends(get_post_service),
    q: str | None = Query(None, description="Search title, content, tags and author name"),
    tag: str | None = Query(None, description="Only posts carrying this tag"),
) -> PostListResponse:
    """
    Get every post, newest first. No authentication required.

    `q` and `tag` narrow the list; without them the full sequence is returned.
    """
    posts = await service.list_posts(query=q, tag=tag)
    return PostListResponse(
        data=[_build_post_response(p) for p in posts],
        meta={"total": len(posts)},
    )


@router.get(
    "/user/{user_id}",
    response_model=PostListResponse,
    summary="List a user's own posts",
    responses={
        200: {"description": "The caller's posts, newest first"},
        400: {"description": "Malformed user ID"},
        401: {"description": "Not authenticated"},
        403: {"description": "Listing another user's posts"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_user_posts(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get the posts written by `user_id`. Only that user may call this."""
    posts = await service.list_posts_by_author(user_id, requester_id=user.id)
    return PostListResponse(
        data=[_build_post_response(p) for p in posts],
        meta={"total": len(posts)},
    )


@router.get(
    "/{post_id}",
    response_model=PostWithCommentsDetailResponse,
    summary="Get a post",
    responses={
        200: {"description": "Post with author and comments"},
        400: {"description": "Malformed post ID"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    service: PostService = Depends(get_post_service),
) -> PostWithCommentsDetailResponse:
    """Get a post with its comments. Each retrieval counts as one view."""
    detail = await service.get_post(post_id)
    return PostWithCommentsDetailResponse(data=_build_post_with_comments(detail))


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created successfully"},
        400: {"description": "Missing title or content"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post authored by the authenticated user."""
    post = await service.create_post(
        author_id=user.id,
        title=body.title,
        content=body.content,
        tags=body.tags,
        image=body.image,
    )
    return PostDetailResponse(data=_build_post_response(post))


@router.put(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Update a post",
    responses={
        200: {"description": "Post updated successfully"},
        400: {"description": "Validation error"},
        403: {"description": "Not the post author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_post(
    request: Request,
    post_id: UUID,
    body: PostUpdate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """
    Update a post you wrote. Only the fields present in the body change.

    Send `"image": null` to remove the image; `"tags": null` clears the tags.
    """
    fields = body.model_fields_set
    post = await service.update_post(
        post_id=post_id,
        user_id=user.id,
        title=body.title,
        content=body.content,
        tags=body.tags if "tags" in fields else ...,
        image=body.image if "image" in fields else ...,
    )
    return PostDetailResponse(data=_build_post_response(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        200: {"description": "Post and its comments deleted"},
        403: {"description": "Not the post author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post you wrote, together with its comments."""
    await service.delete_post(post_id, user.id)
    return MessageResponse(message="Post deleted successfully")


@router.post(
    "/{post_id}/like",
    response_model=PostCountersDetailResponse,
    summary="Like a post",
    responses={
        200: {"description": "Updated counters"},
        400: {"description": "Malformed post ID"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostCountersDetailResponse:
    """Add a like. Repeated likes by the same user are each counted."""
    counters = await service.like_post(post_id, user.id)
    return PostCountersDetailResponse(
        data=PostCountersResponse(id=counters.id, likes=counters.likes, views=counters.views)
    )


@router.post(
    "/{post_id}/comment",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        201: {"description": "Comment created"},
        400: {"description": "Empty content or malformed post ID"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> CommentDetailResponse:
    """Add a comment to a post."""
    comment = await service.add_comment(post_id, user.id, body.content)
    return CommentDetailResponse(data=_build_comment_response(comment))


def _build_post_response(post: Post) -> PostResponse:
    """Convert domain entity to response schema."""
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        author_id=post.author_id,
        author=_build_author(post.author),
        tags=list(post.tags),
        image=post.image,
        likes=post.likes,
        views=post.views,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _build_post_with_comments(detail: PostDetail) -> PostWithCommentsResponse:
    base = _build_post_response(detail.post)
    return PostWithCommentsResponse(
        **base.model_dump(),
        comments=[_build_comment_response(c) for c in detail.comments],
    )


def _build_comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        author=_build_author(comment.author),
        content=comment.content,
        created_at=comment.created_at,
    )


def _build_author(author: AuthorSummaryEntity | None) -> AuthorSummary | None:
    if author is None:
        return None
    return AuthorSummary.model_validate(author)
