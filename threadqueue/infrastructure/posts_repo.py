# threadqueue/infrastructure/posts_repo.py
from typing import Optional, List, Union
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from threadqueue.models.post import Post, Schedule, utcnow
from threadqueue.schemas.post_schema import PostCreate, PostUpdate
import uuid
import structlog

logger = structlog.get_logger(__name__)


class PostNotFoundError(Exception):
    def __init__(self, post_id):
        super().__init__(f"post {post_id} not found")
        self.post_id = str(post_id)


class PostStateError(Exception):
    pass


def _as_uuid(post_id: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        return None


class PostsRepository:
    """
    SQL-backed post record store.
    Methods are async and expect an AsyncSession injected from the outside.
    Every write commits, so a create/update is durable before the caller moves on.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, spec: PostCreate) -> Post:
        post = Post(
            account_ref=spec.account_ref,
            raw_events=[e.model_dump() for e in spec.raw_events],
            is_draft=spec.is_draft,
            quote_ref=spec.quote_ref,
        )
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        logger.info("post_created", post_id=str(post.id), account_ref=post.account_ref, is_draft=post.is_draft, events=len(post.raw_events))
        return post

    async def get_by_id(self, post_id: Union[str, uuid.UUID]) -> Optional[Post]:
        pid = _as_uuid(post_id)
        if pid is None:
            return None
        q = select(Post).where(Post.id == pid)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def get(self, post_id: Union[str, uuid.UUID]) -> Post:
        post = await self.get_by_id(post_id)
        if not post:
            raise PostNotFoundError(post_id)
        return post

    async def update(self, post_id: Union[str, uuid.UUID], spec: PostUpdate) -> Post:
        """
        Replace raw_events and/or is_draft wholesale. Fields left unset on
        ``spec`` are not touched; account_ref and quote_ref never change.
        Moving a scheduled post back to draft drops its pending (or failed) schedule; a post
        the publisher has already picked up cannot go back to draft.
        """
        post = await self.get(post_id)
        if spec.is_draft and not post.is_draft:
            await self._unschedule(post)
        if spec.raw_events is not None:
            post.raw_events = [e.model_dump() for e in spec.raw_events]
        if spec.is_draft is not None:
            post.is_draft = spec.is_draft
        post.updated_at = utcnow()
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        logger.info("post_updated", post_id=str(post.id), is_draft=post.is_draft, events=len(post.raw_events))
        return post

    async def list(self, account_ref: str) -> List[Post]:
        q = select(Post).where(Post.account_ref == account_ref).order_by(Post.created_at, Post.id)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def _unschedule(self, post: Post) -> None:
        q = select(Schedule).where(Schedule.post_id == post.id)
        res = await self.session.execute(q)
        sched = res.scalar_one_or_none()
        if not sched:
            return
        if sched.status not in ("pending", "failed"):
            raise PostStateError(f"post {post.id} is already {sched.status} and cannot return to draft")
        # deleted in the same commit as the draft flag
        await self.session.delete(sched)
        logger.info("post_unscheduled", post_id=str(post.id), schedule_id=str(sched.id))
