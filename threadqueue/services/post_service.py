# threadqueue/services/post_service.py
from typing import List
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from threadqueue.models.post import Post, Schedule
from threadqueue.infrastructure.posts_repo import PostsRepository, PostStateError
from threadqueue.infrastructure.schedules_repo import SchedulesRepository
from threadqueue.schemas.post_schema import PostCreate, PostUpdate

logger = structlog.get_logger(__name__)


class PostService:
    """
    Post records plus the local scheduling trigger.
    ``schedule`` satisfies the Scheduler contract: scheduling the same post
    twice returns the existing schedule instead of creating a second one.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.posts = PostsRepository(session)
        self.schedules = SchedulesRepository(session)

    async def create_post(self, payload: PostCreate) -> Post:
        return await self.posts.create(payload)

    async def update_post(self, post_id: str, payload: PostUpdate) -> Post:
        return await self.posts.update(post_id, payload)

    async def get_post(self, post_id: str) -> Post:
        return await self.posts.get(post_id)

    async def list_posts(self, account_ref: str) -> List[Post]:
        return await self.posts.list(account_ref)

    async def schedule_post(self, post_id: str) -> Schedule:
        post = await self.posts.get(post_id)
        if post.is_draft:
            raise PostStateError(f"post {post.id} is a draft and cannot be scheduled")

        existing = await self.schedules.get_by_post(post.id)
        if existing:
            logger.info("post_already_scheduled", post_id=str(post.id), schedule_id=str(existing.id), status=existing.status)
            return existing

        sched = await self.schedules.create(Schedule(post_id=post.id))
        logger.info("post_scheduled", post_id=str(post.id), schedule_id=str(sched.id))
        return sched

    async def schedule(self, post_id: str) -> None:
        await self.schedule_post(post_id)
