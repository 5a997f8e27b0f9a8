# threadqueue/services/queue_service.py
from typing import List, Optional
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from threadqueue.models.queue import Queue
from threadqueue.infrastructure.queues_repo import QueuesRepository

logger = structlog.get_logger(__name__)


class QueueService:
    def __init__(self, session: AsyncSession):
        self.repo = QueuesRepository(session)

    async def create_queue(self, account_ref: str, name: str, description: Optional[str] = None) -> Queue:
        name = (name or "").strip()
        if not name:
            raise ValueError("queue name is required")
        if await self.repo.get_by_account_and_name(account_ref, name):
            logger.debug("queue_name_taken", account_ref=account_ref, name=name)
            raise ValueError(f"queue {name!r} already exists")

        description = (description or "").strip() or None
        queue = await self.repo.create(Queue(account_ref=account_ref, name=name, description=description))
        logger.info("queue_created", queue_id=str(queue.id), account_ref=account_ref, name=name)
        return queue

    async def list_queues(self, account_ref: str) -> List[Queue]:
        return await self.repo.list_by_account(account_ref)
