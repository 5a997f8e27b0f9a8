# threadqueue/infrastructure/queues_repo.py
from typing import Optional, List
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from threadqueue.models.queue import Queue


class QueuesRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, queue: Queue) -> Queue:
        self.session.add(queue)
        await self.session.commit()
        await self.session.refresh(queue)
        return queue

    async def get_by_account_and_name(self, account_ref: str, name: str) -> Optional[Queue]:
        q = select(Queue).where(Queue.account_ref == account_ref, Queue.name == name)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def list_by_account(self, account_ref: str) -> List[Queue]:
        q = select(Queue).where(Queue.account_ref == account_ref).order_by(Queue.created_at, Queue.id)
        res = await self.session.execute(q)
        return list(res.scalars().all())
