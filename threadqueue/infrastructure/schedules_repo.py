# threadqueue/infrastructure/schedules_repo.py
from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from threadqueue.models.post import Schedule
import uuid


class SchedulesRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_post(self, post_id: uuid.UUID) -> Optional[Schedule]:
        q = select(Schedule).where(Schedule.post_id == post_id)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def create(self, sched: Schedule) -> Schedule:
        self.session.add(sched)
        await self.session.commit()
        await self.session.refresh(sched)
        return sched
