# threadqueue/dependencies/compose.py
from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession
from threadqueue.dependencies.db import get_session_dep
from threadqueue.infrastructure.posts_repo import PostsRepository
from threadqueue.services.composition import CompositionOrchestrator
from threadqueue.services.post_service import PostService


async def get_orchestrator(session: AsyncSession = Depends(get_session_dep)) -> CompositionOrchestrator:
    return CompositionOrchestrator(store=PostsRepository(session), scheduler=PostService(session))
