# threadqueue/infrastructure/database.py
import os
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import SQLModel
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
import structlog

# table registration
from threadqueue.models import post as _post_models  # noqa: F401
from threadqueue.models import queue as _queue_models  # noqa: F401

logger = structlog.get_logger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./threadqueue.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

engine: AsyncEngine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO)


async def init_db(bind: AsyncEngine = engine):
    async with bind.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    logger.info("db_tables_ready", url=bind.url.render_as_string(hide_password=True))


@asynccontextmanager
async def get_session(bind: AsyncEngine = engine):
    async with AsyncSession(bind, expire_on_commit=False) as session:
        yield session
