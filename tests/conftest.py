"""Shared fixtures: recording fakes for the store/scheduler contracts and an in-memory database."""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from threadqueue.composer.segment import Segment
from threadqueue.infrastructure import database  # noqa: F401  registers tables


# ---------------------------------------------------------------------------
# Fakes for the orchestrator's collaborators
# ---------------------------------------------------------------------------
class FakePostStore:
    """Records every call; ids are issued as p1, p2, ..."""

    def __init__(self, fail_with=None):
        self.calls = []
        self.posts = {}
        self.fail_with = fail_with

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, spec):
        self.calls.append(("create", spec))
        self._maybe_fail()
        post_id = f"p{len(self.posts) + 1}"
        post = SimpleNamespace(
            id=post_id,
            account_ref=spec.account_ref,
            raw_events=list(spec.raw_events),
            is_draft=spec.is_draft,
            quote_ref=spec.quote_ref,
        )
        self.posts[post_id] = post
        return post

    async def update(self, post_id, spec):
        self.calls.append(("update", post_id, spec))
        self._maybe_fail()
        post = self.posts[post_id]
        if spec.raw_events is not None:
            post.raw_events = list(spec.raw_events)
        if spec.is_draft is not None:
            post.is_draft = spec.is_draft
        return post

    async def get(self, post_id):
        self.calls.append(("get", post_id))
        self._maybe_fail()
        return self.posts[post_id]

    async def list(self, account_ref):
        self.calls.append(("list", account_ref))
        return [p for p in self.posts.values() if p.account_ref == account_ref]

    def writes(self):
        return [c for c in self.calls if c[0] in ("create", "update")]


class FakeScheduler:
    """Idempotent per post id, like the real trigger."""

    def __init__(self, fail_with=None):
        self.calls = []
        self.scheduled = set()
        self.fail_with = fail_with

    async def schedule(self, post_id):
        self.calls.append(post_id)
        if self.fail_with is not None:
            raise self.fail_with
        self.scheduled.add(post_id)


@pytest.fixture
def store():
    return FakePostStore()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def failing_store():
    return FakePostStore(fail_with=RuntimeError("store unavailable"))


@pytest.fixture
def failing_scheduler():
    return FakeScheduler(fail_with=RuntimeError("scheduler unavailable"))


@pytest.fixture
def make_segments():
    def _make(*contents):
        return [Segment(id=str(i), content=c) for i, c in enumerate(contents, start=1)]

    return _make


# ---------------------------------------------------------------------------
# In-memory database
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine):
    async with AsyncSession(db_engine, expire_on_commit=False) as s:
        yield s
