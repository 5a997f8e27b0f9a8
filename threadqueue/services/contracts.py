# threadqueue/services/contracts.py
from typing import Any, List, Protocol
from threadqueue.schemas.post_schema import PostCreate, PostUpdate


class PostStore(Protocol):
    """
    Persistence contract consumed by the composition orchestrator.
    Returned posts expose ``id``, ``account_ref``, ``raw_events``, ``is_draft`` and ``quote_ref``.
    Implemented by PostsRepository (SQL) and RemotePostStore (HTTP).
    """

    async def create(self, spec: PostCreate) -> Any: ...

    async def update(self, post_id: str, spec: PostUpdate) -> Any: ...

    async def get(self, post_id: str) -> Any: ...

    async def list(self, account_ref: str) -> List[Any]: ...


class Scheduler(Protocol):
    """Marks a persisted post for publication. Must be idempotent per post id."""

    async def schedule(self, post_id: str) -> None: ...
