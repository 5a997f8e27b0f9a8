# threadqueue/infrastructure/remote_store.py
from typing import List
from threadqueue.infrastructure.api_client import ApiClient
from threadqueue.schemas.post_schema import PostCreate, PostRead, PostUpdate


class RemotePostStore:
    """Post record store backed by a remote posts API."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def create(self, spec: PostCreate) -> PostRead:
        body = await self.client.post("/posts/", json=spec.model_dump(mode="json"))
        return PostRead.model_validate(body["post"])

    async def update(self, post_id: str, spec: PostUpdate) -> PostRead:
        body = await self.client.put(f"/posts/{post_id}", json=spec.model_dump(mode="json", exclude_none=True))
        return PostRead.model_validate(body["post"])

    async def get(self, post_id: str) -> PostRead:
        body = await self.client.get(f"/posts/{post_id}")
        return PostRead.model_validate(body["post"])

    async def list(self, account_ref: str) -> List[PostRead]:
        body = await self.client.get("/posts/", params={"account_ref": account_ref})
        return [PostRead.model_validate(p) for p in body.get("posts", [])]


class RemoteScheduler:
    def __init__(self, client: ApiClient):
        self.client = client

    async def schedule(self, post_id: str) -> None:
        await self.client.post(f"/posts/{post_id}/schedule", json={})
