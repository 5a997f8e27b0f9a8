# threadqueue/routers/post_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog
from threadqueue.dependencies.db import get_session_dep
from threadqueue.schemas.post_schema import PostCreate, PostUpdate, PostEnvelope, PostListEnvelope, ScheduleRead
from threadqueue.services.post_service import PostService
from threadqueue.infrastructure.posts_repo import PostNotFoundError, PostStateError

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostListEnvelope)
async def list_posts(account_ref: str, session: AsyncSession = Depends(get_session_dep)):
    svc = PostService(session)
    posts = await svc.list_posts(account_ref)
    return {"posts": posts}


@router.get("/{post_id}", response_model=PostEnvelope)
async def get_post(post_id: str, session: AsyncSession = Depends(get_session_dep)):
    svc = PostService(session)
    try:
        return {"post": await svc.get_post(post_id)}
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.post("/", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, session: AsyncSession = Depends(get_session_dep)):
    svc = PostService(session)
    return {"post": await svc.create_post(payload)}


@router.put("/{post_id}", response_model=PostEnvelope)
async def update_post(post_id: str, payload: PostUpdate, session: AsyncSession = Depends(get_session_dep)):
    svc = PostService(session)
    try:
        return {"post": await svc.update_post(post_id, payload)}
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PostStateError as exc:
        logger.info("update_rejected", post_id=post_id, reason=str(exc))
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/{post_id}/schedule", response_model=ScheduleRead)
async def schedule_post(post_id: str, session: AsyncSession = Depends(get_session_dep)):
    svc = PostService(session)
    try:
        return await svc.schedule_post(post_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PostStateError as exc:
        logger.info("schedule_rejected", post_id=post_id, reason=str(exc))
        raise HTTPException(status_code=409, detail=str(exc))
