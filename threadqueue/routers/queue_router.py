# threadqueue/routers/queue_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog
from threadqueue.dependencies.db import get_session_dep
from threadqueue.schemas.queue_schema import QueueCreate, QueueRead, QueueListEnvelope
from threadqueue.services.queue_service import QueueService

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/queues", tags=["queues"])


@router.post("/", response_model=QueueRead, status_code=status.HTTP_201_CREATED)
async def create_queue(payload: QueueCreate, session: AsyncSession = Depends(get_session_dep)):
    svc = QueueService(session)
    try:
        return await svc.create_queue(payload.account_ref, payload.name, payload.description)
    except ValueError as exc:
        logger.info("queue_create_rejected", error=str(exc), account_ref=payload.account_ref)
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/", response_model=QueueListEnvelope)
async def list_queues(account_ref: str, session: AsyncSession = Depends(get_session_dep)):
    svc = QueueService(session)
    return {"queues": await svc.list_queues(account_ref)}
