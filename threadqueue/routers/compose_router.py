# threadqueue/routers/compose_router.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from threadqueue.dependencies.compose import get_orchestrator
from threadqueue.infrastructure.posts_repo import PostNotFoundError
from threadqueue.schemas.post_schema import ComposeErr, ComposeRequest, ComposeResult, ErrorKind, ThreadRead
from threadqueue.services.composition import CompositionOrchestrator
from threadqueue.services.errors import PersistError

router = APIRouter(prefix="/compose", tags=["compose"])

ERROR_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PERSIST: 502,
    ErrorKind.SCHEDULE: 502,
}


def _respond(result):
    if isinstance(result, ComposeErr):
        return JSONResponse(status_code=ERROR_STATUS[result.kind], content=result.model_dump(mode="json"))
    return result


@router.post("/draft", response_model=ComposeResult)
async def save_draft(payload: ComposeRequest, orchestrator: CompositionOrchestrator = Depends(get_orchestrator)):
    result = await orchestrator.save_draft(payload.edit_ref, payload.account_ref, payload.segments, quote_ref=payload.quote_ref)
    return _respond(result)


@router.post("/schedule", response_model=ComposeResult)
async def schedule_thread(payload: ComposeRequest, orchestrator: CompositionOrchestrator = Depends(get_orchestrator)):
    result = await orchestrator.schedule_thread(payload.edit_ref, payload.account_ref, payload.segments, quote_ref=payload.quote_ref)
    return _respond(result)


@router.post("/{post_id}/schedule", response_model=ComposeResult)
async def retry_schedule(post_id: str, orchestrator: CompositionOrchestrator = Depends(get_orchestrator)):
    return _respond(await orchestrator.retry_schedule(post_id))


@router.get("/{post_id}", response_model=ThreadRead)
async def load_thread(post_id: str, orchestrator: CompositionOrchestrator = Depends(get_orchestrator)):
    try:
        state = await orchestrator.load_thread(post_id)
    except PersistError as exc:
        if isinstance(exc.__cause__, PostNotFoundError):
            raise HTTPException(status_code=404, detail=exc.message)
        raise HTTPException(status_code=502, detail=exc.message)
    return {"post_id": post_id, "segments": list(state.segments)}
