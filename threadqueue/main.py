# threadqueue/main.py
import os
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from threadqueue.routers.post_router import router as post_router
from threadqueue.routers.compose_router import router as compose_router
from threadqueue.routers.queue_router import router as queue_router
from threadqueue.infrastructure.database import init_db
from threadqueue.middleware.logging import RequestIdMiddleware
import structlog


def configure_structlog():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
    )


configure_structlog()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("app_startup")
    yield
    logger.info("app_shutdown")


app = FastAPI(title="Thread Queue", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.include_router(post_router)
app.include_router(compose_router)
app.include_router(queue_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("threadqueue.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=True)
