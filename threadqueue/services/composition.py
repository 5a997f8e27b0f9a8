# threadqueue/services/composition.py
"""
Composition orchestrator: turns a composed thread into a persisted post and,
for scheduling requests, hands the persisted post to the scheduling trigger.

The orchestrator holds no session state. Every operation takes its inputs
explicitly and returns a tagged result (ComposeOk / ComposeErr); the error
kind tells the caller whether to fix input, retry the write, or retry only
the schedule step via ``retry_schedule``.

Persist and schedule are two separate remote calls and are not atomic. When
the schedule call fails the post stays persisted as a non-draft and the
ScheduleError carries its id.
"""
from typing import Optional, Sequence, Tuple, Union
import structlog

from threadqueue.composer.segment import Segment
from threadqueue.composer.thread_state import ThreadComposerState, derive_submission
from threadqueue.schemas.post_schema import ComposeErr, ComposeOk, PostCreate, PostUpdate, RawEvent
from threadqueue.services.contracts import PostStore, Scheduler
from threadqueue.services.errors import CompositionError, PersistError, ScheduleError, ValidationError

logger = structlog.get_logger(__name__)

ComposeOutcome = Union[ComposeOk, ComposeErr]


class CompositionOrchestrator:
    def __init__(self, store: PostStore, scheduler: Scheduler):
        self.store = store
        self.scheduler = scheduler

    async def save_draft(
        self,
        edit_ref: Optional[str],
        account_ref: Optional[str],
        segments: Sequence[Segment],
        quote_ref: Optional[str] = None,
    ) -> ComposeOutcome:
        try:
            raw_events = self._validated(edit_ref, account_ref, segments)
            if edit_ref:
                await self._update(edit_ref, PostUpdate(raw_events=list(raw_events), is_draft=True), quote_ref)
                logger.info("draft_updated", post_id=edit_ref, events=len(raw_events))
                return ComposeOk(post_id=edit_ref, message="draft updated")

            post_id = await self._create(
                PostCreate(account_ref=account_ref, raw_events=list(raw_events), is_draft=True, quote_ref=quote_ref)
            )
            logger.info("draft_saved", post_id=post_id, account_ref=account_ref, events=len(raw_events))
            return ComposeOk(post_id=post_id, message="draft saved")
        except CompositionError as exc:
            return self._failed("save_draft", exc)

    async def schedule_thread(
        self,
        edit_ref: Optional[str],
        account_ref: Optional[str],
        segments: Sequence[Segment],
        quote_ref: Optional[str] = None,
    ) -> ComposeOutcome:
        try:
            raw_events = self._validated(edit_ref, account_ref, segments)
            if edit_ref:
                await self._update(edit_ref, PostUpdate(raw_events=list(raw_events), is_draft=False), quote_ref)
                post_id = edit_ref
            else:
                post_id = await self._create(
                    PostCreate(account_ref=account_ref, raw_events=list(raw_events), quote_ref=quote_ref)
                )
            await self._schedule(post_id)
            logger.info("thread_scheduled", post_id=post_id, events=len(raw_events))
            return ComposeOk(post_id=post_id, message="thread scheduled")
        except CompositionError as exc:
            return self._failed("schedule_thread", exc)

    async def retry_schedule(self, post_id: str) -> ComposeOutcome:
        """Re-run only the schedule step for a post that is already persisted."""
        try:
            await self._schedule(post_id)
            logger.info("thread_schedule_retried", post_id=post_id)
            return ComposeOk(post_id=post_id, message="thread scheduled")
        except CompositionError as exc:
            return self._failed("retry_schedule", exc)

    async def load_thread(self, post_id: str) -> ThreadComposerState:
        try:
            post = await self.store.get(post_id)
        except Exception as exc:
            raise PersistError(str(exc), post_id=post_id) from exc
        return ThreadComposerState.from_raw_events(RawEvent.model_validate(e) for e in post.raw_events)

    # --- steps ---
    @staticmethod
    def _validated(edit_ref, account_ref, segments) -> Tuple[RawEvent, ...]:
        raw_events = derive_submission(segments)
        if not raw_events:
            raise ValidationError("empty thread")
        if not edit_ref and not (account_ref or "").strip():
            raise ValidationError("no account")
        return raw_events

    async def _create(self, spec: PostCreate) -> str:
        try:
            post = await self.store.create(spec)
        except Exception as exc:
            raise PersistError(str(exc)) from exc
        return str(post.id)

    async def _update(self, post_id: str, spec: PostUpdate, quote_ref: Optional[str]) -> None:
        if quote_ref:
            logger.warning("quote_ref_ignored_on_update", post_id=post_id, quote_ref=quote_ref)
        try:
            await self.store.update(post_id, spec)
        except Exception as exc:
            raise PersistError(str(exc), post_id=post_id) from exc

    async def _schedule(self, post_id: str) -> None:
        try:
            await self.scheduler.schedule(post_id)
        except Exception as exc:
            raise ScheduleError(str(exc), post_id=post_id) from exc

    @staticmethod
    def _failed(operation: str, exc: CompositionError) -> ComposeErr:
        if isinstance(exc, ValidationError):
            logger.info("compose_rejected", operation=operation, reason=exc.message)
        else:
            event = "thread_schedule_failed" if isinstance(exc, ScheduleError) else "thread_persist_failed"
            logger.warning(
                event, operation=operation, kind=exc.kind.value, post_id=exc.post_id,
                error=exc.message, exc_info=exc,
            )
        return exc.to_result()
