# threadqueue/composer/thread_state.py
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import structlog

from threadqueue.composer.segment import Segment
from threadqueue.schemas.post_schema import RawEvent

logger = structlog.get_logger(__name__)

Observer = Callable[["ThreadComposerState"], None]


def derive_submission(segments: Iterable[Segment]) -> Tuple[RawEvent, ...]:
    """
    Project segments onto the RawEvents that would be submitted.
    Content is trimmed; segments that are blank after trimming are dropped.
    Relative order of the kept segments is preserved.
    """
    events = []
    for segment in segments:
        content = segment.content.strip()
        if content:
            events.append(RawEvent(content=content))
    return tuple(events)


class ThreadComposerState:
    """
    In-memory thread being composed. Owned by a single composition session.
    Observers registered via ``subscribe`` are called with the state after
    every ``set_segments`` (and every editing helper, which goes through it).
    """

    def __init__(self, segments: Optional[Sequence[Segment]] = None):
        self._segments: Tuple[Segment, ...] = ()
        self._observers: List[Observer] = []
        self._last_issued = 0
        self.initialize(segments)

    @classmethod
    def from_raw_events(cls, raw_events: Iterable[RawEvent]) -> "ThreadComposerState":
        # identifiers are display-order only; persisted events carry none
        segments = [Segment(id=str(i), content=e.content) for i, e in enumerate(raw_events, start=1)]
        return cls(segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def initialize(self, segments: Optional[Sequence[Segment]] = None) -> None:
        if not segments:
            self._last_issued = 0
            self._segments = (Segment(id=self._issue_id(set())),)
            return
        self._segments = self._checked(segments)
        self._last_issued = len(self._segments)

    def set_segments(self, segments: Sequence[Segment]) -> None:
        self._segments = self._checked(segments)
        self._notify()

    def derive_submission(self) -> Tuple[RawEvent, ...]:
        return derive_submission(self._segments)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # --- editing helpers ---
    def add_segment(self, content: str = "") -> Segment:
        segment = Segment(id=self._issue_id({s.id for s in self._segments}), content=content)
        self.set_segments(self._segments + (segment,))
        return segment

    def update_segment(self, segment_id: str, content: str) -> None:
        segment = self._find(segment_id)
        segment.replace_content(content)
        self.set_segments(self._segments)

    def remove_segment(self, segment_id: str) -> None:
        self._find(segment_id)
        self.set_segments([s for s in self._segments if s.id != segment_id])

    # --- internals ---
    def _issue_id(self, taken: set) -> str:
        self._last_issued += 1
        while str(self._last_issued) in taken:
            self._last_issued += 1
        return str(self._last_issued)

    def _find(self, segment_id: str) -> Segment:
        for segment in self._segments:
            if segment.id == segment_id:
                return segment
        raise KeyError(f"segment {segment_id!r} not in thread")

    @staticmethod
    def _checked(segments: Sequence[Segment]) -> Tuple[Segment, ...]:
        seen = set()
        for segment in segments:
            if segment.id in seen:
                raise ValueError(f"duplicate segment id {segment.id!r}")
            seen.add(segment.id)
        return tuple(segments)

    def _notify(self) -> None:
        logger.debug("thread_changed", segments=len(self._segments), observers=len(self._observers))
        for observer in list(self._observers):
            observer(self)
