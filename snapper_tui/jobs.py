"""Job Dispatcher: run one external operation per background worker.

Each started job gets a one-shot channel (`JobHandle`). The dispatcher keeps
exactly one tracked (pending-op, handle) pair per slot; starting a new job on a
slot abandons the previous handle. Abandoned workers run to completion but
nobody reads their channel, so their result is dropped.

Only the event loop touches the dispatcher. Workers receive a zero-argument
callable that already captured copies of every parameter it needs.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from queue import Empty, SimpleQueue
from typing import Any, Callable, Union

from .logging import get_logger

logger = get_logger(__name__)


class Slot(str, Enum):
    """Independent tracking slots; jobs on different slots never conflict."""

    OPERATION = "operation"
    SNAPSHOTS = "snapshots"
    CONFIGS = "configs"


# Pending operation variants. Each carries just what is needed to route its result.


@dataclass(frozen=True, slots=True)
class StatusRange:
    from_id: int
    to_id: int


@dataclass(frozen=True, slots=True)
class DiffRange:
    from_id: int
    to_id: int


@dataclass(frozen=True, slots=True)
class Mount:
    id: int


@dataclass(frozen=True, slots=True)
class Umount:
    id: int


@dataclass(frozen=True, slots=True)
class Rollback:
    id: int


@dataclass(frozen=True, slots=True)
class Cleanup:
    algorithm: str


@dataclass(frozen=True, slots=True)
class CreateSnapshot:
    config: str


@dataclass(frozen=True, slots=True)
class ModifySnapshot:
    id: int


@dataclass(frozen=True, slots=True)
class DeleteSnapshot:
    id: int


@dataclass(frozen=True, slots=True)
class SetupQuota:
    config: str


@dataclass(frozen=True, slots=True)
class SetConfig:
    config: str


@dataclass(frozen=True, slots=True)
class GetConfigForEdit:
    config: str


@dataclass(frozen=True, slots=True)
class ViewConfig:
    config: str


@dataclass(frozen=True, slots=True)
class BootloaderSync:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class SnapshotListing:
    config: str


@dataclass(frozen=True, slots=True)
class ConfigListing:
    pass


PendingOp = Union[
    StatusRange,
    DiffRange,
    Mount,
    Umount,
    Rollback,
    Cleanup,
    CreateSnapshot,
    ModifySnapshot,
    DeleteSnapshot,
    SetupQuota,
    SetConfig,
    GetConfigForEdit,
    ViewConfig,
    BootloaderSync,
    SnapshotListing,
    ConfigListing,
]


class PollState(str, Enum):
    EMPTY = "empty"
    READY = "ready"
    DISCONNECTED = "disconnected"


@dataclass(slots=True)
class PollResult:
    state: PollState
    value: Any = None


class JobHandle:
    """Receiving end of a one-shot channel filled by exactly one worker."""

    def __init__(self) -> None:
        self._queue: SimpleQueue[Any] = SimpleQueue()
        self._finished = threading.Event()
        self._consumed = False

    def deliver(self, value: Any) -> None:
        self._queue.put(value)

    def finish(self) -> None:
        self._finished.set()

    def poll(self) -> PollResult:
        """Non-blocking check. A value is handed out at most once."""
        if self._consumed:
            return PollResult(PollState.DISCONNECTED)
        try:
            value = self._queue.get_nowait()
        except Empty:
            if not self._finished.is_set():
                return PollResult(PollState.EMPTY)
            # the worker may have delivered between the two checks
            try:
                value = self._queue.get_nowait()
            except Empty:
                self._consumed = True
                return PollResult(PollState.DISCONNECTED)
        self._consumed = True
        return PollResult(PollState.READY, value)


def _run_job(handle: JobHandle, work: Callable[[], Any], label: str) -> None:
    try:
        value = work()
    except Exception:
        logger.exception("background job %s crashed before producing a result", label)
    else:
        handle.deliver(value)
    finally:
        handle.finish()


def spawn_thread(target: Callable[[], None], name: str) -> None:
    threading.Thread(target=target, name=name, daemon=True).start()


@dataclass(slots=True)
class TrackedJob:
    op: PendingOp
    handle: JobHandle
    message: str = ""


class JobDispatcher:
    """Start background jobs and track one pending (op, handle) per slot."""

    def __init__(self, spawn: Callable[[Callable[[], None], str], None] | None = None) -> None:
        self._spawn = spawn or spawn_thread
        self._tracked: dict[Slot, TrackedJob] = {}

    def start(
        self,
        op: PendingOp,
        work: Callable[[], Any],
        *,
        message: str = "",
        slot: Slot = Slot.OPERATION,
    ) -> JobHandle:
        handle = JobHandle()
        previous = self._tracked.get(slot)
        if previous is not None:
            logger.debug("abandoning %s on slot %s", previous.op, slot.value)
        self._tracked[slot] = TrackedJob(op=op, handle=handle, message=message)
        label = f"{slot.value}:{type(op).__name__}"
        self._spawn(lambda: _run_job(handle, work, label), f"snapper-tui-{label}")
        return handle

    def pending(self, slot: Slot = Slot.OPERATION) -> PendingOp | None:
        tracked = self._tracked.get(slot)
        return tracked.op if tracked else None

    def message(self, slot: Slot = Slot.OPERATION) -> str:
        tracked = self._tracked.get(slot)
        return tracked.message if tracked else ""

    def is_tracking(self, slot: Slot = Slot.OPERATION) -> bool:
        return slot in self._tracked

    def cancel(self, slot: Slot = Slot.OPERATION) -> PendingOp | None:
        """Stop tracking the slot. The worker is not interrupted; its result is dropped."""
        tracked = self._tracked.pop(slot, None)
        return tracked.op if tracked else None

    def poll(self, slot: Slot) -> tuple[PendingOp, PollResult] | None:
        """Check the tracked channel of `slot`; clears the slot once resolved."""
        tracked = self._tracked.get(slot)
        if tracked is None:
            return None
        result = tracked.handle.poll()
        if result.state is PollState.EMPTY:
            return None
        del self._tracked[slot]
        return tracked.op, result
