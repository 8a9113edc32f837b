from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
from threading import Lock
import uuid

from anyio import from_thread
from fastapi import WebSocket

from app.models.aggregate import AggregateKind
from app.services.store import Snapshot

logger = logging.getLogger(__name__)

TOPICS: dict[AggregateKind, str] = {
    AggregateKind.schedule: "schedule:update",
    AggregateKind.events: "events:update",
}


def snapshot_message(snapshot: Snapshot) -> dict:
    return {"event": TOPICS[snapshot.kind], "revision": snapshot.revision, "data": snapshot.items}


@dataclass(eq=False)
class Viewer:
    websocket: WebSocket
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    send_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    revisions: dict[str, int] = field(default_factory=dict)


class BroadcastHub:
    """Pushes full aggregate snapshots to every connected viewer.

    A viewer remembers the last revision it received per topic and skips
    anything older, so a late initial snapshot can never overwrite
    a broadcast that already reached it.
    """

    def __init__(self) -> None:
        self._viewers: set[Viewer] = set()
        self._lock = Lock()

    @property
    def viewer_count(self) -> int:
        with self._lock:
            return len(self._viewers)

    async def connect(self, websocket: WebSocket) -> Viewer:
        await websocket.accept()
        viewer = Viewer(websocket=websocket)
        with self._lock:
            self._viewers.add(viewer)
        logger.info("Viewer %s connected", viewer.id)
        return viewer

    async def disconnect(self, viewer: Viewer) -> None:
        with self._lock:
            self._viewers.discard(viewer)
        logger.info("Viewer %s disconnected", viewer.id)

    async def deliver(self, viewer: Viewer, snapshot: Snapshot) -> bool:
        """Send ``snapshot`` to one viewer; ``False`` if it is older than what it has."""
        message = snapshot_message(snapshot)
        topic = message["event"]
        async with viewer.send_lock:
            if snapshot.revision < viewer.revisions.get(topic, -1):
                return False
            await viewer.websocket.send_json(message)
            viewer.revisions[topic] = snapshot.revision
        return True

    async def publish(self, snapshot: Snapshot) -> int:
        with self._lock:
            viewers = list(self._viewers)

        if not viewers:
            return 0

        delivered = 0
        stale: list[Viewer] = []
        for viewer in viewers:
            try:
                if await self.deliver(viewer, snapshot):
                    delivered += 1
            except Exception:  # pragma: no cover - network/runtime dependent
                stale.append(viewer)

        if stale:
            with self._lock:
                for viewer in stale:
                    self._viewers.discard(viewer)
            logger.debug("Removed %d stale viewer websocket(s)", len(stale))
        return delivered


broadcast_hub = BroadcastHub()


def publish_snapshot(snapshot: Snapshot, hub: BroadcastHub | None = None) -> int:
    """Hand ``snapshot`` from a sync request handler to the async hub.

    Blocks the worker thread until every viewer's send has finished and
    returns how many viewers received it. Delivery failures are logged and
    yield 0; they never reach the caller.
    """
    target = hub or broadcast_hub
    try:
        return from_thread.run(target.publish, snapshot)
    except Exception:  # pragma: no cover - runtime environment dependent
        logger.debug("Unable to broadcast %s revision %d", snapshot.kind.value, snapshot.revision, exc_info=True)
        return 0
