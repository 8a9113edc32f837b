import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_hub, get_store
from app.models.aggregate import AggregateKind
from app.services.broadcast_hub import BroadcastHub, Viewer
from app.services.store import AggregateStore

router = APIRouter()
logger = logging.getLogger(__name__)

REFRESH_REQUESTS = {
    "request:schedule": AggregateKind.schedule,
    "request:events": AggregateKind.events,
}


async def _send_current(hub: BroadcastHub, store: AggregateStore, viewer: Viewer, kind: AggregateKind) -> None:
    snapshot = await run_in_threadpool(store.load, kind)
    await hub.deliver(viewer, snapshot)


@router.websocket("/live/ws")
async def live_websocket(
    websocket: WebSocket,
    store: AggregateStore = Depends(get_store),
    hub: BroadcastHub = Depends(get_hub),
) -> None:
    # Register first so no broadcast between the initial read and the send is missed.
    viewer = await hub.connect(websocket)
    try:
        await websocket.send_json({"event": "connected", "viewer_id": viewer.id})
        await _send_current(hub, store, viewer, AggregateKind.schedule)
        await _send_current(hub, store, viewer, AggregateKind.events)
        while True:
            message = (await websocket.receive_text()).strip().lower()
            if message == "ping":
                await websocket.send_json({"event": "pong"})
            elif message in REFRESH_REQUESTS:
                await _send_current(hub, store, viewer, REFRESH_REQUESTS[message])
            else:
                logger.debug("Ignoring viewer %s message %r", viewer.id, message[:50])
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(viewer)
