# ferrecloud/core/realtime.py

from datetime import datetime, timezone
from typing import Set, Any
from fastapi import WebSocket
from ferrecloud.core.logger import logger

# sin auth: todos los clientes comparten un canal
DEFAULT_CHANNEL = "global"


class ConnectionManager:
    """
    Keeps the open WebSocket clients of the shared channel and fans events
    out to them. Clients whose send fails are dropped.
    """

    def __init__(self, channel_id: str = DEFAULT_CHANNEL) -> None:
        self.channel_id = channel_id
        self._clients: Set[WebSocket] = set()

    @property
    def size(self) -> int:
        return len(self._clients)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._clients.add(websocket)
        logger.info("[RT] connected channel=%s total=%s", self.channel_id, self.size)

    def disconnect(self, websocket: WebSocket) -> None:
        self._clients.discard(websocket)
        logger.info("[RT] disconnected channel=%s total=%s", self.channel_id, self.size)

    async def broadcast(self, message: dict) -> int:
        """Send to every client; returns how many received it."""
        delivered = 0
        for ws in list(self._clients):
            try:
                await ws.send_json(message)
                delivered += 1
            except Exception as e:
                logger.debug("[RT] send failed channel=%s: %s", self.channel_id, e)
                self._clients.discard(ws)
        return delivered


manager = ConnectionManager()


def build_event(resource: str, action: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "type": f"{resource}.{action}",
        "channel": manager.channel_id,
        "resource": resource,
        "action": action,
        "payload": payload or {},
        "sentAt": datetime.now(timezone.utc).isoformat(),
    }


async def publish_realtime_event(
    resource: str,
    action: str,
    payload: dict[str, Any] | None = None,
) -> int:
    return await manager.broadcast(build_event(resource, action, payload))


async def publish_safely(
    resource: str,
    action: str,
    payload: dict[str, Any] | None = None,
) -> None:
    """
    Same as publish_realtime_event but never raises: the write that
    triggered the event is already committed.
    """
    try:
        delivered = await publish_realtime_event(resource, action, payload)
        logger.info("[RT] published %s.%s payload=%s clients=%s", resource, action, payload, delivered)
    except Exception as e:
        logger.error("[RT] publish failed %s.%s: %s", resource, action, e, exc_info=True)
