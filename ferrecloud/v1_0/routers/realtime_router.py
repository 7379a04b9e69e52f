from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from ferrecloud.core.realtime import manager
from ferrecloud.core.logger import logger

router = APIRouter(prefix="/v1/ws", tags=["Realtime"])

@router.websocket("/realtime")
async def websocket_realtime(websocket: WebSocket):
    await manager.connect(websocket)

    try:
        # los clientes solo escuchan; lo recibido se descarta
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception as e:
        logger.debug("[RT] socket error: %s", e)
        manager.disconnect(websocket)
        await websocket.close()
