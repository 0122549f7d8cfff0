"""
Live updates: viewers connect over a WebSocket and receive every domain event
as {"event": <name>, "data": <payload>}.
"""
import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from tennis_brackets.notifier import hub

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/live")
async def live_updates(websocket: WebSocket):
    # Subscribe before accepting so no event published after the handshake is missed
    queue = hub.subscribe()
    await websocket.accept()
    receiver = asyncio.create_task(_drain_client(websocket))
    try:
        while True:
            sender = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
            if receiver in done:
                sender.cancel()
                break
            message = sender.result()
            if message is None:
                # Dropped by the hub for falling behind
                await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
                break
            await websocket.send_json(message)
    except WebSocketDisconnect:
        logger.debug("Viewer disconnected while sending")
    finally:
        receiver.cancel()
        hub.unsubscribe(queue)


async def _drain_client(websocket: WebSocket) -> None:
    """Viewers only listen; read until the client goes away."""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Viewer disconnected")
