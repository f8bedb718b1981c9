"""Live Updates — WebSocket endpoint joining a household broadcast group.

Invariants:
    - The socket is in the group from the "Joined" acknowledgement until it
      disconnects; leave() runs on every exit path
    - Inbound messages are ignored; the channel is server-to-client only
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from chorehub.api.dependencies import get_services
from chorehub.services.composition import Services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/households", tags=["live"])


@router.websocket("/{household_id}/live")
async def household_live(
    websocket: WebSocket, household_id: UUID, services: Services = Depends(get_services),
):
    await websocket.accept()
    broadcaster = services.broadcaster
    await broadcaster.join(household_id, websocket)
    try:
        await websocket.send_json({"type": "Joined", "data": {"household_id": str(household_id)}})
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live client disconnected", extra={"household_id": household_id})
    finally:
        await broadcaster.leave(household_id, websocket)
