import asyncio

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.utils.settings import REDIS_URL, ORDER_EVENTS_CHANNEL
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["events"])


def get_event_redis() -> aioredis.Redis:
    return aioredis.from_url(REDIS_URL, decode_responses=True)


async def _relay(websocket: WebSocket, pubsub) -> None:
    # timeout zamiast listen(), petla co chwile oddaje sterowanie
    while True:
        message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=1.0)
        if message is not None:
            await websocket.send_text(message["data"])


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # klient nic nie wysyla, czekamy tylko na zamkniecie
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws")
async def order_events(websocket: WebSocket, client: aioredis.Redis = Depends(get_event_redis)):
    """
    Przekazuje zdarzenia zamowien z kanalu redis do klienta.
    Bez gwarancji dostarczenia i bez powtorek - kto nie byl podlaczony, ten nie dostanie.
    Rozlaczenie klienta od razu zwalnia subskrypcje.
    """
    await websocket.accept()
    logger.info("WebSocket client connected")

    pubsub = client.pubsub()
    try:
        await pubsub.subscribe(ORDER_EVENTS_CHANNEL)
        tasks = {
            asyncio.create_task(_relay(websocket, pubsub)),
            asyncio.create_task(_wait_for_disconnect(websocket)),
        }
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                raise error
    finally:
        await pubsub.unsubscribe(ORDER_EVENTS_CHANNEL)
        await pubsub.aclose()
        await client.aclose()
        logger.info("WebSocket client disconnected")
