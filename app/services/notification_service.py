# app/services/notification_service.py
import json
from typing import Protocol

import redis

from app.celery_worker import celery_app
from app.data.models.order import OrderModel
from app.domain.schemas import OrderOut
from app.utils.settings import REDIS_URL, ORDER_EVENTS_CHANNEL
from app.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_CREATED = "order_created"
ORDER_STATUS_UPDATED = "order_status_updated"


class Notifier(Protocol):
    def notify(self, event: dict) -> None: ...


def order_event(event_type: str, order: OrderModel) -> dict:
    """Wiadomosc dla sluchaczy: {"type": ..., "order": {...}} w postaci gotowej do JSON."""
    return {
        "type": event_type,
        "order": OrderOut.model_validate(order).model_dump(mode="json", by_alias=True),
    }


class NotificationService:
    """
    Serwis do wysylania powiadomien o zamowieniach.
    Uzywa Celery, publikacja do kanalu redis dzieje sie w workerze.
    Fire-and-forget: bez potwierdzen i bez retry.
    """

    def notify(self, event: dict) -> None:
        # jedna proba publikacji, bez zapisu wyniku
        publish_order_event_task.apply_async((event,), retry=False, ignore_result=True)


def get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


@celery_app.task(name="app.services.notification_service.publish_order_event_task", ignore_result=True)
def publish_order_event_task(event: dict):
    """
    Celery task - wrzuca zdarzenie na kanal pub/sub.
    Endpoint /ws przekazuje je dalej do podlaczonych klientow.
    """
    receivers = get_redis().publish(ORDER_EVENTS_CHANNEL, json.dumps(event))
    order_id = (event.get("order") or {}).get("id")
    logger.info(f"[NOTIFICATION] {event.get('type')} for order {order_id} delivered to {receivers} listeners")

    return {"type": event.get("type"), "order_id": order_id, "receivers": receivers}
