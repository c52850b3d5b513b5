# app/celery_worker.py
from celery import Celery

from app.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CART_PURGE_INTERVAL_SECONDS

celery_app = Celery(
    "joyville",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "app.tasks.expire",
    "app.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "purge-stale-cart-lines": {
        "task": "app.tasks.expire.purge_stale_cart_lines_task",
        "schedule": CART_PURGE_INTERVAL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
