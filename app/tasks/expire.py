# app/tasks/expire.py
from datetime import datetime, timezone, timedelta

from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.repos.cart_repo import CartRepo
from app.utils.settings import CART_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def purge_stale_cart_lines(db, ttl_seconds: int = CART_TTL_SECONDS, now: datetime | None = None) -> int:
    """
    Sesja anonimowa wygasa po TTL, jej linie koszyka nie sa juz nikomu potrzebne.
    Zwraca ile linii usunieto.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=ttl_seconds)

    repo = CartRepo(db)
    try:
        removed = repo.delete_lines_older_than(cutoff)
        repo.commit()
    except Exception:
        repo.rollback()
        raise

    logger.info(f"Purged {removed} cart lines older than {cutoff.isoformat()}")
    return removed


@celery_app.task(name="app.tasks.expire.purge_stale_cart_lines_task")
def purge_stale_cart_lines_task():
    logger.info("Purge stale cart lines task started")

    db = SessionLocal()
    try:
        return purge_stale_cart_lines(db)
    finally:
        db.close()
