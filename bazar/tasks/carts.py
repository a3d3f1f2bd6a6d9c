# bazar/tasks/carts.py
from bazar.celery_worker import celery_app
from bazar.data.database import SessionLocal
from bazar.services.cart_service import CartService
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="bazar.tasks.carts.clear_carts_task")
def clear_carts_task(expiration: int | None = None):
    logger.info("Clear expired carts task started")

    db = SessionLocal()
    try:
        deleted = CartService(db).clear_expired_carts(expiration=expiration)
    finally:
        db.close()

    logger.info(f"Deleted {deleted} expired carts")

    return {"deleted": deleted}
