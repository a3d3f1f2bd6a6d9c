# bazar/celery_worker.py
from celery import Celery
from celery.schedules import crontab

from bazar.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "bazar",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks have to be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "bazar.tasks.chunks",
    "bazar.tasks.carts",
)

celery_app.conf.beat_schedule = {
    "clear-chunks-daily": {
        "task": "bazar.tasks.chunks.clear_chunks_task",
        "schedule": crontab(hour=0, minute=0),
    },
    "clear-expired-carts-daily": {
        "task": "bazar.tasks.carts.clear_carts_task",
        "schedule": crontab(hour=0, minute=30),
    },
}

celery_app.conf.timezone = "UTC"
