# bazar/tasks/chunks.py
from bazar.celery_worker import celery_app
from bazar.services.chunk_sweeper import ChunkSweeper
from bazar.services.storage import LocalStorage
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="bazar.tasks.chunks.clear_chunks_task")
def clear_chunks_task(root: str | None = None, expiration: int | None = None):
    logger.info("Clear chunks task started")

    sweeper = ChunkSweeper(storage=LocalStorage(root), expiration=expiration)
    report = sweeper.sweep()

    return report.model_dump()
