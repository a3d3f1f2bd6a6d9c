# bazar/services/chunk_sweeper.py
import time

from bazar.domain.schemas import ChunkSweepReport
from bazar.services.storage import LocalStorage
from bazar.utils.settings import CHUNK_EXPIRATION, CHUNKS_NAMESPACE
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


class ChunkSweeper:
    """
    Deletes uploaded file chunks that were not touched for `expiration`
    seconds.

    Best effort: a file that cannot be inspected or removed is logged and
    counted as failed, the remaining files are still processed. Only files
    already stale when they are looked at get removed, so uploads running
    in parallel and other sweeps are not affected.
    """

    def __init__(
        self,
        storage: LocalStorage | None = None,
        expiration: int | None = None,
        namespace: str | None = None,
    ):
        self.storage = storage or LocalStorage()
        self.expiration = CHUNK_EXPIRATION if expiration is None else expiration
        self.namespace = namespace or CHUNKS_NAMESPACE

    def sweep(self, now: float | None = None) -> ChunkSweepReport:
        now = time.time() if now is None else now
        report = ChunkSweepReport(namespace=self.namespace)

        for path in self.storage.list_files(self.namespace):
            report.scanned += 1

            try:
                age = now - self.storage.last_modified(path)

                if age >= self.expiration and self.storage.delete(path):
                    report.deleted += 1
            except FileNotFoundError:
                #removed by another sweep since the listing
                continue
            except (OSError, ValueError) as e:
                report.failed += 1
                logger.warning(f"Failed to clear chunk {path}: {e}")

        logger.info(
            f"Chunk sweep of {self.namespace!r} done: scanned {report.scanned}, "
            f"deleted {report.deleted}, failed {report.failed}"
        )

        return report
