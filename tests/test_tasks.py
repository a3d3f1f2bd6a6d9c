"""
Tests for the scheduled Celery tasks
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from bazar.celery_worker import celery_app
from bazar.data.models import CartModel
from bazar.services.cart_service import CartService
from bazar.tasks.carts import clear_carts_task
from bazar.tasks.chunks import clear_chunks_task


class TestBeatSchedule:

    def test_tasks_are_scheduled(self):
        tasks = {entry["task"] for entry in celery_app.conf.beat_schedule.values()}

        assert tasks == {
            "bazar.tasks.chunks.clear_chunks_task",
            "bazar.tasks.carts.clear_carts_task",
        }

    def test_tasks_are_registered(self):
        assert "bazar.tasks.chunks.clear_chunks_task" in celery_app.tasks
        assert "bazar.tasks.carts.clear_carts_task" in celery_app.tasks


class TestClearChunksTask:

    def test_clears_stale_chunks(self, tmp_path, make_chunk):
        make_chunk("stale.part", 1000)

        result = clear_chunks_task(root=str(tmp_path), expiration=60)

        assert result == {"namespace": "chunks", "scanned": 1, "deleted": 1, "failed": 0}
        assert not (tmp_path / "chunks" / "stale.part").exists()


class TestClearCartsTask:

    def test_clears_expired_carts(self, db, session_factory, products, monkeypatch):
        service = CartService(db)
        stale = service.create_cart()
        service.attach_product(stale["cart_id"], products[0].id, Decimal("1"), Decimal("0"), 1)
        fresh = service.create_cart()

        db.get(CartModel, stale["cart_id"]).updated_at = datetime.now(timezone.utc) - timedelta(days=10)
        db.commit()

        monkeypatch.setattr("bazar.tasks.carts.SessionLocal", session_factory)

        assert clear_carts_task(expiration=24 * 60 * 60) == {"deleted": 1}

        db.expire_all()
        assert db.get(CartModel, stale["cart_id"]) is None
        assert db.get(CartModel, fresh["cart_id"]) is not None
