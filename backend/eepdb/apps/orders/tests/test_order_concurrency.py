from __future__ import annotations

import threading

import pytest

from conftest import create_part, create_user
from eepdb.apps.inventory import models as inventory_models
from eepdb.apps.orders import models as order_models
from eepdb.apps.orders import services as order_services
from eepdb.database import Base, create_db_engine, create_session_factory, transaction
from eepdb.errors import InsufficientStockError


@pytest.fixture()
def file_session_factory(tmp_path):
    engine = create_db_engine(
        f"sqlite+pysqlite:///{tmp_path / 'inventory.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield create_session_factory(engine)
    finally:
        engine.dispose()


def _seed(factory, stock_level):
    with factory() as db:
        user = create_user(db)
        part = create_part(db, stock_level=stock_level)
        return user.id, part.id


def test_order_against_stale_part_rechecks_stock(file_session_factory):
    user_id, part_id = _seed(file_session_factory, 8)

    with file_session_factory() as first, file_session_factory() as second:
        stale = first.get(inventory_models.Part, part_id)
        assert stale.stock_level == 8

        with transaction(second):
            order_services.create_order(second, part_id=part_id, quantity=5, ordered_by=user_id)

        with pytest.raises(InsufficientStockError):
            with transaction(first):
                order_services.create_order(first, part_id=part_id, quantity=5, ordered_by=user_id)

        first.refresh(stale)
        assert stale.stock_level == 3
        assert first.query(order_models.PartOrder).count() == 1


def test_racing_cancellations_restore_once(file_session_factory):
    user_id, part_id = _seed(file_session_factory, 10)
    with file_session_factory() as db, transaction(db):
        order_id = order_services.create_order(db, part_id=part_id, quantity=4, ordered_by=user_id).order.id

    with file_session_factory() as first, file_session_factory() as second:
        # Both sessions see the order as Pending before either cancels it.
        assert first.get(order_models.PartOrder, order_id).status == order_models.OrderStatusEnum.PENDING
        assert second.get(order_models.PartOrder, order_id).status == order_models.OrderStatusEnum.PENDING

        with transaction(second):
            assert order_services.cancel_order(second, order_id=order_id, actor_user_id=user_id).inventory_restored

        with transaction(first):
            outcome = order_services.cancel_order(first, order_id=order_id, actor_user_id=user_id)

        assert outcome.inventory_restored is False
        assert outcome.order.status == order_models.OrderStatusEnum.CANCELLED

    with file_session_factory() as db:
        assert db.get(inventory_models.Part, part_id).stock_level == 10


def test_concurrent_orders_never_oversell(file_session_factory):
    user_id, part_id = _seed(file_session_factory, 8)
    barrier = threading.Barrier(2)
    results = []
    lock = threading.Lock()

    def place():
        with file_session_factory() as db:
            barrier.wait()
            try:
                with transaction(db):
                    order_services.create_order(db, part_id=part_id, quantity=5, ordered_by=user_id)
                outcome = "ok"
            except InsufficientStockError:
                outcome = "insufficient"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=place) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert sorted(results) == ["insufficient", "ok"]
    with file_session_factory() as db:
        assert db.get(inventory_models.Part, part_id).stock_level == 3
        assert db.query(order_models.PartOrder).count() == 1
        assert db.query(inventory_models.StockMovement).count() == 1
