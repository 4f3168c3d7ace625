from datetime import datetime, timezone

from chalicelib.constants import keys_structure
from chalicelib.seed import SEED_DATA, build_seed_orders, initialize_store, is_initialized, reset_store
from chalicelib.store import KeyValueStore, MemoryMedium
from tests.utils.fixtures import empty_session, store_session


def test_initialize_seeds_every_collection(empty_session):
    assert empty_session.initialize() is True

    assert len(empty_session.restaurants.get_restaurants()) == 14
    assert len(empty_session.products.get_products()) == len(SEED_DATA['products'])
    assert [order['id'] for order in empty_session.orders.get_orders()] == ['ORD-1001', 'ORD-1002']
    assert empty_session.cart.get_cart() == []
    assert [vendor['id'] for vendor in empty_session.pending_vendors.get_pending_vendors()] == ['pv1', 'pv2']
    assert empty_session.settings.get_settings()['commission_rate'] == 15
    assert is_initialized(empty_session.kv)


def test_second_initialize_is_noop(store_session):
    store_session.products.delete_product('p1_1')

    assert store_session.initialize() is False
    assert store_session.products.get_by_id('p1_1') is None


def test_initialize_without_medium_does_nothing():
    kv = KeyValueStore(None)

    assert initialize_store(kv) is False
    assert is_initialized(kv) is False


def test_reset_restores_demo_data(store_session):
    store_session.products.delete_product('p1_1')
    store_session.kv.set(keys_structure.order_sequence_key, 2000)

    assert store_session.reset() is True

    assert store_session.products.get_by_id('p1_1')['name'] == 'Butter Chicken'
    assert store_session.kv.get(keys_structure.order_sequence_key) is None
    assert store_session.orders.generate_order_id() == 'ORD-1003'


def test_reset_then_initialize_equals_single_initialize():
    once = KeyValueStore(MemoryMedium(), namespace='fd')
    initialize_store(once)

    twice = KeyValueStore(MemoryMedium(), namespace='fd')
    reset_store(twice)
    initialize_store(twice)

    for name in (keys_structure.restaurants_key, keys_structure.products_key, keys_structure.cart_key,
                 keys_structure.pending_vendors_key, keys_structure.settings_key):
        assert once.get(name) == twice.get(name)
    assert len(once.get(keys_structure.orders_key)) == len(twice.get(keys_structure.orders_key))


def test_seed_order_timestamps_are_relative_to_now():
    now = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)

    first, second = build_seed_orders(now)

    assert first['created_at'] == '2024-01-20T11:35:00.000Z'
    assert first['updated_at'] == '2024-01-20T11:50:00.000Z'
    assert second['created_at'] == '2024-01-20T11:15:00.000Z'
    assert second['updated_at'] == '2024-01-20T11:55:00.000Z'
    assert 'created_minutes_ago' not in first
    assert SEED_DATA['orders'][0]['created_minutes_ago'] == 25
