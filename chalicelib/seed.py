import json
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List

from chalicelib.constants import keys_structure
from chalicelib.store import KeyValueStore
from chalicelib.utils.logger import logger

SEED_DATA_PATH = Path(__file__).parent / 'constants' / 'seed_data.json'

with open(SEED_DATA_PATH, encoding='utf-8') as seed_file:
    SEED_DATA: Dict = json.load(seed_file)

SEED_SETTINGS: Dict = SEED_DATA['settings']


def _minutes_ago(now: datetime, minutes: int) -> str:
    moment = now - timedelta(minutes=minutes)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_seed_orders(now: datetime = None) -> List[Dict]:
    """
    Demo orders with timestamps relative to the seeding moment
    """
    now = now or datetime.now(timezone.utc)
    orders = []
    for record in deepcopy(SEED_DATA['orders']):
        created_minutes_ago = record.pop('created_minutes_ago')
        updated_minutes_ago = record.pop('updated_minutes_ago')
        record['created_at'] = _minutes_ago(now, created_minutes_ago)
        record['updated_at'] = _minutes_ago(now, updated_minutes_ago)
        orders.append(record)
    return orders


def is_initialized(kv: KeyValueStore) -> bool:
    return bool(kv.get(keys_structure.initialized_key))


def initialize_store(kv: KeyValueStore) -> bool:
    """
    Writes the demo data once, the sentinel key makes later calls no-ops
    :return:
    True if the store was seeded by this call
    """
    if not kv.available:
        logger.info('initialize_store ::: no persistence medium, skipping')
        return False
    if is_initialized(kv):
        logger.debug('initialize_store ::: already initialized')
        return False

    kv.set(keys_structure.restaurants_key, SEED_DATA['restaurants'])
    kv.set(keys_structure.products_key, SEED_DATA['products'])
    kv.set(keys_structure.orders_key, build_seed_orders())
    kv.set(keys_structure.cart_key, [])
    kv.set(keys_structure.pending_vendors_key, SEED_DATA['pending_vendors'])
    kv.set(keys_structure.settings_key, SEED_SETTINGS)
    kv.set(keys_structure.notifications_key, [])
    kv.set(keys_structure.initialized_key, True)
    logger.info(f"initialize_store ::: seeded {len(SEED_DATA['restaurants'])} restaurants, "
                f"{len(SEED_DATA['products'])} products, {len(SEED_DATA['orders'])} orders")
    return True


def reset_store(kv: KeyValueStore) -> bool:
    """
    Drops every key of the namespace, then seeds again
    """
    kv.clear()
    return initialize_store(kv)
