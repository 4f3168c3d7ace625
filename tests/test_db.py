import pytest
from botocore.exceptions import ClientError

from chalicelib.store import KeyValueStore
from chalicelib.utils import db, exceptions


class FakeTable:
    """
    Minimal stand-in for a DynamoDB Table resource keyed by (partkey, sortkey)
    """

    def __init__(self):
        self.items = {}

    def put_item(self, Item):
        self.items[(Item['partkey'], Item['sortkey'])] = dict(Item)

    def get_item(self, Key):
        item = self.items.get((Key['partkey'], Key['sortkey']))
        return {'Item': item} if item is not None else {}

    def delete_item(self, Key):
        self.items.pop((Key['partkey'], Key['sortkey']), None)


@pytest.fixture
def fake_table():
    return FakeTable()


def test_dynamodb_medium_item_layout(fake_table):
    medium = db.DynamoDBMedium('fd', table=lambda: fake_table)

    medium.set('fd_orders', '[]')

    assert fake_table.items[('fd', 'fd_orders')] == {'partkey': 'fd', 'sortkey': 'fd_orders', 'value_': '[]'}
    assert medium.get('fd_orders') == '[]'
    assert medium.get('fd_cart') is None


def test_dynamodb_medium_delete(fake_table):
    medium = db.DynamoDBMedium('fd', table=lambda: fake_table)
    medium.set('fd_orders', '[]')
    medium.set('fd_cart', '[]')

    medium.delete('fd_cart')
    medium.delete('fd_missing')

    assert list(fake_table.items) == [('fd', 'fd_orders')]


def test_key_value_store_over_dynamodb_medium(fake_table):
    kv = KeyValueStore(db.DynamoDBMedium('fd', table=lambda: fake_table), namespace='fd')
    kv.set('settings', {'commission_rate': 15})

    assert kv.get('settings') == {'commission_rate': 15}

    kv.clear()
    assert fake_table.items == {}


def test_get_db_item_not_found(fake_table):
    with pytest.raises(exceptions.RecordNotFound):
        db.get_db_item('fd', 'fd_missing', table=lambda: fake_table)


def throttling_error():
    return ClientError({'Error': {'Code': 'ThrottlingException', 'Message': 'slow down'}}, 'PutItem')


def test_exp_db_backoff_retries_throttling(monkeypatch):
    monkeypatch.setattr(db.time, 'sleep', lambda seconds: None)
    calls = []

    @db.exp_db_backoff
    def flaky_put():
        calls.append(1)
        if len(calls) < 3:
            raise throttling_error()
        return 'ok'

    assert flaky_put() == 'ok'
    assert len(calls) == 3


def test_exp_db_backoff_gives_up(monkeypatch):
    monkeypatch.setattr(db.time, 'sleep', lambda seconds: None)

    @db.exp_db_backoff
    def always_throttled():
        raise throttling_error()

    with pytest.raises(exceptions.NumberOfRetriesExceeded):
        always_throttled()


def test_exp_db_backoff_reraises_other_errors(monkeypatch):
    monkeypatch.setattr(db.time, 'sleep', lambda seconds: None)

    @db.exp_db_backoff
    def broken():
        raise ClientError({'Error': {'Code': 'ValidationException', 'Message': 'bad key'}}, 'GetItem')

    with pytest.raises(ClientError):
        broken()
