import functools
import os
import time
from random import uniform
from typing import Callable, Optional

import boto3
from botocore.exceptions import ClientError

from chalicelib.constants import keys_structure
from chalicelib.utils import exceptions
from chalicelib.utils.boto_clients import aws_config_ddb
from chalicelib.utils.logger import logger, log_exception

# For safe db operations
RETRY_EXCEPTIONS = ('ProvisionedThroughputExceededException', 'ThrottlingException')
MAX_RETRIES = 15

_DB = None


def exp_db_backoff(func):
    """
        should be used for any atomic
        get/put/delete item in the code
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f'{func.__name__}:: args={args}, kwargs={kwargs}')
        timeout_seed = uniform(0.1, 0.99)

        for retries in range(MAX_RETRIES):
            try:
                result = func(*args, **kwargs)
                logger.info(f'{func.__name__}:: SUCCESS')
                return result
            except ClientError as e:
                if e.response.get('Error', {}).get('Code') not in RETRY_EXCEPTIONS:
                    log_exception(e, msg=f'Got exception while trying to {func.__name__}: ')
                    raise
                logger.warning(f'{func.__name__}:: throttled, retry={retries}')
                time.sleep(min(timeout_seed * 2 ** retries, 10))

        raise exceptions.NumberOfRetriesExceeded(
            f"MaxNumber={MAX_RETRIES} of DB retries has exceeded"
        )

    return wrapper


def get_table(table_name: str):
    if os.environ.get('ENDPOINT_URL'):
        table = boto3.resource('dynamodb', endpoint_url=os.environ.get('ENDPOINT_URL'),
                               config=aws_config_ddb).Table(table_name)
    else:
        table = boto3.resource('dynamodb', config=aws_config_ddb).Table(table_name)

    table.put_item = exp_db_backoff(table.put_item)
    table.get_item = exp_db_backoff(table.get_item)
    table.delete_item = exp_db_backoff(table.delete_item)
    return table


def get_gen_table():
    global _DB
    if _DB is None:
        _DB = get_table(os.environ.get('GEN_TABLE_NAME'))
    return _DB


def put_db_record(item: dict, table=get_gen_table):
    table().put_item(Item=item)


def delete_db_record(partkey, sortkey, table=get_gen_table):
    table().delete_item(Key={'partkey': partkey, 'sortkey': sortkey})


def get_db_item(partkey, sortkey, table=get_gen_table):
    result = table().get_item(
        Key={
            'partkey': partkey,
            'sortkey': sortkey
        }
    )

    if 'Item' in result:
        return result['Item']
    else:
        logger.info(f"get_db_item ::: record partkey={partkey} sortkey={sortkey} not found")
        raise exceptions.RecordNotFound(f'record partkey={partkey} sortkey={sortkey} not found')


class DynamoDBMedium:
    """
    Persistence medium keeping one item per store key:
    partkey = namespace, sortkey = key, value_ = JSON text
    """

    def __init__(self, namespace: str, table: Callable = get_gen_table):
        self.namespace = namespace
        self.table = table

    def _pk(self) -> str:
        return keys_structure.medium_pk.format(namespace=self.namespace)

    def get(self, key: str) -> Optional[str]:
        try:
            item = get_db_item(self._pk(), keys_structure.medium_sk.format(key=key), table=self.table)
        except exceptions.RecordNotFound:
            return None
        return item.get(keys_structure.medium_value_attr)

    def set(self, key: str, raw_value: str) -> None:
        put_db_record({
            'partkey': self._pk(),
            'sortkey': keys_structure.medium_sk.format(key=key),
            keys_structure.medium_value_attr: raw_value
        }, table=self.table)

    def delete(self, key: str) -> None:
        delete_db_record(self._pk(), keys_structure.medium_sk.format(key=key), table=self.table)
