import os

STORE_NAMESPACE = os.environ.get('STORE_NAMESPACE', 'fd')

# memory | dynamodb | none
STORE_MEDIUM = os.environ.get('STORE_MEDIUM', 'memory').lower()

ORDER_ID_PREFIX = 'ORD-'
ORDER_ID_OFFSET = 1001

DEFAULT_PAYMENT_METHOD = 'UPI'

COMMISSION_RATE_MIN = 0
COMMISSION_RATE_MAX = 100
