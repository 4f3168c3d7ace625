# Every key is stored as '{namespace}_{name}'
store_key = '{namespace}_{name}'

restaurants_key = 'restaurants'
products_key = 'products'
orders_key = 'orders'
cart_key = 'cart'
customer_cart_key = 'cart_{customer_id}'
pending_vendors_key = 'pending_vendors'
settings_key = 'settings'
notifications_key = 'notifications'
order_sequence_key = 'order_sequence'

# Names written under a namespace, read by clear()
key_index_key = 'key_index'

# Bumped whenever seed data changes so existing stores are re-seeded
initialized_key = 'initialized_v5'

# DynamoDB layout of the persistence medium
medium_pk = '{namespace}'
medium_sk = '{key}'
medium_value_attr = 'value_'
