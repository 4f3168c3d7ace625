from typing import Dict, Iterable, List, Optional

from chalice import Response

from chalicelib import order_lifecycle
from chalicelib.base_class_collection import CollectionBase, is_number
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import DEFAULT_PAYMENT_METHOD, ORDER_ID_OFFSET, ORDER_ID_PREFIX
from chalicelib.constants.status_codes import http200, http201
from chalicelib.constants.statuses import OrderStatus, Role
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.ids import now_iso
from chalicelib.utils.logger import logger


class Orders(CollectionBase):
    collection_key = keys_structure.orders_key
    record_type = 'order'

    required_fields_validation = {
        'id': lambda x: isinstance(x, str),
        'customer_id': lambda x: isinstance(x, str),
        'restaurant_id': lambda x: isinstance(x, str),
        'items': lambda x: isinstance(x, list),
        'status': lambda x: isinstance(x, str),
        'total': is_number,
        'created_at': lambda x: isinstance(x, str),
        'updated_at': lambda x: isinstance(x, str),
    }

    # status and driver fields only change through update_order_status
    mutable_fields_validation = {}

    enum_fields = {'status': OrderStatus}

    def get_orders(self) -> List[Dict]:
        return self.get_all()

    def get_order_by_id(self, order_id) -> Optional[Dict]:
        return self.get_by_id(order_id)

    def get_orders_by_customer(self, customer_id) -> List[Dict]:
        return order_lifecycle.orders_for_customer(self.get_all(), customer_id)

    def get_orders_by_restaurant(self, restaurant_id) -> List[Dict]:
        return self.filter_by(restaurant_id=restaurant_id)

    def get_orders_for_vendor(self, restaurant_ids: Iterable[str]) -> List[Dict]:
        return order_lifecycle.orders_for_vendor(self.get_all(), restaurant_ids)

    def get_orders_by_driver(self, driver_id) -> List[Dict]:
        return self.filter_by(driver_id=driver_id)

    def get_available_orders_for_driver(self) -> List[Dict]:
        return order_lifecycle.orders_available_for_driver(self.get_all())

    def get_active_orders_for_driver(self, driver_id) -> List[Dict]:
        return order_lifecycle.orders_active_for_driver(self.get_all(), driver_id)

    def get_completed_orders_for_driver(self, driver_id) -> List[Dict]:
        return order_lifecycle.orders_completed_for_driver(self.get_all(), driver_id)

    def add_order(self, order: Dict) -> Dict:
        """
        Orders enter the store only at checkout, in the initial status
        """
        if OrderStatus.coerce(order.get('status')) != order_lifecycle.INITIAL_STATUS:
            raise exceptions.ValidationException(
                f"New order must be {order_lifecycle.INITIAL_STATUS.value}, got {order.get('status')}")
        return self.add(order)

    def update_order_status(self, order_id, status, driver_id: Optional[str] = None,
                            driver_name: Optional[str] = None) -> Optional[Dict]:
        """
        Moves an order along the state machine and stamps updated_at.
        Picking up is the only transition assigning driver_id/driver_name.
        Unknown order_id is a silent no-op (returns None).
        """
        records = self.get_all()
        index = next((i for i, record in enumerate(records) if record.get('id') == order_id), None)
        if index is None:
            logger.info(f"update_order_status ::: order_id={order_id} not found, nothing to update")
            return None

        order = records[index]
        target = order_lifecycle.check_transition(order_id, order.get('status'), status)
        changes = {'status': target.value, 'updated_at': now_iso()}
        if target == OrderStatus.PICKED:
            if not driver_id or not driver_name:
                raise exceptions.ValidationException('driver_id and driver_name are required to pick up an order')
            if order.get('driver_id'):
                raise exceptions.ValidationException(f"Order {order_id} is already claimed by {order['driver_id']}")
            changes.update({'driver_id': driver_id, 'driver_name': driver_name})
        elif driver_id is not None or driver_name is not None:
            raise exceptions.ValidationException('Driver can only be assigned when the order is picked up')

        records[index] = {**order, **changes}
        self._save(records)
        logger.info(f"update_order_status ::: order_id={order_id} {order.get('status')} -> {target.value}")
        return records[index]

    def generate_order_id(self) -> str:
        """
        Next 'ORD-<n>' id from a persisted counter, never lower than 1001 + number of orders
        """
        counter = self.kv.get(keys_structure.order_sequence_key)
        if not isinstance(counter, int):
            counter = 0
        number = max(counter + 1, ORDER_ID_OFFSET + len(self.get_all()))
        self.kv.set(keys_structure.order_sequence_key, number)
        return f'{ORDER_ID_PREFIX}{number}'


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_orders(request, session) -> Response:
    """
    customer gets own orders
    vendor gets orders of own restaurants
    driver gets a pool: available (default), active or completed
    admin gets every order
    """
    actor = request.auth_result
    pool = (request.query_params or {}).get('pool')
    orders = session.orders_visible_to(actor, pool)
    logger.info(f"endpoint_get_orders ::: returning orders={[order.get('id') for order in orders]}")
    return Response(status_code=http200, body={'orders': orders})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_order_by_id(request, session, order_id) -> Response:
    actor = request.auth_result
    order = session.orders.get_order_by_id(order_id)
    if order is None or order['id'] not in {visible.get('id') for visible in session.orders_visible_to(actor, 'all')}:
        raise exceptions.RecordNotFound(f'Order {order_id} not found')
    return Response(status_code=http200, body=order)


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_create_order(request, session) -> Response:
    """
    customer checkout, the order is built from the customer's cart
    """
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    body = utils_data.parse_raw_body(request)
    if not body.get('delivery_address'):
        raise exceptions.ValidationException('delivery_address is required')
    order = session.place_order(
        actor,
        customer_phone=body.get('customer_phone', ''),
        delivery_address=body['delivery_address'],
        payment_method=body.get('payment_method', DEFAULT_PAYMENT_METHOD)
    )
    return Response(status_code=http201, body=order)


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_order_action(request, session, order_id, action) -> Response:
    actor = request.auth_result
    order = session.apply_order_action(order_id, action, actor)
    return Response(status_code=http200, body=order)
