"""
Order status state machine and the visibility rules of each dashboard.

    placed -> accepted -> preparing -> ready -> picked -> delivered
    placed -> rejected

delivered and rejected are terminal.
"""
from typing import Dict, FrozenSet, Iterable, List, NamedTuple

from chalicelib.constants.statuses import OrderAction, OrderStatus, Role
from chalicelib.utils import exceptions

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.ACCEPTED, OrderStatus.REJECTED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.PREPARING}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.PICKED}),
    OrderStatus.PICKED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.REJECTED: frozenset(),
}


class ActionRule(NamedTuple):
    role: Role
    target: OrderStatus


ACTION_RULES: Dict[OrderAction, ActionRule] = {
    OrderAction.PLACE: ActionRule(Role.CUSTOMER, OrderStatus.PLACED),
    OrderAction.ACCEPT: ActionRule(Role.VENDOR, OrderStatus.ACCEPTED),
    OrderAction.REJECT: ActionRule(Role.VENDOR, OrderStatus.REJECTED),
    OrderAction.START_PREPARING: ActionRule(Role.VENDOR, OrderStatus.PREPARING),
    OrderAction.MARK_READY: ActionRule(Role.VENDOR, OrderStatus.READY),
    OrderAction.PICK_UP: ActionRule(Role.DRIVER, OrderStatus.PICKED),
    OrderAction.DELIVER: ActionRule(Role.DRIVER, OrderStatus.DELIVERED),
}

INITIAL_STATUS = OrderStatus.PLACED
TERMINAL_STATUSES = frozenset(status for status, targets in ALLOWED_TRANSITIONS.items() if not targets)


def can_transition(current, target) -> bool:
    return OrderStatus.coerce(target) in ALLOWED_TRANSITIONS[OrderStatus.coerce(current)]


def check_transition(order_id, current, target) -> OrderStatus:
    """
    Raise IllegalStatusTransition unless current -> target is in the state machine
    :return:
    target status
    """
    current, target = OrderStatus.coerce(current), OrderStatus.coerce(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise exceptions.IllegalStatusTransition(order_id, current.value, target.value)
    return target


def resolve_action(action, role) -> OrderStatus:
    """
    Target status of an action, raise AccessDenied if the role may not perform it
    """
    rule = ACTION_RULES[OrderAction.coerce(action)]
    if Role.coerce(role) != rule.role:
        raise exceptions.AccessDenied(f'{Role.coerce(role).value} can not {OrderAction.coerce(action).value} orders')
    return rule.target


# Visibility rules

def orders_for_customer(orders: Iterable[Dict], customer_id) -> List[Dict]:
    return [order for order in orders if order.get('customer_id') == customer_id]


def orders_for_vendor(orders: Iterable[Dict], restaurant_ids: Iterable[str]) -> List[Dict]:
    restaurant_ids = set(restaurant_ids)
    return [order for order in orders if order.get('restaurant_id') in restaurant_ids]


def orders_available_for_driver(orders: Iterable[Dict]) -> List[Dict]:
    """
    Ready orders no driver has claimed yet
    """
    return [
        order for order in orders
        if order.get('status') == OrderStatus.READY.value and not order.get('driver_id')
    ]


def orders_active_for_driver(orders: Iterable[Dict], driver_id) -> List[Dict]:
    return [
        order for order in orders
        if order.get('driver_id') == driver_id and order.get('status') == OrderStatus.PICKED.value
    ]


def orders_completed_for_driver(orders: Iterable[Dict], driver_id) -> List[Dict]:
    return [
        order for order in orders
        if order.get('driver_id') == driver_id and order.get('status') == OrderStatus.DELIVERED.value
    ]
