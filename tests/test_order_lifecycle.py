import pytest

from chalicelib import order_lifecycle
from chalicelib.constants.statuses import OrderAction, OrderStatus, Role
from chalicelib.utils import exceptions

HAPPY_PATH = ['placed', 'accepted', 'preparing', 'ready', 'picked', 'delivered']


def test_happy_path_transitions_allowed():
    for current, target in zip(HAPPY_PATH, HAPPY_PATH[1:]):
        assert order_lifecycle.can_transition(current, target)
    assert order_lifecycle.can_transition('placed', 'rejected')


@pytest.mark.parametrize('current, target', [
    ('placed', 'delivered'),
    ('placed', 'picked'),
    ('accepted', 'rejected'),
    ('ready', 'preparing'),
    ('delivered', 'placed'),
    ('rejected', 'accepted'),
    ('picked', 'picked'),
])
def test_illegal_transitions(current, target):
    assert not order_lifecycle.can_transition(current, target)
    with pytest.raises(exceptions.IllegalStatusTransition) as error:
        order_lifecycle.check_transition('ORD-1', current, target)
    assert error.value.current_status == current
    assert error.value.target_status == target


def test_every_status_and_action_has_a_rule():
    assert set(order_lifecycle.ALLOWED_TRANSITIONS) == set(OrderStatus)
    assert set(order_lifecycle.ACTION_RULES) == set(OrderAction)
    for targets in order_lifecycle.ALLOWED_TRANSITIONS.values():
        assert targets <= set(OrderStatus)


def test_terminal_statuses():
    assert order_lifecycle.TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.REJECTED}


def test_unknown_status_rejected():
    with pytest.raises(exceptions.ValidationException):
        order_lifecycle.check_transition('ORD-1', 'placed', 'cooking')


def test_resolve_action_checks_role():
    assert order_lifecycle.resolve_action('accept', Role.VENDOR) == OrderStatus.ACCEPTED
    assert order_lifecycle.resolve_action(OrderAction.PICK_UP, 'driver') == OrderStatus.PICKED

    with pytest.raises(exceptions.AccessDenied):
        order_lifecycle.resolve_action('deliver', Role.VENDOR)
    with pytest.raises(exceptions.AccessDenied):
        order_lifecycle.resolve_action('mark_ready', Role.ADMIN)


def test_driver_pools():
    orders = [
        {'id': 'a', 'status': 'ready', 'driver_id': None},
        {'id': 'b', 'status': 'ready', 'driver_id': 'driver2'},
        {'id': 'c', 'status': 'preparing', 'driver_id': None},
        {'id': 'd', 'status': 'picked', 'driver_id': 'driver1'},
        {'id': 'e', 'status': 'delivered', 'driver_id': 'driver1'},
    ]

    assert [order['id'] for order in order_lifecycle.orders_available_for_driver(orders)] == ['a']
    assert [order['id'] for order in order_lifecycle.orders_active_for_driver(orders, 'driver1')] == ['d']
    assert [order['id'] for order in order_lifecycle.orders_completed_for_driver(orders, 'driver1')] == ['e']


def test_customer_and_vendor_visibility():
    orders = [
        {'id': 'a', 'customer_id': 'customer1', 'restaurant_id': 'rest1'},
        {'id': 'b', 'customer_id': 'customer2', 'restaurant_id': 'rest2'},
    ]

    assert [order['id'] for order in order_lifecycle.orders_for_customer(orders, 'customer2')] == ['b']
    assert [order['id'] for order in order_lifecycle.orders_for_vendor(orders, ['rest1', 'rest9'])] == ['a']
