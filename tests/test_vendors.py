import pytest

from chalicelib.utils import exceptions
from tests.utils.fixtures import empty_session, store_session


def test_approve_vendor_opens_restaurant(store_session):
    restaurant = store_session.approve_vendor('pv1', owner_id='vendor1')

    assert store_session.pending_vendors.get_by_id('pv1')['status'] == 'approved'
    assert restaurant['name'] == 'Bombay Street Food'
    assert restaurant['owner_id'] == 'vendor1'
    assert restaurant['status'] == 'approved'
    assert restaurant['id'].startswith('rest-')
    assert store_session.restaurants.get_restaurant_by_id(restaurant['id']) == restaurant
    assert len(store_session.restaurants.get_restaurants_by_owner('vendor1')) == 2


def test_approve_defaults_owner_to_application(store_session):
    assert store_session.approve_vendor('pv2')['owner_id'] == 'pv2'


def test_reject_vendor(store_session):
    restaurants_before = store_session.restaurants.get_restaurants()

    assert store_session.reject_vendor('pv2')['status'] == 'rejected'
    assert store_session.restaurants.get_restaurants() == restaurants_before


def test_decided_application_can_not_be_decided_again(store_session):
    store_session.reject_vendor('pv1')

    with pytest.raises(exceptions.ValidationException):
        store_session.approve_vendor('pv1')
    with pytest.raises(exceptions.ValidationException):
        store_session.reject_vendor('pv1')


def test_unknown_application_is_noop(store_session):
    assert store_session.approve_vendor('pv404') is None
    assert store_session.reject_vendor('pv404') is None
    assert len(store_session.restaurants.get_restaurants()) == 14


def test_new_application_is_pending(empty_session):
    application = empty_session.pending_vendors.add_pending_vendor({
        'id': 'pv3', 'name': 'Idli Express', 'email': 'hi@idli.in', 'cuisine': 'South Indian'})

    assert application['status'] == 'pending'
    assert empty_session.pending_vendors.filter_by(status='pending') == [application]
