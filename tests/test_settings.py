import pytest

from chalicelib.seed import SEED_SETTINGS
from chalicelib.settings import validate_settings_update
from chalicelib.utils import exceptions
from tests.utils.fixtures import empty_session, store_session


def test_settings_default_when_absent(empty_session):
    assert empty_session.settings.get_settings() == SEED_SETTINGS


def test_update_settings_merges(store_session):
    updated = store_session.settings.update_settings({'commission_rate': 12, 'theme': 'dark'})

    assert updated == {**SEED_SETTINGS, 'commission_rate': 12}
    assert store_session.settings.get_settings() == updated


def test_update_settings_does_not_touch_seed_defaults(empty_session):
    empty_session.settings.update_settings({'delivery_fee_min': 10})

    assert SEED_SETTINGS['delivery_fee_min'] == 20


@pytest.mark.parametrize('updates', [
    {'commission_rate': 101},
    {'commission_rate': -1},
    {'commission_rate': '15'},
    {'delivery_fee_min': -5},
    {'delivery_fee_min': 60},
    {'delivery_fee_max': 10},
    {'support_email': 'support'},
])
def test_invalid_settings_update(updates):
    with pytest.raises(exceptions.ValidationException):
        validate_settings_update(updates, SEED_SETTINGS)


def test_valid_settings_update():
    validate_settings_update({'commission_rate': 0, 'delivery_fee_min': 50, 'support_email': 'a@b.in'},
                             SEED_SETTINGS)
