from typing import Dict

from chalice import Response

from chalicelib.base_class_collection import is_number
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import COMMISSION_RATE_MAX, COMMISSION_RATE_MIN
from chalicelib.constants.status_codes import http200
from chalicelib.constants.statuses import Role
from chalicelib.seed import SEED_SETTINGS
from chalicelib.store import KeyValueStore
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.logger import logger

SETTINGS_FIELDS = ('commission_rate', 'delivery_fee_min', 'delivery_fee_max', 'support_email')


class PlatformSettings:
    """
    Singleton settings record, merged on update and never recreated
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def get_settings(self) -> Dict:
        settings = self.kv.get(keys_structure.settings_key)
        if not isinstance(settings, dict):
            return dict(SEED_SETTINGS)
        return settings

    def update_settings(self, updates: Dict) -> Dict:
        settings = {**self.get_settings(), **utils_data.pick_fields(updates, SETTINGS_FIELDS)}
        self.kv.set(keys_structure.settings_key, settings)
        logger.info(f"update_settings ::: updated fields={[key for key in updates if key in SETTINGS_FIELDS]}")
        return settings


def validate_settings_update(updates: Dict, current: Dict) -> None:
    """
    Range checks of the admin settings form, the store itself accepts anything
    """
    if 'commission_rate' in updates:
        rate = updates['commission_rate']
        if not is_number(rate) or not COMMISSION_RATE_MIN <= rate <= COMMISSION_RATE_MAX:
            raise exceptions.ValidationException(
                f'commission_rate must be a number in [{COMMISSION_RATE_MIN}, {COMMISSION_RATE_MAX}]')
    for key in ('delivery_fee_min', 'delivery_fee_max'):
        if key in updates and (not is_number(updates[key]) or updates[key] < 0):
            raise exceptions.ValidationException(f'{key} must be a non-negative number')
    fee_min = updates.get('delivery_fee_min', current.get('delivery_fee_min'))
    fee_max = updates.get('delivery_fee_max', current.get('delivery_fee_max'))
    if is_number(fee_min) and is_number(fee_max) and fee_min > fee_max:
        raise exceptions.ValidationException('delivery_fee_min can not be greater than delivery_fee_max')
    if 'support_email' in updates and '@' not in str(updates['support_email']):
        raise exceptions.ValidationException('support_email is not a valid email')


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_get_settings(request, session) -> Response:
    return Response(status_code=http200, body=session.settings.get_settings())


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_update_settings(request, session) -> Response:
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    updates = utils_data.parse_raw_body(request)
    validate_settings_update(updates, session.settings.get_settings())
    return Response(status_code=http200, body=session.settings.update_settings(updates))
