import json
import re
from decimal import Decimal

from chalicelib.constants.statuses import OrderStatus
from chalicelib.utils import app as utils_app, exceptions
from chalicelib.utils.data import fix_values_from_ui, pick_fields
from chalicelib.utils.ids import generate_id, now_iso
from chalicelib.utils.logger import CustomJSONEncoder


def test_generate_id_format():
    assert re.fullmatch(r'prod-\d{13}-[0-9a-z]{5}', generate_id('prod'))
    assert generate_id('notif') != generate_id('notif')


def test_now_iso_format():
    assert re.fullmatch(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z', now_iso())


def test_json_encoder():
    encoded = json.dumps({'status': OrderStatus.READY, 'price': Decimal('9.5')}, cls=CustomJSONEncoder)
    assert json.loads(encoded) == {'status': 'ready', 'price': 9.5}


def test_fix_values_from_ui():
    assert fix_values_from_ui({'name': 'Chai', 'image': None, 'description': ''}) == \
        {'name': 'Chai', 'description': ''}
    assert fix_values_from_ui({'name': 'Chai', 'description': '', '_values_from_ui_strategy': 'delete_empty'}) == \
        {'name': 'Chai'}
    assert pick_fields({'a': 1, 'b': 2}, ('a',)) == {'a': 1}


def test_request_exception_handler_status_codes():
    def raising(error):
        @utils_app.request_exception_handler
        def endpoint():
            raise error
        return endpoint().status_code

    assert raising(exceptions.ValidationException('bad')) == 400
    assert raising(exceptions.NotAuthorizedException('who')) == 401
    assert raising(exceptions.AccessDenied('no')) == 403
    assert raising(exceptions.RecordNotFound('gone')) == 404
    assert raising(exceptions.IllegalStatusTransition('ORD-1', 'placed', 'delivered')) == 409
    assert raising(KeyError('boom')) == 500
