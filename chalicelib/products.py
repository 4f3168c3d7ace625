from typing import Dict, List, Optional

from chalice import Response

from chalicelib.base_class_collection import CollectionBase, is_number
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200, http201
from chalicelib.constants.statuses import Role
from chalicelib.restaurants import get_owned_restaurant
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.ids import generate_id
from chalicelib.utils.logger import logger


class Products(CollectionBase):
    collection_key = keys_structure.products_key
    record_type = 'product'

    required_fields_validation = {
        'id': lambda x: isinstance(x, str),
        'restaurant_id': lambda x: isinstance(x, str),
        'name': lambda x: isinstance(x, str),
        'price': is_number,
        'is_available': lambda x: isinstance(x, bool),
    }

    mutable_fields_validation = {
        'name': lambda x: isinstance(x, str),
        'description': lambda x: isinstance(x, str),
        'price': is_number,
        'category': lambda x: isinstance(x, str),
        'image': lambda x: isinstance(x, str),
        'is_available': lambda x: isinstance(x, bool),
        'is_veg': lambda x: isinstance(x, bool),
        'tags': lambda x: isinstance(x, list) and all(isinstance(tag, str) for tag in x),
    }

    def get_products(self) -> List[Dict]:
        return self.get_all()

    def get_products_by_restaurant(self, restaurant_id) -> List[Dict]:
        return self.filter_by(restaurant_id=restaurant_id)

    def add_product(self, product: Dict) -> Dict:
        return self.add(product)

    def update_product(self, product_id, updates: Dict) -> Optional[Dict]:
        return self.update(product_id, updates)

    def delete_product(self, product_id) -> bool:
        deleted = self.remove(product_id)
        logger.info(f"delete_product ::: product_id={product_id} {deleted=}")
        return deleted


def build_product(restaurant_id, body: Dict) -> Dict:
    return {
        'id': generate_id('prod'),
        'restaurant_id': restaurant_id,
        'name': body.get('name'),
        'description': body.get('description', ''),
        'price': body.get('price'),
        'category': body.get('category', ''),
        'image': body.get('image', ''),
        'is_available': body.get('is_available', True),
        'is_veg': body.get('is_veg', False),
        'tags': body.get('tags', []),
    }


def get_owned_product(session, actor, product_id) -> Dict:
    product = session.products.get_by_id(product_id)
    if product is None:
        raise exceptions.RecordNotFound(f'Product {product_id} not found')
    get_owned_restaurant(session, actor, product.get('restaurant_id'))
    return product


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_get_restaurant_products(request, session, restaurant_id) -> Response:
    products = session.products.get_products_by_restaurant(restaurant_id)
    if (request.query_params or {}).get('available') == 'true':
        products = [product for product in products if product.get('is_available')]
    logger.info(f"endpoint_get_restaurant_products ::: returning products={[prod.get('id') for prod in products]}")
    return Response(status_code=http200, body=products)


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_create_product(request, session, restaurant_id) -> Response:
    """
    vendor operation, on own restaurant menu only
    """
    actor = request.auth_result
    utils_auth.require_role(actor, Role.VENDOR)
    get_owned_restaurant(session, actor, restaurant_id)
    product = session.products.add_product(build_product(restaurant_id, utils_data.parse_raw_body(request)))
    return Response(status_code=http201, body={'message': 'Product successfully created', 'id': product['id']})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_update_product(request, session, product_id) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.VENDOR)
    get_owned_product(session, actor, product_id)
    product = session.products.update_product(product_id, utils_data.parse_raw_body(request))
    return Response(status_code=http200, body={'message': 'Product was successfully updated', 'product': product})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_delete_product(request, session, product_id) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.VENDOR)
    get_owned_product(session, actor, product_id)
    session.products.delete_product(product_id)
    return Response(status_code=http200, body={'message': 'Product was successfully deleted', 'id': product_id})
