from typing import Dict, List, Optional

from chalice import Response

from chalicelib.base_class_collection import CollectionBase, is_number
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.constants.statuses import Role
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.logger import logger


def is_positive_quantity(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class Cart(CollectionBase):
    """
    Cart lines keyed by product_id. Without a customer_id the cart lives under the shared 'cart' key
    """
    collection_key = keys_structure.cart_key
    id_field = 'product_id'
    record_type = 'cart_item'

    required_fields_validation = {
        'product_id': lambda x: isinstance(x, str),
        'restaurant_id': lambda x: isinstance(x, str),
        'name': lambda x: isinstance(x, str),
        'price': is_number,
        'quantity': is_positive_quantity,
    }

    def __init__(self, kv, customer_id: Optional[str] = None):
        CollectionBase.__init__(self, kv)
        self.customer_id = customer_id

    def _get_key(self) -> str:
        if self.customer_id is None:
            return self.collection_key
        return keys_structure.customer_cart_key.format(customer_id=self.customer_id)

    def get_cart(self) -> List[Dict]:
        return self.get_all()

    def add_to_cart(self, item: Dict) -> Dict:
        """
        Adding a product already in the cart sums the quantities on the existing line
        """
        self._validate_mandatory_fields(item)
        cart = self.get_all()
        existing = next((line for line in cart if line.get('product_id') == item['product_id']), None)
        if existing is not None:
            existing['quantity'] = existing.get('quantity', 0) + item['quantity']
            line = existing
        else:
            line = dict(item)
            cart.append(line)
        self._save(cart)
        logger.info(f"add_to_cart ::: product_id={item['product_id']} quantity={line['quantity']}")
        return line

    def update_cart_item_quantity(self, product_id, quantity: int) -> None:
        if is_number(quantity) and quantity <= 0:
            self.remove_from_cart(product_id)
            return
        if not is_positive_quantity(quantity):
            raise exceptions.ValidationException(f'Quantity must be a positive integer, got {quantity!r}')
        cart = [
            {**line, 'quantity': quantity} if line.get('product_id') == product_id else line
            for line in self.get_all()
        ]
        self._save(cart)

    def remove_from_cart(self, product_id) -> None:
        self._save([line for line in self.get_all() if line.get('product_id') != product_id])

    def clear_cart(self) -> None:
        self._save([])

    def get_cart_total(self) -> float:
        """
        Lines without a numeric price or quantity count as zero
        """
        total = 0
        for line in self.get_all():
            price, quantity = line.get('price', 0), line.get('quantity', 0)
            if is_number(price) and is_number(quantity):
                total += price * quantity
        return total


def cart_body(cart: Cart) -> Dict:
    return {'items': cart.get_cart(), 'total': cart.get_cart_total()}


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_cart(request, session) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    return Response(status_code=http200, body={'cart': cart_body(session.cart_for(actor.id_))})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_add_item_to_cart(request, session) -> Response:
    """
    Line details are taken from the product, the request only names it and the quantity
    """
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    body = utils_data.parse_raw_body(request)
    product = session.products.get_by_id(body.get('product_id'))
    if product is None:
        raise exceptions.RecordNotFound(f"Product {body.get('product_id')} not found")
    if not product.get('is_available', True):
        raise exceptions.ValidationException(f"Product {product['id']} is not available right now")
    cart = session.cart_for(actor.id_)
    cart.add_to_cart({
        'product_id': product['id'],
        'restaurant_id': product['restaurant_id'],
        'name': product['name'],
        'price': product['price'],
        'quantity': body.get('quantity', 1),
        'image': product.get('image', ''),
    })
    return Response(status_code=http200, body={'cart': cart_body(cart)})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_update_cart_item(request, session, product_id) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    cart = session.cart_for(actor.id_)
    cart.update_cart_item_quantity(product_id, utils_data.parse_raw_body(request).get('quantity'))
    return Response(status_code=http200, body={'cart': cart_body(cart)})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_remove_item_from_cart(request, session, product_id) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    cart = session.cart_for(actor.id_)
    cart.remove_from_cart(product_id)
    return Response(status_code=http200, body={'cart': cart_body(cart)})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_clear_cart(request, session) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.CUSTOMER)
    session.cart_for(actor.id_).clear_cart()
    return Response(status_code=http200, body={'message': 'Cart was successfully cleared'})
