from typing import Dict, List, Optional

from chalice import Response

from chalicelib.base_class_collection import CollectionBase, is_number
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.constants.statuses import RestaurantStatus, Role
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.logger import logger


class Restaurants(CollectionBase):
    collection_key = keys_structure.restaurants_key
    record_type = 'restaurant'

    required_fields_validation = {
        'id': lambda x: isinstance(x, str),
        'name': lambda x: isinstance(x, str),
        'owner_id': lambda x: isinstance(x, str),
        'status': lambda x: isinstance(x, str),
    }

    mutable_fields_validation = {
        'name': lambda x: isinstance(x, str),
        'description': lambda x: isinstance(x, str),
        'cuisine': lambda x: isinstance(x, str),
        'rating': is_number,
        'review_count': lambda x: isinstance(x, int),
        'delivery_time': lambda x: isinstance(x, str),
        'price_range': lambda x: isinstance(x, str),
        'image': lambda x: isinstance(x, str),
        'address': lambda x: isinstance(x, str),
        'phone': lambda x: isinstance(x, str),
        'is_open': lambda x: isinstance(x, bool),
        'status': lambda x: isinstance(x, (str, RestaurantStatus)),
    }

    enum_fields = {'status': RestaurantStatus}

    def get_restaurants(self) -> List[Dict]:
        return self.get_all()

    def get_restaurant_by_id(self, restaurant_id) -> Optional[Dict]:
        return self.get_by_id(restaurant_id)

    def get_restaurants_by_owner(self, owner_id) -> List[Dict]:
        return self.filter_by(owner_id=owner_id)

    def get_listed_restaurants(self) -> List[Dict]:
        """
        Restaurants customers can browse
        """
        return self.filter_by(status=RestaurantStatus.APPROVED.value)

    def add_restaurant(self, restaurant: Dict) -> Dict:
        return self.add(restaurant)

    def update_restaurant(self, restaurant_id, updates: Dict) -> Optional[Dict]:
        return self.update(restaurant_id, updates)


def get_owned_restaurant(session, actor, restaurant_id) -> Dict:
    """
    Restaurant the actor may manage: vendors only their own, admin any
    """
    restaurant = session.restaurants.get_restaurant_by_id(restaurant_id)
    if restaurant is None:
        raise exceptions.RecordNotFound(f'Restaurant {restaurant_id} not found')
    if actor.role == Role.VENDOR and restaurant.get('owner_id') != actor.id_:
        raise exceptions.AccessDenied(f'Restaurant {restaurant_id} belongs to another vendor')
    return restaurant


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_get_restaurants(request, session) -> Response:
    qp = request.query_params or {}
    if qp.get('owner_id'):
        restaurants = session.restaurants.get_restaurants_by_owner(qp['owner_id'])
    elif qp.get('all') == 'true':
        restaurants = session.restaurants.get_restaurants()
    else:
        restaurants = session.restaurants.get_listed_restaurants()
    logger.info(f"endpoint_get_restaurants ::: returning restaurants={[rest.get('id') for rest in restaurants]}")
    return Response(status_code=http200, body=restaurants)


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_get_restaurant_by_id(request, session, restaurant_id) -> Response:
    restaurant = session.restaurants.get_restaurant_by_id(restaurant_id)
    if restaurant is None:
        raise exceptions.RecordNotFound(f'Restaurant {restaurant_id} not found')
    return Response(status_code=http200, body=restaurant)


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_update_restaurant(request, session, restaurant_id) -> Response:
    actor = request.auth_result
    utils_auth.require_role(actor, Role.VENDOR, Role.ADMIN)
    get_owned_restaurant(session, actor, restaurant_id)
    updates = utils_data.parse_raw_body(request)
    if actor.role == Role.VENDOR:
        # approval status is an admin decision
        updates.pop('status', None)
    restaurant = session.restaurants.update_restaurant(restaurant_id, updates)
    return Response(status_code=http200, body={'message': 'Restaurant was successfully updated',
                                               'restaurant': restaurant})
