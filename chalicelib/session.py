from typing import Dict, List, Optional

from chalicelib import order_lifecycle
from chalicelib.actors import Actor
from chalicelib.carts import Cart
from chalicelib.constants.constants import DEFAULT_PAYMENT_METHOD
from chalicelib.constants.statuses import OrderAction, OrderStatus, RestaurantStatus, Role
from chalicelib.notifications import Notifications
from chalicelib.orders import Orders
from chalicelib.products import Products
from chalicelib.restaurants import Restaurants
from chalicelib.seed import initialize_store, reset_store
from chalicelib.settings import PlatformSettings
from chalicelib.store import KeyValueStore, build_medium
from chalicelib.utils import exceptions
from chalicelib.utils.ids import generate_id, now_iso
from chalicelib.utils.logger import logger
from chalicelib.vendors import PendingVendors

DRIVER_POOLS = ('available', 'active', 'completed', 'all')


class StoreSession:
    """
    Explicit handle on the shared store, created once per process or session and passed to consumers.
    Holds the repositories and the multi-collection workflows of the dashboards.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        self.restaurants = Restaurants(kv)
        self.products = Products(kv)
        self.cart = Cart(kv)
        self.orders = Orders(kv)
        self.pending_vendors = PendingVendors(kv)
        self.settings = PlatformSettings(kv)
        self.notifications = Notifications(kv)

    @classmethod
    def from_environment(cls) -> 'StoreSession':
        return cls(KeyValueStore(build_medium()))

    def initialize(self) -> bool:
        return initialize_store(self.kv)

    def reset(self) -> bool:
        return reset_store(self.kv)

    def cart_for(self, customer_id: Optional[str]) -> Cart:
        return Cart(self.kv, customer_id)

    def place_order(self, actor: Actor, customer_phone: str, delivery_address: str,
                    payment_method: str = DEFAULT_PAYMENT_METHOD, cart: Optional[Cart] = None) -> Dict:
        """
        Snapshots the cart into a new 'placed' order, then clears the cart.
        The two writes are independent, a failure in between leaves the cart as it was.
        """
        if actor.role != Role.CUSTOMER:
            raise exceptions.AccessDenied('Only customers can place orders')
        cart = cart or self.cart_for(actor.id_)
        lines = cart.get_cart()
        if not lines:
            raise exceptions.ValidationException('Cart is empty')
        restaurant_ids = {line.get('restaurant_id') for line in lines}
        if len(restaurant_ids) > 1:
            raise exceptions.ValidationException('Cart contains items from more than one restaurant')
        restaurant_id = restaurant_ids.pop()
        restaurant = self.restaurants.get_restaurant_by_id(restaurant_id)
        if restaurant is None:
            raise exceptions.RecordNotFound(f'Restaurant {restaurant_id} not found')

        created_at = now_iso()
        order = self.orders.add_order({
            'id': self.orders.generate_order_id(),
            'customer_id': actor.id_,
            'customer_name': actor.name,
            'customer_phone': customer_phone,
            'restaurant_id': restaurant['id'],
            'restaurant_name': restaurant.get('name', ''),
            'driver_id': None,
            'driver_name': None,
            'items': [
                {'product_id': line.get('product_id'), 'name': line.get('name'),
                 'price': line.get('price'), 'quantity': line.get('quantity')}
                for line in lines
            ],
            'status': order_lifecycle.INITIAL_STATUS.value,
            'total': cart.get_cart_total(),
            'delivery_address': delivery_address,
            'payment_method': payment_method,
            'created_at': created_at,
            'updated_at': created_at,
        })
        cart.clear_cart()
        self.notifications.notify(restaurant.get('owner_id'), f"New order {order['id']} from {actor.name}")
        logger.info(f"place_order ::: order_id={order['id']} restaurant_id={restaurant['id']} total={order['total']}")
        return order

    def apply_order_action(self, order_id, action, actor: Actor) -> Dict:
        action = OrderAction.coerce(action)
        if action == OrderAction.PLACE:
            raise exceptions.ValidationException('Orders are placed through checkout')
        order = self.orders.get_order_by_id(order_id)
        if order is None:
            raise exceptions.RecordNotFound(f'Order {order_id} not found')
        target = order_lifecycle.resolve_action(action, actor.role)

        driver_id = driver_name = None
        if actor.role == Role.VENDOR:
            owned = {restaurant.get('id') for restaurant in self.restaurants.get_restaurants_by_owner(actor.id_)}
            if order.get('restaurant_id') not in owned:
                raise exceptions.AccessDenied(f'Order {order_id} belongs to another restaurant')
        elif action == OrderAction.PICK_UP:
            driver_id, driver_name = actor.id_, actor.name
        elif order.get('driver_id') != actor.id_:
            raise exceptions.AccessDenied(f'Order {order_id} is assigned to another driver')

        updated = self.orders.update_order_status(order_id, target, driver_id=driver_id, driver_name=driver_name)
        self.notifications.notify(updated.get('customer_id'), f'Your order {order_id} is now {target.value}')
        return updated

    def orders_visible_to(self, actor: Actor, pool: Optional[str] = None) -> List[Dict]:
        if actor.role == Role.CUSTOMER:
            return self.orders.get_orders_by_customer(actor.id_)
        if actor.role == Role.VENDOR:
            owned = [restaurant.get('id') for restaurant in self.restaurants.get_restaurants_by_owner(actor.id_)]
            return self.orders.get_orders_for_vendor(owned)
        if actor.role == Role.DRIVER:
            pool = pool or 'available'
            if pool not in DRIVER_POOLS:
                raise exceptions.ValidationException(f'Unknown pool {pool}, expected one of {DRIVER_POOLS}')
            if pool == 'available':
                return self.orders.get_available_orders_for_driver()
            if pool == 'active':
                return self.orders.get_active_orders_for_driver(actor.id_)
            if pool == 'completed':
                return self.orders.get_completed_orders_for_driver(actor.id_)
            return self.orders.get_orders_by_driver(actor.id_) + self.orders.get_available_orders_for_driver()
        if actor.role == Role.ADMIN:
            return self.orders.get_orders()
        raise exceptions.AccessDenied(f'Unknown role {actor.role}')

    def approve_vendor(self, vendor_id, owner_id: Optional[str] = None) -> Optional[Dict]:
        """
        Approves a pending application and opens an approved restaurant for it
        :return:
        the new restaurant, None if there is no such application
        """
        application = self.pending_vendors.approve_vendor(vendor_id)
        if application is None:
            return None
        restaurant = self.restaurants.add_restaurant({
            'id': generate_id('rest'),
            'name': application.get('name', ''),
            'description': '',
            'cuisine': application.get('cuisine', ''),
            'rating': 0,
            'review_count': 0,
            'delivery_time': '30-40 min',
            'price_range': '₹₹',
            'image': '',
            'address': application.get('address', ''),
            'phone': application.get('phone', ''),
            'is_open': False,
            'owner_id': owner_id or vendor_id,
            'status': RestaurantStatus.APPROVED.value,
        })
        logger.info(f"approve_vendor ::: vendor_id={vendor_id} restaurant_id={restaurant['id']}")
        return restaurant

    def reject_vendor(self, vendor_id) -> Optional[Dict]:
        return self.pending_vendors.reject_vendor(vendor_id)

    def unread_count(self, user_id) -> int:
        return len([n for n in self.notifications.get_notifications(user_id) if not n.get('read')])

    def order_status_summary(self) -> Dict[str, int]:
        """
        Order count per status, for the admin overview
        """
        summary = {status.value: 0 for status in OrderStatus}
        for order in self.orders.get_orders():
            summary[order.get('status')] = summary.get(order.get('status'), 0) + 1
        return summary
