from chalice import Chalice

from chalicelib import admin, carts, notifications, orders, products, restaurants, settings, vendors
from chalicelib.session import StoreSession

app = Chalice(app_name='food-delivery-dashboards')

app.debug = True

session = StoreSession.from_environment()
session.initialize()


@app.route('/health-check', methods=['GET'], cors=True)
def health_check():
    return {'health': 'check'}


# RESTAURANTS
@app.route('/restaurants', methods=['GET'], cors=True)
def get_restaurants():
    """
    approved restaurants, ?owner_id= for a vendor's restaurants, ?all=true for every status
    """
    return restaurants.endpoint_get_restaurants(app.current_request, session)


@app.route('/restaurants/{restaurant_id}', methods=['GET'], cors=True)
def get_restaurant_by_id(restaurant_id):
    return restaurants.endpoint_get_restaurant_by_id(app.current_request, session, restaurant_id)


@app.route('/restaurants/{restaurant_id}', methods=['PUT'], cors=True)
def update_restaurant(restaurant_id):
    """
    vendor updates own restaurant, admin updates any restaurant and its status
    """
    return restaurants.endpoint_update_restaurant(app.current_request, session, restaurant_id)


# PRODUCTS
@app.route('/restaurants/{restaurant_id}/products', methods=['GET'], cors=True)
def get_restaurant_products(restaurant_id):
    return products.endpoint_get_restaurant_products(app.current_request, session, restaurant_id)


@app.route('/restaurants/{restaurant_id}/products', methods=['POST'], cors=True)
def create_product(restaurant_id):
    """
    vendor operation
    """
    return products.endpoint_create_product(app.current_request, session, restaurant_id)


@app.route('/products/{product_id}', methods=['PUT'], cors=True)
def update_product(product_id):
    """
    vendor operation
    """
    return products.endpoint_update_product(app.current_request, session, product_id)


@app.route('/products/{product_id}', methods=['DELETE'], cors=True)
def delete_product(product_id):
    """
    vendor operation
    """
    return products.endpoint_delete_product(app.current_request, session, product_id)


# CART
@app.route('/cart', methods=['GET'], cors=True)
def get_cart():
    return carts.endpoint_get_cart(app.current_request, session)


@app.route('/cart', methods=['POST'], cors=True)
def add_item_to_cart():
    return carts.endpoint_add_item_to_cart(app.current_request, session)


@app.route('/cart/{product_id}', methods=['PUT'], cors=True)
def update_cart_item(product_id):
    return carts.endpoint_update_cart_item(app.current_request, session, product_id)


@app.route('/cart/{product_id}', methods=['DELETE'], cors=True)
def remove_item_from_cart(product_id):
    return carts.endpoint_remove_item_from_cart(app.current_request, session, product_id)


@app.route('/cart', methods=['DELETE'], cors=True)
def clear_cart():
    return carts.endpoint_clear_cart(app.current_request, session)


# ORDERS
@app.route('/orders', methods=['GET'], cors=True)
def get_orders():
    """
    customer gets own orders
    vendor gets orders of own restaurants
    driver gets ?pool=available|active|completed|all
    admin gets every order
    """
    return orders.endpoint_get_orders(app.current_request, session)


@app.route('/orders', methods=['POST'], cors=True)
def create_order():
    """
    customer checkout from the cart
    """
    return orders.endpoint_create_order(app.current_request, session)


@app.route('/orders/{order_id}', methods=['GET'], cors=True)
def get_order_by_id(order_id):
    return orders.endpoint_get_order_by_id(app.current_request, session, order_id)


@app.route('/orders/{order_id}/{action}', methods=['POST'], cors=True)
def order_action(order_id, action):
    """
    accept, reject, start_preparing, mark_ready (vendor)
    pick_up, deliver (driver)
    """
    return orders.endpoint_order_action(app.current_request, session, order_id, action)


# VENDORS
@app.route('/vendors/pending', methods=['GET'], cors=True)
def get_pending_vendors():
    """
    admin operation
    """
    return vendors.endpoint_get_pending_vendors(app.current_request, session)


@app.route('/vendors/{vendor_id}/approve', methods=['POST'], cors=True)
def approve_vendor(vendor_id):
    """
    admin operation
    """
    return vendors.endpoint_approve_vendor(app.current_request, session, vendor_id)


@app.route('/vendors/{vendor_id}/reject', methods=['POST'], cors=True)
def reject_vendor(vendor_id):
    """
    admin operation
    """
    return vendors.endpoint_reject_vendor(app.current_request, session, vendor_id)


# SETTINGS
@app.route('/settings', methods=['GET'], cors=True)
def get_settings():
    return settings.endpoint_get_settings(app.current_request, session)


@app.route('/settings', methods=['PUT'], cors=True)
def update_settings():
    """
    admin operation
    """
    return settings.endpoint_update_settings(app.current_request, session)


# NOTIFICATIONS
@app.route('/notifications', methods=['GET'], cors=True)
def get_notifications():
    return notifications.endpoint_get_notifications(app.current_request, session)


@app.route('/notifications/{notification_id}/read', methods=['POST'], cors=True)
def mark_notification_read(notification_id):
    return notifications.endpoint_mark_notification_read(app.current_request, session, notification_id)


# ADMIN
@app.route('/admin/overview', methods=['GET'], cors=True)
def get_overview():
    return admin.endpoint_get_overview(app.current_request, session)


@app.route('/store/reset', methods=['POST'], cors=True)
def reset_store():
    return admin.endpoint_reset_store(app.current_request, session)
