from chalice import Response

from chalicelib.constants.status_codes import http200
from chalicelib.constants.statuses import Role
from chalicelib.utils import app as utils_app, auth as utils_auth


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_overview(request, session) -> Response:
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    return Response(status_code=http200, body={
        'restaurants': len(session.restaurants.get_restaurants()),
        'products': len(session.products.get_products()),
        'pending_vendors': len(session.pending_vendors.filter_by(status='pending')),
        'orders': session.order_status_summary(),
        'settings': session.settings.get_settings(),
    })


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_reset_store(request, session) -> Response:
    """
    Drops every key of the store namespace and seeds the demo data again
    """
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    session.reset()
    return Response(status_code=http200, body={'message': 'Store was reset to demo data'})
