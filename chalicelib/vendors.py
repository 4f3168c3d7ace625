from typing import Dict, List, Optional

from chalice import Response

from chalicelib.base_class_collection import CollectionBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.constants.statuses import Role, VendorApplicationStatus
from chalicelib.utils import app as utils_app, auth as utils_auth, data as utils_data, exceptions
from chalicelib.utils.logger import logger


class PendingVendors(CollectionBase):
    """
    Vendor applications waiting for an admin decision
    """
    collection_key = keys_structure.pending_vendors_key
    record_type = 'pending_vendor'

    required_fields_validation = {
        'id': lambda x: isinstance(x, str),
        'name': lambda x: isinstance(x, str),
        'email': lambda x: isinstance(x, str),
        'status': lambda x: isinstance(x, str),
    }

    mutable_fields_validation = {
        'status': lambda x: isinstance(x, (str, VendorApplicationStatus)),
    }

    enum_fields = {'status': VendorApplicationStatus}

    def get_pending_vendors(self) -> List[Dict]:
        return self.get_all()

    def add_pending_vendor(self, application: Dict) -> Dict:
        return self.add({'status': VendorApplicationStatus.PENDING.value, **application})

    def _decide(self, vendor_id, status: VendorApplicationStatus) -> Optional[Dict]:
        application = self.get_by_id(vendor_id)
        if application is None:
            logger.info(f"_decide ::: vendor application {vendor_id} not found, nothing to update")
            return None
        if application.get('status') != VendorApplicationStatus.PENDING.value:
            raise exceptions.ValidationException(
                f"Vendor application {vendor_id} is already {application.get('status')}")
        return self.update(vendor_id, {'status': status.value})

    def approve_vendor(self, vendor_id) -> Optional[Dict]:
        return self._decide(vendor_id, VendorApplicationStatus.APPROVED)

    def reject_vendor(self, vendor_id) -> Optional[Dict]:
        return self._decide(vendor_id, VendorApplicationStatus.REJECTED)


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_pending_vendors(request, session) -> Response:
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    return Response(status_code=http200, body=session.pending_vendors.get_pending_vendors())


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_approve_vendor(request, session, vendor_id) -> Response:
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    owner_id = utils_data.parse_raw_body(request).get('owner_id')
    restaurant = session.approve_vendor(vendor_id, owner_id=owner_id)
    if restaurant is None:
        raise exceptions.RecordNotFound(f'Vendor application {vendor_id} not found')
    return Response(status_code=http200, body={'message': 'Vendor was successfully approved',
                                               'restaurant': restaurant})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_reject_vendor(request, session, vendor_id) -> Response:
    utils_auth.require_role(request.auth_result, Role.ADMIN)
    application = session.pending_vendors.reject_vendor(vendor_id)
    if application is None:
        raise exceptions.RecordNotFound(f'Vendor application {vendor_id} not found')
    return Response(status_code=http200, body={'message': 'Vendor was rejected', 'application': application})
