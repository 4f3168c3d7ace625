from typing import Dict, List, Optional

from chalice import Response

from chalicelib.base_class_collection import CollectionBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import app as utils_app, auth as utils_auth, exceptions
from chalicelib.utils.ids import generate_id, now_iso


class Notifications(CollectionBase):
    collection_key = keys_structure.notifications_key
    record_type = 'notification'

    required_fields_validation = {
        'id': lambda x: isinstance(x, str),
        'user_id': lambda x: isinstance(x, str),
        'message': lambda x: isinstance(x, str),
        'read': lambda x: isinstance(x, bool),
    }

    mutable_fields_validation = {
        'read': lambda x: isinstance(x, bool),
    }

    def get_notifications(self, user_id) -> List[Dict]:
        return self.filter_by(user_id=user_id)

    def add_notification(self, notification: Dict) -> Dict:
        return self.add(notification)

    def notify(self, user_id, message: str) -> Dict:
        return self.add_notification({
            'id': generate_id('notif'),
            'user_id': user_id,
            'message': message,
            'read': False,
            'created_at': now_iso(),
        })

    def mark_notification_read(self, notification_id) -> Optional[Dict]:
        return self.update(notification_id, {'read': True})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_get_notifications(request, session) -> Response:
    actor = request.auth_result
    notifications = session.notifications.get_notifications(actor.id_)
    return Response(status_code=http200, body={'notifications': notifications,
                                               'unread': session.unread_count(actor.id_)})


@utils_app.request_exception_handler
@utils_app.log_start_finish
@utils_auth.authenticate
def endpoint_mark_notification_read(request, session, notification_id) -> Response:
    notification = session.notifications.get_by_id(notification_id)
    if notification is None or notification.get('user_id') != request.auth_result.id_:
        raise exceptions.RecordNotFound(f'Notification {notification_id} not found')
    return Response(status_code=http200, body=session.notifications.mark_notification_read(notification_id))
