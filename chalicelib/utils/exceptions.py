__all__ = ["NotAuthorizedException", "AccessDenied", "RecordNotFound", "NumberOfRetriesExceeded",
           "ValidationException", "IllegalStatusTransition"]


class NotAuthorizedException(Exception):
    LEVEL = 'warning'


# Generic Exceptions
class AccessDenied(Exception):
    LEVEL = 'warning'


# Store exceptions
class RecordNotFound(Exception):
    LEVEL = 'info'


# DB Performance Exception
class NumberOfRetriesExceeded(Exception):
    pass


# Validations exceptions
class ValidationException(Exception):
    LEVEL = 'warning'


# Order lifecycle exceptions
class IllegalStatusTransition(Exception):
    LEVEL = 'warning'

    def __init__(self, order_id, current_status, target_status):
        self.order_id = order_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(f'Order {order_id} can not move from {current_status} to {target_status}')
