from enum import Enum

from chalicelib.utils.exceptions import ValidationException


class StrEnumBase(str, Enum):

    @classmethod
    def coerce(cls, value):
        """
        Returns the member for value (member or its string)
        Raise ValidationException for anything outside the enumeration
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationException(f'{value!r} is not a valid {cls.__name__}, '
                                      f'expected one of {[member.value for member in cls]}')


class OrderStatus(StrEnumBase):
    PLACED = 'placed'
    ACCEPTED = 'accepted'
    PREPARING = 'preparing'
    READY = 'ready'
    PICKED = 'picked'
    DELIVERED = 'delivered'
    REJECTED = 'rejected'


class RestaurantStatus(StrEnumBase):
    APPROVED = 'approved'
    PENDING = 'pending'
    REJECTED = 'rejected'


class VendorApplicationStatus(StrEnumBase):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class Role(StrEnumBase):
    CUSTOMER = 'customer'
    VENDOR = 'vendor'
    DRIVER = 'driver'
    ADMIN = 'admin'


class OrderAction(StrEnumBase):
    PLACE = 'place'
    ACCEPT = 'accept'
    REJECT = 'reject'
    START_PREPARING = 'start_preparing'
    MARK_READY = 'mark_ready'
    PICK_UP = 'pick_up'
    DELIVER = 'deliver'
