from typing import Dict

from chalicelib.constants.statuses import Role
from chalicelib.utils import exceptions


class Actor:
    """
    Identity record handed over by the login collaborator: {id, email, name, role}.
    Credentials are never seen or stored here.
    """

    def __init__(self, id_: str, email: str, name: str, role):
        self.id_ = id_
        self.email = email
        self.name = name
        self.role: Role = Role.coerce(role)

    def to_dict(self) -> Dict:
        return {'id': self.id_, 'email': self.email, 'name': self.name, 'role': self.role.value}

    def __repr__(self):
        return f'Actor(id={self.id_}, role={self.role.value})'


# Demo accounts of the login screen
DEMO_ACTORS: Dict[str, Actor] = {
    actor.id_: actor for actor in [
        Actor('customer1', 'customer@example.com', 'John Doe', Role.CUSTOMER),
        Actor('customer2', 'jane@example.com', 'Jane Smith', Role.CUSTOMER),
        Actor('vendor1', 'vendor@example.com', 'Pizza Palace', Role.VENDOR),
        Actor('vendor2', 'restaurant@example.com', 'Burger Joint', Role.VENDOR),
        Actor('driver1', 'driver@example.com', 'Mike Johnson', Role.DRIVER),
        Actor('driver2', 'delivery@example.com', 'Sarah Wilson', Role.DRIVER),
        Actor('admin1', 'admin@example.com', 'System Admin', Role.ADMIN),
        Actor('admin2', 'superadmin@example.com', 'Super Admin', Role.ADMIN),
    ]
}


def get_actor(actor_id) -> Actor:
    try:
        return DEMO_ACTORS[actor_id]
    except KeyError:
        raise exceptions.NotAuthorizedException(f'Unknown actor {actor_id}')
