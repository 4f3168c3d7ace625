import functools

from chalice.app import Request

from chalicelib.actors import Actor, get_actor
from chalicelib.constants.statuses import Role
from chalicelib.utils import exceptions as utils_exceptions
from chalicelib.utils.logger import log_request, logger


def get_actor_by_request(request: Request) -> Actor:
    actor_id = (request.headers or {}).get('authorization')
    if not actor_id:
        raise utils_exceptions.NotAuthorizedException('Authorization header is missing')
    return get_actor(actor_id)


def authenticate(func):
    """
    Wrapper for endpoint functions which require actor's authentication,
    the request must be the first argument
    """

    @functools.wraps(func)
    def result_auth(*args, **kwargs):
        request = args[0]
        logger.new_request_id()
        log_request(request)
        actor = get_actor_by_request(request)
        setattr(request, 'auth_result', actor)
        logger.info(f'authenticate ::: SUCCESS, {actor=}, func.__name__ {func.__name__}')
        return func(*args, **kwargs)

    return result_auth


def require_role(actor: Actor, *roles: Role) -> None:
    if actor.role not in roles:
        raise utils_exceptions.AccessDenied(
            f"Role {actor.role.value} don't have permissions to access this resource")
