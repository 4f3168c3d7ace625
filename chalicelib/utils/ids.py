import random
import string
import time
from datetime import datetime, timezone

_BASE36 = string.digits + string.ascii_lowercase


def generate_id(prefix: str = 'id') -> str:
    """
    prefix + epoch milliseconds + 5 random base36 chars, e.g. 'prod-1718000000000-k3x9a'
    Unique enough for a single writer, not collision proof
    """
    suffix = ''.join(random.choice(_BASE36) for _ in range(5))
    return f'{prefix}-{int(time.time() * 1000)}-{suffix}'


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
