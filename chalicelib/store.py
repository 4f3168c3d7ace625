import json
from typing import Any, Dict, List, Optional

from chalicelib.constants import keys_structure
from chalicelib.constants.constants import STORE_MEDIUM, STORE_NAMESPACE
from chalicelib.utils.db import DynamoDBMedium
from chalicelib.utils.logger import logger, CustomJSONEncoder


class MemoryMedium:
    """
    Process-local persistence medium, raw JSON text per key
    """

    def __init__(self):
        self.items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set(self, key: str, raw_value: str) -> None:
        self.items[key] = raw_value

    def delete(self, key: str) -> None:
        self.items.pop(key, None)


class KeyValueStore:
    """
    Whole-value JSON get/set under namespaced keys.
    Without a medium every operation is a no-op and get() returns None.
    """

    def __init__(self, medium=None, namespace: str = STORE_NAMESPACE):
        self.medium = medium
        self.namespace = namespace

    def _key(self, name: str) -> str:
        return keys_structure.store_key.format(namespace=self.namespace, name=name)

    @property
    def available(self) -> bool:
        return self.medium is not None

    def get(self, name: str) -> Any:
        if self.medium is None:
            return None
        raw_value = self.medium.get(self._key(name))
        if raw_value is None:
            return None
        try:
            return json.loads(raw_value)
        except (TypeError, ValueError) as error:
            logger.warning(f'get ::: malformed value under key={self._key(name)}, treating as absent, {error=}')
            return None

    def _get_index(self) -> List[str]:
        """
        Names written under this namespace, the medium itself is never listed
        """
        index = self.get(keys_structure.key_index_key)
        if not isinstance(index, list):
            return []
        return [name for name in index if isinstance(name, str)]

    def _save_index(self, index: List[str]) -> None:
        self.medium.set(self._key(keys_structure.key_index_key), json.dumps(index))

    def set(self, name: str, value: Any) -> None:
        if self.medium is None:
            return
        self.medium.set(self._key(name), json.dumps(value, cls=CustomJSONEncoder))
        index = self._get_index()
        if name not in index:
            self._save_index(index + [name])
        logger.debug(f'set ::: key={self._key(name)} written')

    def remove(self, name: str) -> None:
        if self.medium is None:
            return
        self.medium.delete(self._key(name))
        index = self._get_index()
        if name in index:
            self._save_index([indexed for indexed in index if indexed != name])

    def clear(self) -> None:
        """
        Removes every key written under this namespace, other namespaces on the same medium are untouched
        """
        if self.medium is None:
            return
        index = self._get_index()
        for name in index:
            self.medium.delete(self._key(name))
        self.medium.delete(self._key(keys_structure.key_index_key))
        logger.info(f'clear ::: namespace={self.namespace} removed {len(index)} keys')


def build_medium(medium_name: str = STORE_MEDIUM, namespace: str = STORE_NAMESPACE):
    if medium_name == 'memory':
        return MemoryMedium()
    if medium_name == 'dynamodb':
        return DynamoDBMedium(namespace)
    if medium_name == 'none':
        return None
    raise ValueError(f'Unknown store medium {medium_name}')
