from copy import deepcopy
from typing import Dict, List, Optional, Type

from chalicelib.constants.statuses import StrEnumBase
from chalicelib.store import KeyValueStore
from chalicelib.utils import exceptions
from chalicelib.utils.logger import logger


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_optional_str(value) -> bool:
    return value is None or isinstance(value, str)


class CollectionBase:
    """
    A flat list of records serialized as a whole under one store key.
    Every mutation reads the entire list, changes it in memory and writes it back.
    """
    collection_key: str = ''
    id_field: str = 'id'
    record_type: str = ''

    required_fields_validation = {}
    mutable_fields_validation = {}
    enum_fields: Dict[str, Type[StrEnumBase]] = {}

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def _get_key(self) -> str:
        """
        Could be re-implemented in child class when the key depends on an owner
        :return:
        store key of the collection
        """
        return self.collection_key

    def _save(self, records: List[Dict]) -> None:
        self.kv.set(self._get_key(), records)

    def get_all(self) -> List[Dict]:
        records = self.kv.get(self._get_key())
        if not isinstance(records, list):
            return []
        clean_records = [record for record in records if isinstance(record, dict)]
        if len(clean_records) != len(records):
            logger.warning(f'get_all ::: {self.record_type} dropped {len(records) - len(clean_records)} '
                           f'malformed records under key={self._get_key()}')
        return clean_records

    def get_by_id(self, id_) -> Optional[Dict]:
        return next((record for record in self.get_all() if record.get(self.id_field) == id_), None)

    def filter_by(self, **criteria) -> List[Dict]:
        return [
            record for record in self.get_all()
            if all(record.get(field) == value for field, value in criteria.items())
        ]

    def _coerce_enum_fields(self, record: Dict) -> None:
        for field, enum_class in self.enum_fields.items():
            if field in record:
                record[field] = enum_class.coerce(record[field]).value

    def _validate_mandatory_fields(self, record: Dict) -> None:
        """
        Raise ValidationException in case if a mandatory field is missing or has a wrong type
        """
        for key, validator_func in self.required_fields_validation.items():
            if validator_func(record.get(key)) is False:
                message = f'Validation error occurred while validating {self.record_type} field={key}'
                logger.error(f"_validate_mandatory_fields ::: {message}")
                raise exceptions.ValidationException(message)

    def _get_validated_update_dict(self, updates: Dict) -> Dict:
        """
        Validates fields for update
        Unknown or invalid fields are removed from the update dict
        :return:
        Clean dict for update
        """
        clean_dict = {}
        for key, value in updates.items():
            validator_func = self.mutable_fields_validation.get(key)
            if validator_func is not None and validator_func(value) is True:
                clean_dict[key] = value
            else:
                logger.warning(f'_get_validated_update_dict ::: {self.record_type} {key=}, {value=} is not valid, '
                               f'removing from update dict..')
        self._coerce_enum_fields(clean_dict)
        return clean_dict

    def add(self, record: Dict) -> Dict:
        record = deepcopy(record)
        self._coerce_enum_fields(record)
        self._validate_mandatory_fields(record)
        records = self.get_all()
        records.append(record)
        self._save(records)
        logger.info(f"add ::: {self.record_type} {self.id_field}={record.get(self.id_field)} successfully added")
        return record

    def update(self, id_, updates: Dict) -> Optional[Dict]:
        """
        Shallow merge of updates over the record with the given id.
        Returns the merged record, or None when there is no such record (the collection is left untouched)
        """
        clean_dict = self._get_validated_update_dict(updates)
        records = self.get_all()
        for index, record in enumerate(records):
            if record.get(self.id_field) == id_:
                records[index] = {**record, **clean_dict}
                self._save(records)
                logger.info(f"update ::: {self.record_type} {self.id_field}={id_} updated fields={list(clean_dict)}")
                return records[index]
        logger.info(f"update ::: {self.record_type} {self.id_field}={id_} not found, nothing to update")
        return None

    def remove(self, id_) -> bool:
        records = self.get_all()
        remaining = [record for record in records if record.get(self.id_field) != id_]
        self._save(remaining)
        return len(remaining) != len(records)
