import json
import os
from copy import deepcopy
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from logging import setLoggerClass, Logger, NOTSET, getLogger, StreamHandler, Formatter
from uuid import uuid4

from chalice.app import Request


class CustomLogger(Logger):
    """
    Prefixes every record with the id of the request (or store session)
    currently being served
    """

    def __init__(self, name, level=NOTSET):
        self.current_request_id = None
        super(CustomLogger, self).__init__(name, level)

    def _log(self, level, msg, args, **kwargs):
        super(CustomLogger, self)._log(level, f'[{self.current_request_id}] : {msg}', args, **kwargs)

    def new_request_id(self) -> str:
        self.current_request_id = str(uuid4()).split('-')[4]
        return self.current_request_id


def conf_logger(level):
    setLoggerClass(CustomLogger)
    logger_ = getLogger('food_delivery')
    console_handler = StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    if logger_.hasHandlers():
        logger_.handlers.clear()
    logger_.addHandler(console_handler)
    logger_.setLevel(level)
    return logger_


logger = conf_logger(os.environ.get('LOG_LEVEL', 'DEBUG').upper())


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, value):
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, date):
            return str(value)
        if isinstance(value, Decimal):
            return float(value)
        return super(CustomJSONEncoder, self).default(value)


def log_request(request: Request):
    request_dict = deepcopy(request.to_dict())
    request_dict.get('headers', {}).pop('authorization', None)
    logger.info(f"Request: {json.dumps(request_dict, cls=CustomJSONEncoder)}")
    if request_dict.get('headers', {}).get('content-type', '') == 'application/json':
        logger.debug(f"Request body: {str(request.raw_body)}")


def log_exception(error: Exception, status_code: int = 400, msg: str = "", *args, **kwargs):
    allowed_log_levels = {
        'info': logger.info,
        'warning': logger.warning,
        'debug': logger.debug,
        'error': logger.error,
        'exception': logger.exception,
    }
    level = getattr(error, 'LEVEL', 'exception')
    log_level = level if level in allowed_log_levels else 'exception'
    allowed_log_levels[log_level](json.dumps({
        'error': str(error),
        'exception': error.__class__.__name__,
        'message': str(msg),
        'level': log_level,
        'status_code': status_code,
        'args': args,
        'kwargs': kwargs
    }, cls=CustomJSONEncoder))
