'''
Define custom exception handling
'''

import inspect
import logging
import traceback
from functools import wraps
from pathlib import Path


def exception_logger(loggername, default=None, level=logging.WARNING):
    '''Log any exception raised by the wrapped callable and return `default` instead.

    Works for both plain and coroutine functions. A callable `default` is called
    with no arguments so each failure gets a fresh value (e.g. `default=dict`).
    '''
    def _fallback():
        return default() if callable(default) else default

    def _log(func, e):
        ce = CustomException(e)
        logger = logging.getLogger(loggername)
        logger.log(level, f"{func.__name__} failed: {ce.error_message}")

    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log(func, e)
                    return _fallback()
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log(func, e)
                return _fallback()
        return wrapper
    return decorator


def get_error_message(error, error_type, tb):
    if tb is None:
        return f"{error_type}:{error}"
    return f"{error_type}:{error} occurred in {tb.name} (line {tb.lineno}) of {Path(tb.filename).name}"


class CustomException(Exception):

    def __init__(self, error):
        super().__init__(error)
        # innermost frame is where the error was actually raised
        frames = traceback.extract_tb(error.__traceback__)
        self.tb = frames[-1] if frames else None
        self.error_type = type(error).__name__
        self.error_message = get_error_message(error, self.error_type, self.tb)

    def __str__(self):
        return self.error_message


class ConfigurationError(Exception):
    '''Raised for caller errors (bad config, unknown provider, missing columns).'''
