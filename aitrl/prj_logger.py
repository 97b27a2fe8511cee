import sys
import time
import logging
import inspect
from functools import wraps


def get_logs(loggername):
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger = logging.getLogger(loggername)
                start_time = time.perf_counter()
                logger.debug(f"Entering: {func.__name__}")
                output = await func(*args, **kwargs)
                logger.debug(f"Exiting: {func.__name__}")
                elapsed_time = time.perf_counter() - start_time
                logger.debug(f"{func.__name__} completed in {elapsed_time:.6f} seconds")
                return output
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(loggername)
            start_time = time.perf_counter()
            logger.debug(f"Entering: {func.__name__}")
            output = func(*args, **kwargs)
            logger.debug(f"Exiting: {func.__name__}")
            elapsed_time = time.perf_counter() - start_time
            logger.debug(f"{func.__name__} completed in {elapsed_time:.6f} seconds")
            return output
        return wrapper
    return decorator


class ProjectLogger:
    """Attaches a run log file (always DEBUG) and a console stream to the assessor logger."""

    FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    CONSOLE_FORMAT = '%(name)s - %(levelname)s - %(message)s'

    def __init__(self, name, log_file, level=logging.DEBUG):
        self.log_file = log_file
        self.level = level
        self.logger = logging.getLogger(name)

    def config(self):
        self.logger.setLevel(logging.DEBUG)

        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(self.FILE_FORMAT))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.level)
        console_handler.setFormatter(logging.Formatter(self.CONSOLE_FORMAT))

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)
        return self.logger
