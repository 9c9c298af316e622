from .logger import JsonFormatter, RequestContextFilter, setup_logging

__all__ = ["JsonFormatter", "RequestContextFilter", "setup_logging"]
