from stockterm.logging.logger import LogConfig, get_logger, resolve_level, setup_logging

__all__ = ["LogConfig", "get_logger", "resolve_level", "setup_logging"]
