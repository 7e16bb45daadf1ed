"""Logging utilities for twapi modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers
    
    Args:
        name: Logger name (e.g. 'twapi.upload')
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)
    
    return logger
