import logging


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger that stays silent by default.

    A NullHandler is attached so nothing is printed unless the application
    configures logging itself.

    Args:
        name: Logger name, typically __name__ from the calling module.

    Returns:
        Configured logger instance.

    Examples:
        Enable debug logging in user code:
            import logging
            logging.basicConfig(level=logging.DEBUG)
            logging.getLogger("att_speech").setLevel(logging.DEBUG)
    """
    module_logger = logging.getLogger(name)
    module_logger.addHandler(logging.NullHandler())
    return module_logger


__all__ = ["get_logger"]
