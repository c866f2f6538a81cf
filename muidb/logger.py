import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'off': logging.CRITICAL + 1,
}

_ROOT_NAME = 'muidb'


def _root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    # Prevent duplicate handlers if already configured
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = False
    return root


def set_log_level(level: str) -> None:
    """Set the level of every muidb logger ('debug', 'info', 'warning', 'error' or 'off')."""
    name = level.lower()
    if name not in LEVELS:
        raise ValueError(f"Unknown log level: {level}. Available: {', '.join(LEVELS)}")
    _root_logger().setLevel(LEVELS[name])


def get_logger(name: str) -> logging.Logger:
    _root_logger()
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{_ROOT_NAME}.{name}')
