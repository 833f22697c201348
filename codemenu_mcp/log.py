import logging
import sys

LOGGER_NAME = "codemenu_mcp"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the project logger.

    Output goes to stderr because stdout carries MCP protocol frames when
    the server runs over stdio.
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
