"""
Logging setup.

Modules log through `logging.getLogger(__name__)`; this only wires the root
handler once, when the application is created.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging. Safe to call more than once."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("career_guide").setLevel(level.upper())
