"""
Logging configuration for odm_wiring

Log lines written while an element is being parsed are prefixed with tree
characters, one level per nested element, so a load reads as a tree:

     DEBUG <mapping-converter>
     DEBUG ├──Registered 'mappingContext' (odm.mapping.MongoMappingContext)
     DEBUG ├──<bean>
     DEBUG │   ├──Registered 'app.convert.DateConverter#0' (...)
"""

import logging
import sys
from contextlib import contextmanager

PIPE = "│   "
BRANCH = "├──"


class ElementDepth:
    """Nesting depth of the element currently being parsed"""

    _depth = 0

    @classmethod
    def enter(cls) -> None:
        cls._depth += 1

    @classmethod
    def leave(cls) -> None:
        if cls._depth > 0:
            cls._depth -= 1

    @classmethod
    def reset(cls) -> None:
        """Back to the document root (used by tests)"""
        cls._depth = 0

    @classmethod
    def prefix(cls) -> str:
        """Tree prefix for a log line at the current depth"""
        if cls._depth == 0:
            return ""
        return PIPE * (cls._depth - 1) + BRANCH


class IndentLogger:
    """Logger wrapper that prefixes messages with the element depth"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str) -> None:
        self._logger.debug(ElementDepth.prefix() + msg)

    def info(self, msg: str) -> None:
        self._logger.info(ElementDepth.prefix() + msg)

    def warning(self, msg: str) -> None:
        self._logger.warning(ElementDepth.prefix() + msg)

    def error(self, msg: str) -> None:
        self._logger.error(ElementDepth.prefix() + msg)

    @contextmanager
    def element(self, tag: str):
        """
        Log the element tag, then nest everything logged inside the block

        Args:
            tag: Element description, e.g. "<bean>"
        """
        self.debug(tag)
        ElementDepth.enter()
        try:
            yield
        finally:
            ElementDepth.leave()


def setup_logging(level=logging.INFO) -> None:
    """
    Send odm_wiring log output to stderr

    Args:
        level: Logging level (default: INFO)
    """
    base_logger = logging.getLogger("odm_wiring")
    base_logger.setLevel(level)
    base_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)8s %(message)s"))
    base_logger.addHandler(handler)


logger = IndentLogger(logging.getLogger("odm_wiring"))
