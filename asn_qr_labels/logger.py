"""
Structured logging configuration using structlog.
"""

# Standard Library
import logging
import sys
from typing import Any

# PIP3 modules
import structlog


#============================================
def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
	"""
	Configure structured logging for the CLI and the HTTP service.

	Args:
		level: Standard library level name.
		json_output: Render JSON lines instead of console output.
	"""
	logging.basicConfig(
		format="%(message)s",
		stream=sys.stderr,
		level=getattr(logging, level.upper()),
	)

	shared_processors = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_log_level,
		structlog.stdlib.add_logger_name,
		structlog.processors.TimeStamper(fmt="iso"),
		structlog.processors.StackInfoRenderer(),
	]
	if json_output:
		processors = shared_processors + [
			structlog.processors.format_exc_info,
			structlog.processors.JSONRenderer(),
		]
	else:
		processors = shared_processors + [
			structlog.dev.ConsoleRenderer(),
		]

	structlog.configure(
		processors=processors,
		wrapper_class=structlog.stdlib.BoundLogger,
		context_class=dict,
		logger_factory=structlog.stdlib.LoggerFactory(),
		cache_logger_on_first_use=True,
	)


#============================================
def get_logger(name: str) -> Any:
	"""
	Get a structured logger.

	Example:
		>>> logger = get_logger(__name__)
		>>> logger.info("document_generated", pages=2, labels=378)
	"""
	return structlog.get_logger(name)
