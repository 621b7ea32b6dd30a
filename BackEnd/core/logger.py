"""
Centralized logging configuration for the application.
"""

import logging
import sys


def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
	"""
	Configure and return a logger instance.

	Args:
		name: Logger name ("BackEnd", "FrontEnd" or a module __name__)
		level: Level name such as "DEBUG" or "INFO"

	Returns:
		Configured logger instance
	"""
	logger = logging.getLogger(name)
	log_level = getattr(logging, level.upper(), logging.INFO)
	logger.setLevel(log_level)

	# Avoid adding handlers multiple times
	if logger.handlers:
		for handler in logger.handlers:
			handler.setLevel(log_level)
		return logger

	handler = logging.StreamHandler(sys.stdout)
	handler.setLevel(log_level)

	# Structured format: timestamp | level | module | message
	formatter = logging.Formatter(
		fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
		datefmt="%Y-%m-%d %H:%M:%S",
	)
	handler.setFormatter(formatter)
	logger.addHandler(handler)

	return logger


def configure_logging(config) -> None:
	"""Attach handlers to the package roots using the configured level."""
	for root in ("BackEnd", "FrontEnd"):
		setup_logger(root, config.log_level)
