"""
Centralized Logging Configuration for QuadLab

This module provides structured logging with optional JSON formatting.
Log output goes to stderr so that reports written to stdout stay clean.
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pathlib import Path


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON

        Args:
            record: Log record

        Returns:
            JSON string
        """
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add extra fields if present
        if hasattr(record, 'service'):
            log_data['service'] = record.service

        if hasattr(record, 'component'):
            log_data['component'] = record.component

        if hasattr(record, 'metrics'):
            log_data['metrics'] = record.metrics

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    service_name: str,
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False
) -> logging.Logger:
    """
    Set up logging for a service

    Args:
        service_name: Root logger name (e.g., 'quadlab')
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path for a JSON-lines copy of the log
                  (None for stderr only)
        json_format: JSON (True) or simple text (False) on stderr

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper())
    logger = logging.getLogger(service_name)
    logger.setLevel(level)

    # Close and remove existing handlers (a previous log file included)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Log files are always JSON lines
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


class ServiceLogger:
    """
    Wrapper for service-specific logging with extra context
    """

    def __init__(self, service_name: str, component: Optional[str] = None):
        """
        Initialize service logger

        Args:
            service_name: Name of the service
            component: Optional component name within service
        """
        name = f"{service_name}.{component}" if component else service_name
        self.logger = logging.getLogger(name)
        self.service_name = service_name
        self.component = component

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Add service context to log extra fields"""
        context = {'service': self.service_name}
        if self.component:
            context['component'] = self.component
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message"""
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message"""
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message"""
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message"""
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


class MetricsLogger:
    """
    Log per-method accuracy figures as structured gauge records
    """

    def __init__(self, service_name: str):
        self.logger = logging.getLogger(f"{service_name}.metrics")

    def log_gauge(self, name: str, value: float, labels: Optional[Dict[str, str]] = None):
        """
        Log a gauge value

        Args:
            name: Metric name
            value: Metric value
            labels: Optional metric labels (e.g. {'method': 'simpson_runge'})
        """
        metric_data = {'metric': name, 'value': value}
        if labels:
            metric_data['labels'] = labels

        self.logger.info(json.dumps(metric_data), extra={'metrics': metric_data})
