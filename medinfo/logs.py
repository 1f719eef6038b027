"""
Structured logging module for the MedInfo assistant.

This module provides structured logging with component naming and execution timing.
It supports both JSON output for file logs and colored output for console logs.
"""

import logging
import structlog
import os
import time
import functools
from logging.handlers import RotatingFileHandler
from datetime import datetime

from medinfo.config import get_settings

# Global flag to prevent multiple initializations
_logging_configured = False

# ANSI color codes for console output
COLORS = {
    'blue': '\033[34;1m',      # Blue bold for component paths
    'green': '\033[32m',       # Green for success
    'red': '\033[31m',         # Red for failures and errors
    'magenta': '\033[35m',     # Magenta for durations/latency
    'gray': '\033[2;37m',      # Dim gray for correlation IDs
    'yellow': '\033[33m',      # Yellow for warnings
    'reset': '\033[0m',        # Reset color
}

# Icons for accessibility
ICONS = {
    'success': '✓',
    'fail': '✗',
    'warning': '!'
}


def add_component_context(_, __, event_dict):
    """
    Add component context to log events.

    Creates a formatted component path like [Component > SubComponent]
    based on component and subcomponent fields.
    """
    if 'component' in event_dict and 'subcomponent' in event_dict:
        event_dict['component_path'] = f"[{event_dict['component']} > {event_dict['subcomponent']}]"
    elif 'component' in event_dict:
        event_dict['component_path'] = f"[{event_dict['component']}]"
    return event_dict


def colorize_console_output(_, __, event_dict):
    """
    Format log events with colors for console output.

    Works with ProcessorFormatter and returns a formatted string.
    """
    event_data = event_dict.copy()

    timestamp = event_data.get('timestamp', '')
    level = event_data.get('level', '').upper()
    event = event_data.get('event', '')

    output_parts = [f"{timestamp} [{level}]"]

    if 'component_path' in event_data:
        output_parts.append(f"{COLORS['blue']}{event_data['component_path']}{COLORS['reset']}")

    output_parts.append(str(event))

    if 'execution_time' in event_data:
        output_parts.append(f"{COLORS['magenta']}(took {event_data['execution_time']}){COLORS['reset']}")

    skip_keys = {
        'timestamp', 'level', 'event', 'component_path', 'execution_time',
        'component', 'subcomponent', 'exc_info', 'exception',
    }

    for key, value in event_data.items():
        if key in skip_keys or key.startswith('_'):
            continue

        if key == 'status' and value == 'success':
            output_parts.append(f"{key}={COLORS['green']}{ICONS['success']} {value}{COLORS['reset']}")
        elif key == 'status' and value in ('failed', 'error'):
            output_parts.append(f"{key}={COLORS['red']}{ICONS['fail']} {value}{COLORS['reset']}")
        elif key == 'status' and value == 'warning':
            output_parts.append(f"{key}={COLORS['yellow']}{ICONS['warning']} {value}{COLORS['reset']}")
        elif key in ('error', 'exception_message'):
            output_parts.append(f"{key}={COLORS['red']}{value}{COLORS['reset']}")
        elif key.endswith('_id'):
            output_parts.append(f"{key}={COLORS['gray']}{value}{COLORS['reset']}")
        else:
            output_parts.append(f"{key}={value}")

    rendered = " ".join(output_parts)
    if 'exception' in event_data:
        rendered += "\n" + str(event_data['exception'])
    return rendered


def _resolve_log_dir(log_dir: str) -> str:
    if os.path.isabs(log_dir):
        return log_dir
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(project_root, log_dir)


def _configure_logging_once():
    """
    Configure logging only once to prevent duplicate handlers.

    Uses ProcessorFormatter for dual output:
    - Console: Colored, human-readable format
    - File: Pure JSON format for structured logging
    """
    global _logging_configured

    if _logging_configured:
        return

    settings = get_settings()
    level = logging.DEBUG if settings.debug_mode else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_component_context,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    foreign_pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_component_context,
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to prevent duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=colorize_console_output,
            foreign_pre_chain=foreign_pre_chain,
        )
    )
    root_logger.addHandler(console_handler)

    logs_dir = _resolve_log_dir(settings.log_dir)
    os.makedirs(logs_dir, exist_ok=True)
    log_file = os.path.join(logs_dir, f"medinfo_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

    file_handler = RotatingFileHandler(
        filename=log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=foreign_pre_chain,
        )
    )
    root_logger.addHandler(file_handler)

    # Silence specific noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(log_name: str = __name__):
    """
    Get a configured logger that logs to both console and file.

    Args:
        log_name: Logger name

    Returns:
        Configured structlog logger
    """
    _configure_logging_once()
    return structlog.wrap_logger(logging.getLogger(log_name))


def get_component_logger(component: str):
    """
    Get a logger pre-configured with a component name.

    Args:
        component: Component name to bind to the logger

    Returns:
        Logger with component name bound
    """
    logger = get_logger(component)
    return logger.bind(component=component)


def time_execution(component: str, operation: str):
    """
    Decorator to log execution time of a coroutine function.

    Args:
        component: Component name
        operation: Operation name (subcomponent)

    Example:
        @time_execution("RemoteMedicineResolver", "Lookup")
        async def lookup(self, medicine_name: str):
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if args and hasattr(args[0], 'logger'):
                logger = args[0].logger
            else:
                logger = get_component_logger(component)

            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                execution_time = time.time() - start_time
                logger.info(
                    f"{func.__name__} completed",
                    component=component,
                    subcomponent=operation,
                    execution_time=f"{execution_time:.3f}s"
                )

        return wrapper

    return decorator


def banner(message: str):
    """Log a big banner for visibility in terminal logs."""
    logger = get_logger(__name__)
    line = "#" * 26
    logger.info(f"\n{line}\n### {message} ###\n{line}\n")


def bind_turn(**values):
    """
    Bind values (e.g. turn_id) to every log event emitted in the current
    task until the returned context manager exits.
    """
    return structlog.contextvars.bound_contextvars(**values)
