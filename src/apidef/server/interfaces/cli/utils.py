import json
import logging
import logging.handlers
import os
import sys
import traceback
from pathlib import Path
from typing import Any

import click

from apidef.sdk.telemetry import configure_tracing
from apidef.server.core.config import (
    LoggingConfigModel,
    TracingConfigModel,
    load_service_config,
)
from apidef.server.service import APIService


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Args:
        env_var: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
        False otherwise
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(
    debug: bool = False,
    log_file: Path | None = None,
    log_level: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure logging for all modules.

    Args:
        debug: Whether to enable debug logging (overrides log_level if True)
        log_file: Optional path to log file for persistent logging
        log_level: Log level string ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        max_bytes: Maximum log file size in bytes before rotation (default: 10MB)
        backup_count: Number of rotated log files to keep (default: 5)
    """
    if not debug:
        debug = get_env_flag("APIDEF_DEBUG")

    if debug:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, warn but continue
            print(f"Warning: Failed to setup file logging to {log_file}: {e}", file=sys.stderr)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(simple_formatter)
    root_logger.addHandler(stream_handler)

    for logger_name in logging.root.manager.loggerDict:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


def configure_logging_from_config(logging_config: LoggingConfigModel, debug: bool = False) -> None:
    """Configure logging from the ``logging`` section of the service config.

    This is the canonical way to setup logging for all CLI commands.
    """
    if not logging_config.enabled:
        configure_logging(debug=debug)
        return

    configure_logging(
        debug=debug,
        log_file=Path(logging_config.path) if logging_config.path else None,
        log_level=logging_config.level,
        max_bytes=logging_config.max_bytes,
        backup_count=logging_config.backup_count,
    )


def configure_tracing_from_config(tracing_config: TracingConfigModel) -> None:
    configure_tracing(
        enabled=tracing_config.enabled,
        endpoint=tracing_config.endpoint,
        console_export=tracing_config.console_export,
        headers=tracing_config.headers,
    )


def prepare_service(config_path: Path | None, debug: bool = False) -> APIService:
    """Load the service config, set up logging and tracing, and initialize the service."""
    config = load_service_config(config_path)
    configure_logging_from_config(config.logging, debug=debug)
    configure_tracing_from_config(config.tracing)
    service = APIService.from_config(config)
    service.init()
    return service


def format_error(error: Exception, debug: bool = False) -> dict[str, Any]:
    """Format an error for output.

    Args:
        error: The exception that occurred
        debug: Whether to include debug information

    Returns:
        Dict containing error information
    """
    error_info = {"error": str(error)}

    kind = getattr(error, "kind", None)
    if isinstance(kind, str):
        error_info["kind"] = kind

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["type"] = error.__class__.__name__

    return error_info


def output_result(result: Any, json_output: bool = False, debug: bool = False) -> None:
    """Output a result in either JSON or human-readable format.

    Args:
        result: The result to output
        json_output: Whether to output in JSON format
        debug: Whether to include debug information
    """
    if json_output:
        print(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    else:
        if isinstance(result, list):
            for row in result:
                click.echo(row)
        else:
            click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format.

    Args:
        error: The exception that occurred
        json_output: Whether to output in JSON format
        debug: Whether to include debug information
    """
    error_info = format_error(error, debug)

    if json_output:
        print(json.dumps({"status": "error", **error_info}, indent=2))
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
