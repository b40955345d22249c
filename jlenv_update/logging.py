import logging
from typing import NoReturn

import structlog
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from structlog.types import FilteringBoundLogger
from structlog.typing import EventDict

# Diagnostics go to stderr so they never mix with pull output.
console = Console(stderr=True)

# Type alias for our logger
Logger = FilteringBoundLogger


def format_context_yaml(event_dict: EventDict, indent: int = 2) -> str:
    """Format the context dictionary as YAML.

    Args:
        event_dict: The context dictionary to format.
        indent: The number of spaces to use for indentation.

    Returns:
        The formatted YAML string.
    """
    if not event_dict:
        return ''
    context_yaml = yaml.safe_dump(
        event_dict,
        sort_keys=True,
        default_flow_style=False,
    )
    pad = ' ' * indent
    return '\n'.join(f'{pad}{line}' for line in context_yaml.splitlines())


def strip_internal_keys(event_dict: EventDict) -> EventDict:
    """Drop the bookkeeping keys structlog processors add."""
    for key in ('timestamp', 'level', 'log_level', 'event', 'logger'):
        event_dict.pop(key, None)
    return {key: _yaml_safe(value) for key, value in event_dict.items()}


def _yaml_safe(value: object) -> object:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_yaml_safe(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _yaml_safe(v) for k, v in value.items()}
    return str(value)


def cli_renderer(
    _logger: Logger,
    method_name: str,
    event_dict: EventDict,
) -> NoReturn:
    """Render log messages for CLI output using rich formatting.

    Args:
        _logger: The logger instance.
        method_name: The logging method name (e.g., 'info', 'error').
        event_dict: The event dictionary containing log data.

    Raises:
        structlog.DropEvent: Always; the event is printed here so the stdlib
            logger underneath must not emit it again.
    """
    level = method_name.upper()
    event_msg = event_dict.pop('event', '')
    exc_info = event_dict.pop('exc_info', None)
    context_yaml = format_context_yaml(strip_internal_keys(event_dict))

    level_styles = {
        'INFO': 'blue',
        'WARNING': 'yellow',
        'ERROR': 'red',
        'DEBUG': 'magenta',
        'CRITICAL': 'white on red',
    }
    style = level_styles.get(level, 'bold cyan')
    console.print(
        f'[bold {style}][{level}][/bold {style}] [{style}]{escape(str(event_msg))}[/{style}]',
    )

    if context_yaml:
        syntax = Syntax(
            context_yaml,
            'yaml',
            theme='github-dark',
            background_color='default',
            line_numbers=False,
        )
        console.print(syntax)
    if exc_info and logging.getLogger().level <= logging.DEBUG:
        console.print_exception()
    raise structlog.DropEvent


def configure_logging(*, verbose: bool = False) -> None:
    """Configure structlog for jlenv-update.

    Only warnings and errors are rendered unless ``verbose`` is set, in which
    case every command that gets run is traced at debug level.

    Args:
        verbose: Enable debug output (``JLENV_DEBUG``)
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt='ISO', utc=False),
            structlog.stdlib.add_log_level,
            cli_renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> Logger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
