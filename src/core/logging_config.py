"""
Logging — настройка structlog для событий вычисления

Модули пакета логируют через stdlib logger, обёрнутый structlog
(structlog.wrap_logger), поэтому события уходят в handler'ы stdlib logging.
configure_logging() подключает к корневому logger'у единственный handler
на stderr с одним из двух рендереров:
- console (по умолчанию): читаемый вывод
- JSON (log_json=True): одна JSON строка на событие

Без вызова configure_logging() debug события пакета не выводятся.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Корневой logger пакета
PACKAGE_LOGGER = "src"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """
    Настройка structlog процессоров и вывода.

    Args:
        verbose: DEBUG события пакета (operation_calculated/operation_failed);
            иначе только WARNING+
        log_json: JSON рендерер вместо console
    """
    package_level = logging.DEBUG if verbose else logging.WARNING

    # Общие процессоры для structlog и foreign (stdlib) записей
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
