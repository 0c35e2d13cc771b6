"""Structured logging mixin shared by application services.

Usage:
    from casework.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, repository: SomeRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="documents")

        async def do_something(self, item_id: UUID) -> None:
            log = self._log_operation("do_something", item_id=str(item_id))
            log.info("something_started")
            ...
            log.info("something_completed")
"""

import structlog

from casework.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a bound structlog logger.

    The logger carries the service class name and a component tag. Each
    operation gets its own child logger with the operation name and the
    request's correlation id.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "casework") -> None:
        """Bind the service logger; call at the end of __init__.

        Args:
            component: Functional area used to group log entries.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Return a logger bound to one operation.

        Args:
            operation: Name of the operation being performed.
            **context: Extra key/values bound to every entry.

        Returns:
            BoundLogger with operation and correlation_id bound.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
