"""In-memory session registry.

Maps session handles to CalculatorFramework instances for the HTTP layer.
Handles are assigned at creation and stay stable across resets, while the
framework's own session id changes on every reset. Nothing is persisted.
"""

import logging
import uuid
from threading import Lock
from typing import Any

from clinicalscore.schemas.base import CalculatorType
from clinicalscore.services.framework import CalculatorFramework
from clinicalscore.services.submission import Submitter, build_submitter
from clinicalscore.services.validation import SchemaValidator

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Thread-safe map of session handle to framework."""

    def __init__(
        self,
        submitter: Submitter | None = None,
        validator: SchemaValidator | None = None,
    ):
        self.submitter = submitter if submitter is not None else build_submitter()
        self.validator = validator or SchemaValidator()
        self._sessions: dict[str, CalculatorFramework] = {}
        self._lock = Lock()

    def create(self, calculator_type: CalculatorType | str) -> tuple[str, CalculatorFramework]:
        """Start a new framework session.

        Raises:
            ConfigurationError: If the calculator type is unknown.
        """
        framework = CalculatorFramework(
            calculator_type,
            submitter=self.submitter,
            validator=self.validator,
        )
        handle = uuid.uuid4().hex
        with self._lock:
            self._sessions[handle] = framework
        logger.info(f"Created {framework.config.type.value} session {handle}")
        return handle, framework

    def get(self, handle: str) -> CalculatorFramework | None:
        with self._lock:
            return self._sessions.get(handle)

    def remove(self, handle: str) -> bool:
        with self._lock:
            framework = self._sessions.pop(handle, None)
        if framework is None:
            return False
        # Cancels any in-flight submission
        framework.reset_calculator()
        logger.info(f"Removed session {handle}")
        return True

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            by_type: dict[str, int] = {}
            for framework in self._sessions.values():
                key = framework.config.type.value
                by_type[key] = by_type.get(key, 0) + 1
            return {"active_sessions": len(self._sessions), "by_calculator": by_type}


_session_registry: SessionRegistry | None = None
_session_registry_lock = Lock()


def get_session_registry() -> SessionRegistry:
    """Get the singleton session registry."""
    global _session_registry

    if _session_registry is None:
        with _session_registry_lock:
            if _session_registry is None:
                _session_registry = SessionRegistry()

    return _session_registry


def reset_session_registry() -> None:
    """Reset the singleton (for testing)."""
    global _session_registry
    with _session_registry_lock:
        _session_registry = None
