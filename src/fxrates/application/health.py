# src/fxrates/application/health.py
"""
Health Checker - Service Monitoring and Diagnostics

This module checks that the service can do its job: the rates file must be
readable and parseable. The HTTP adapter exposes the result on /health.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fxrates.adapters.persistence.file_store import RateFileStore
from fxrates.domain.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Represents the health status of a component."""
    is_healthy: bool
    message: str
    last_check: datetime
    details: Optional[Dict[str, Any]] = None


class HealthChecker:
    """Health checks for the components the service depends on."""

    def __init__(self, store: RateFileStore):
        self.store = store

    def check_store(self) -> HealthStatus:
        """Check the rates file can be loaded."""
        try:
            records = self.store.load_all()
        except StorageUnavailableError as e:
            logger.error("Rate store health check failed: %s", e)
            return HealthStatus(
                is_healthy=False,
                message=f"Rate store error: {e.message}",
                last_check=datetime.now(timezone.utc),
                details={"path": str(self.store.path)},
            )

        latest = records[-1].date if records else None
        return HealthStatus(
            is_healthy=True,
            message=f"Rate store healthy, {len(records)} dates",
            last_check=datetime.now(timezone.utc),
            details={
                "path": str(self.store.path),
                "file_exists": self.store.path.exists(),
                "dates": len(records),
                "latest_date": latest,
            },
        )

    def get_overall_health(self) -> Dict[str, Any]:
        """
        Get overall health status of all components.

        Returns:
            Dictionary with overall status and one entry per check
        """
        checks = {
            "store": self.check_store(),
        }

        failed_checks = [name for name, check in checks.items() if not check.is_healthy]
        overall_healthy = not failed_checks

        return {
            "overall_healthy": overall_healthy,
            "status": "healthy" if overall_healthy else "degraded",
            "failed_components": failed_checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {
                name: {
                    "healthy": check.is_healthy,
                    "message": check.message,
                    "last_check": check.last_check.isoformat(),
                    "details": check.details,
                }
                for name, check in checks.items()
            },
        }
