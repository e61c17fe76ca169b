"""Structured logging for provider attempts and resolution outcomes."""

import logging
from typing import Any

from backend.resolver.models.places import PlaceResolutionResult, UnresolvedPlace

logger = logging.getLogger(__name__)


class StructuredResolverLogger:
    """Structured logger for place resolution."""

    def log_provider_attempt(
        self,
        query: UnresolvedPlace,
        provider: str,
        outcome: str,
        latency_ms: float,
        candidates: int = 0,
        error_reason: str | None = None,
    ) -> None:
        """Log one provider search with structured data."""
        log_data: dict[str, Any] = {
            "place": query.name,
            "city": query.city,
            "provider": provider,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "candidates": candidates,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Provider search: {provider} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_resolution(self, result: PlaceResolutionResult) -> None:
        """Log the final outcome of a resolution."""
        log_data: dict[str, Any] = {
            "place": result.original.name,
            "city": result.original.city,
            "provider": result.provider,
            "resolved": result.resolved is not None,
            "confidence": result.resolved.confidence if result.resolved else None,
            "alternatives": len(result.alternatives),
            "cached": result.cached,
            "duration_ms": round(result.duration_ms, 2),
        }

        if result.error:
            log_data["error"] = result.error

        log_msg = f"Place resolution: {result.original.name} - {result.provider}"

        if result.resolved is not None:
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
