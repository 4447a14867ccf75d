"""Webhook step: one outbound HTTP call carrying the execution context."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from contract_service.features.workflows.schemas import StepResult
from contract_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from contract_service.features.workflows.models import WorkflowStep

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class WebhookStepExecutor:
    """Calls ``step_config["url"]`` with the merged context as JSON body.

    ``step_config`` keys: url, method (default POST), headers, body. The
    request body is the execution context overlaid with ``body``. A 2xx
    response with a JSON body is required; the parsed body becomes
    ``webhook_response``.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize webhook step.

        Args:
            timeout_seconds: Timeout for the HTTP request
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        config = step.step_config or {}
        url = config.get("url")
        if not url:
            return StepResult(success=False, error="Webhook URL not configured")

        method = str(config.get("method") or "POST").upper()
        headers = {"Content-Type": "application/json", **(config.get("headers") or {})}
        payload = {**execution_data, **(config.get("body") or {})}
        start_time = time.time()

        lazy_logger.debug(lambda: f"webhook.execute: {method} {url} execution={execution_id}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.timeout_seconds,
            ) as client:
                response = await client.request(method, url, json=payload, headers=headers)
        except httpx.TimeoutException:
            logger.warning(
                "Webhook step timeout",
                extra={
                    "url": url,
                    "timeout_seconds": self.timeout_seconds,
                    "operation": "workflows.step.webhook",
                },
            )
            return StepResult(success=False, error=f"Request timeout after {self.timeout_seconds}s")
        except httpx.RequestError as exc:
            logger.warning(
                "Webhook step request failed",
                extra={"url": url, "error": str(exc), "operation": "workflows.step.webhook"},
            )
            return StepResult(success=False, error=str(exc) or exc.__class__.__name__)

        response_time_ms = int((time.time() - start_time) * 1000)

        if not response.is_success:
            logger.warning(
                "Webhook step failed with non-2xx status",
                extra={
                    "url": url,
                    "status_code": response.status_code,
                    "response_time_ms": response_time_ms,
                    "operation": "workflows.step.webhook",
                },
            )
            return StepResult(success=False, error=f"Webhook failed: {response.reason_phrase}")

        try:
            parsed: Any = response.json()
        except ValueError as exc:
            logger.warning(
                "Webhook step response is not JSON",
                extra={"url": url, "status_code": response.status_code, "operation": "workflows.step.webhook"},
            )
            return StepResult(success=False, error=f"Invalid webhook response: {exc}")

        logger.info(
            "Webhook step delivered",
            extra={
                "url": url,
                "status_code": response.status_code,
                "response_time_ms": response_time_ms,
                "operation": "workflows.step.webhook",
            },
        )
        return StepResult(success=True, data={"webhook_response": parsed})


__all__ = ["WebhookStepExecutor"]
