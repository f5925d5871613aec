"""Concurrent fan-out of one prompt to every configured backend."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from dualmodel.client import BackendClient
from dualmodel.config import Settings
from dualmodel.schemas import DualResult, ModelResponse, ResultMetadata

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_PREVIEW_CHARS = 100


def resolve_system_prompt(settings: Settings, override: str | None) -> str:
    """Return the override when it is non-empty, else the default."""
    return override or settings.SYSTEM_PROMPT


def truncate_system_prompt(system_prompt: str, limit: int = SYSTEM_PROMPT_PREVIEW_CHARS) -> str:
    """Shorten the system prompt for metadata. Always ends with '...'."""
    return system_prompt[:limit] + "..."


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DualDispatcher:
    """Queries all backends concurrently, all-or-nothing."""

    def __init__(self, settings: Settings, client: BackendClient | None = None):
        self.settings = settings
        self.client = client or BackendClient(settings)

    async def query_both(self, prompt: str, system_prompt: str | None = None) -> DualResult:
        """Send the prompt to every backend and join the answers.

        If any backend fails, its error is raised and the answers of the
        others are discarded. Calls still in flight are cancelled.

        Args:
            prompt: User prompt shared by all backends
            system_prompt: Optional override for the default instructions

        Returns:
            DualResult with one response per backend, in configured order
        """
        effective = resolve_system_prompt(self.settings, system_prompt)
        backends = self.settings.backends

        logger.info(f"Starting parallel queries for {len(backends)} models")

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        self.client.query(backend.model, prompt, effective),
                        name=f"query_{backend.model}",
                    )
                    for backend in backends
                ]
        except ExceptionGroup as eg:
            # Surface the first backend failure as-is
            raise eg.exceptions[0]

        logger.info("All models responded")

        return DualResult(
            responses=[
                ModelResponse(label=backend.label, model=backend.model, content=task.result())
                for backend, task in zip(backends, tasks)
            ],
            metadata=ResultMetadata(
                timestamp=_utc_timestamp(),
                models_used={backend.label: backend.model for backend in backends},
                system_prompt_used=truncate_system_prompt(effective),
            ),
        )
