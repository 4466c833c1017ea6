"""Tool dispatcher for the AI developer tools server.

``DevToolsMCPServer`` owns the operation registry and the injected dataset.
Transports call ``list_tools`` for discovery and ``invoke`` to run a tool;
``invoke`` always returns a ``ToolResult`` and never lets a failure escape,
so one bad call cannot affect the next.
"""

from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config.models import AppConfig, EnvSettings
from ..domain.dataset import Dataset, default_dataset
from ..domain.errors import InvalidArgument, ToolServerError, UnknownOperation
from ..domain.operations import Operation, default_operations
from ..domain.render import render
from ..utils.correlation import request_scope
from .models import ToolDescriptor, ToolResult
from .normalize import normalize_tool_arguments

logger = logging.getLogger(__name__)


class DevToolsMCPServer:
    """Registry and failure-isolating dispatcher for the query operations.

    Parameters
    ----------
    dataset: Dataset | None
        Dataset the operations read. Defaults to the bundled fixture.
    operations: Iterable[Operation] | None
        Operations to register. Defaults to the four query operations.
    latency_ms: tuple[int, int] | None
        When set, each call first sleeps a uniformly random number of
        milliseconds in this range to emulate a remote API.
    """

    def __init__(
        self,
        dataset: Optional[Dataset] = None,
        operations: Optional[Iterable[Operation[Any]]] = None,
        latency_ms: Optional[tuple[int, int]] = None,
    ) -> None:
        self.dataset = dataset if dataset is not None else default_dataset()
        ops = list(operations) if operations is not None else default_operations()
        self._operations: Dict[str, Operation[Any]] = {op.name: op for op in ops}
        self._latency_ms = latency_ms
        self._started: bool = False

    @property
    def tool_names(self) -> List[str]:
        return list(self._operations.keys())

    async def start(self) -> None:
        """Mark the server as started. Idempotent."""
        if self._started:
            logger.debug("server.start no-op: already started")
            return
        self._started = True
        logger.info(
            "server.started",
            extra={"tools": self.tool_names, "dataset_tools": len(self.dataset)},
        )

    async def stop(self) -> None:
        """Mark the server as stopped. Idempotent."""
        if not self._started:
            logger.debug("server.stop no-op: not started")
            return
        self._started = False
        logger.info("server.stopped")

    def apply_enabled_tools(self, enabled: Mapping[str, bool]) -> Dict[str, List[str]]:
        """Keep only tools flagged ``True`` in ``enabled``.

        An empty mapping leaves the registry untouched. Returns the kept and
        disabled names for diagnostics.
        """
        if not enabled:
            return {"kept": self.tool_names, "disabled": []}
        disabled = [name for name in self.tool_names if not enabled.get(name, False)]
        for name in disabled:
            self._operations.pop(name, None)
        logger.info(
            "tools.filter", extra={"kept": self.tool_names, "disabled": disabled}
        )
        return {"kept": self.tool_names, "disabled": disabled}

    def list_tools(self) -> List[ToolDescriptor]:
        """Discovery listing: name, description and input schema per tool."""
        return [
            ToolDescriptor(
                name=op.name,
                description=op.description,
                inputSchema=op.input_schema(self.dataset),
            )
            for op in self._operations.values()
        ]

    async def invoke(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ToolResult:
        """Run tool ``name`` with ``arguments`` inside a failure boundary.

        Returns
        -------
        ToolResult
            Rendered text on success. On failure, a structured error result:
            ``unknown_operation`` for unregistered names (nothing executed),
            ``invalid_argument``/``unknown_tool`` for typed failures, and
            ``internal_error`` for anything unexpected.

        Log records carry the caller's correlation id when one is set (the
        HTTP transport sets it from ``x-correlation-id``), otherwise a fresh
        id scoped to this call.
        """
        with request_scope() as req_id:
            return await self._dispatch(name, arguments, req_id)

    async def _dispatch(
        self, name: str, arguments: Optional[Mapping[str, Any]], req_id: str
    ) -> ToolResult:
        op = self._operations.get(name)
        if op is None:
            exc = UnknownOperation(name, self.tool_names)
            logger.info(
                "dispatch.unknown_operation", extra={"req_id": req_id, "tool": name}
            )
            return ToolResult.failure(exc)

        logger.info("dispatch.invoke", extra={"req_id": req_id, "tool": name})
        try:
            await self._simulate_latency()
            if arguments is not None and not isinstance(arguments, Mapping):
                raise InvalidArgument(
                    f"Invalid arguments for {name}: expected an object, "
                    f"got {type(arguments).__name__}"
                )
            request = op.validate(normalize_tool_arguments(arguments))
            result = op.execute(self.dataset, request)
            text = render(name, result)
        except ToolServerError as exc:
            logger.info(
                "dispatch.failed",
                extra={
                    "req_id": req_id,
                    "tool": name,
                    "error_type": exc.error_type,
                    "error": exc.message,
                },
            )
            return ToolResult.failure(exc)
        except Exception as exc:  # noqa: BLE001 - isolation boundary
            logger.error(
                "dispatch.internal_error",
                extra={"req_id": req_id, "tool": name},
                exc_info=exc,
            )
            return ToolResult(
                text=f"Error: Internal error while running {name}. "
                f"See server logs (request id {req_id}).",
                is_error=True,
                error_type="internal_error",
            )
        logger.debug(
            "dispatch.done", extra={"req_id": req_id, "tool": name, "chars": len(text)}
        )
        return ToolResult.success(text)

    async def _simulate_latency(self) -> None:
        if self._latency_ms is None:
            return
        low, high = self._latency_ms
        await asyncio.sleep(random.uniform(low, high) / 1000.0)


def create_server(
    settings: Optional[EnvSettings] = None, config_path: Optional[Path] = None
) -> DevToolsMCPServer:
    """Build a server from environment settings and an optional JSON config.

    ``config_path`` overrides ``settings.config``. The config may point at a
    dataset file and restrict the enabled tools.

    Raises
    ------
    OSError, ValueError
        If the config or dataset file cannot be read or fails validation.
    """
    settings = settings if settings is not None else EnvSettings()
    if config_path is None and settings.config:
        config_path = Path(settings.config)

    dataset: Optional[Dataset] = None
    cfg: Optional[AppConfig] = None
    if config_path is not None:
        cfg = AppConfig.load(config_path)
        if cfg.dataset_path:
            dataset = Dataset.load(Path(cfg.dataset_path))
        logger.info(
            "server.config",
            extra={
                "config_path": str(config_path),
                "dataset_path": cfg.dataset_path,
                "enabled_tools": cfg.enabled_tools,
            },
        )

    latency = (
        (settings.latency_min_ms, settings.latency_max_ms)
        if settings.simulate_latency
        else None
    )
    server = DevToolsMCPServer(dataset=dataset, latency_ms=latency)
    if cfg is not None and cfg.enabled_tools:
        server.apply_enabled_tools(cfg.enabled_tools)
    return server
