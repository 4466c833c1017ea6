"""Query operation base API and default operation set.

An operation declares its name, a description for tool discovery, a JSON
input schema, and a Pydantic request model. The dispatcher validates caller
arguments with ``validate`` (raising ``InvalidArgument``) before any dataset
access, then calls ``execute`` to produce a structured result for the
renderer.
"""

# pylint: disable=too-few-public-methods

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..dataset import Dataset
from ..errors import InvalidArgument, UnknownTool

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)

TIME_RANGES: List[str] = ["7d", "30d", "90d"]


class Operation(Generic[RequestT]):
    """Base class for the query operations.

    Subclasses set ``name``, ``description`` and ``request_model`` and
    implement ``input_schema`` and ``execute``.
    """

    name: str
    description: str
    request_model: Type[RequestT]

    def input_schema(self, dataset: Dataset) -> Dict[str, Any]:
        """JSON schema advertised to clients; tool id enums come from ``dataset``."""
        raise NotImplementedError

    def validate(self, arguments: Mapping[str, Any]) -> RequestT:
        """Parse caller arguments into the request model.

        Raises
        ------
        InvalidArgument
            If the arguments violate the schema (type, range, enum, unknown
            keys where forbidden).
        """
        try:
            return self.request_model.model_validate(dict(arguments))
        except ValidationError as exc:
            raise InvalidArgument(
                f"Invalid arguments for {self.name}: {_describe_errors(exc)}"
            ) from None

    def execute(self, dataset: Dataset, request: RequestT) -> Any:
        """Run the operation against ``dataset`` and return a structured result."""
        raise NotImplementedError


def require_known(dataset: Dataset, tool_ids: List[str]) -> None:
    """Raise ``UnknownTool`` for the first id the dataset does not hold."""
    for tool_id in tool_ids:
        if tool_id not in dataset:
            raise UnknownTool(tool_id, dataset.ids())


def _describe_errors(exc: ValidationError) -> str:
    parts: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def default_operations() -> List[Operation[Any]]:
    """The four query operations in discovery order."""
    from .compare import CompareTools  # noqa: WPS433 (local import)
    from .history import ToolHistory
    from .search import SearchTools
    from .trending import TrendingTools

    return [CompareTools(), TrendingTools(), ToolHistory(), SearchTools()]
