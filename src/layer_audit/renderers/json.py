"""JSON renderer for layer-audit output."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from layer_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        """Render a model, or a list of models, to a JSON string."""
        return json.dumps(
            self._to_jsonable(data),
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    @classmethod
    def _to_jsonable(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json")
        if isinstance(data, (list, tuple)):
            return [cls._to_jsonable(item) for item in data]
        return data

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Serializer for types json does not handle natively."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
