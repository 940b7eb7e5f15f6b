"""Configuration contract for padding.

``PadConfig`` is the JSON-serializable form of a ``pad_by_time`` call used by
the CLI (``--config``) and by ``describe()``. Library callers can keep passing
keyword arguments; ``PadConfig.to_kwargs()`` maps one onto the other.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

FillDirection = Literal["none", "down", "up", "downup", "updown"]

FILL_DIRECTIONS: tuple[str, ...] = ("none", "down", "up", "downup", "updown")

# Safety ceiling on the number of steps in one canonical sequence.
DEFAULT_MAX_STEPS = 10_000_000


class BaseSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class PadConfig(BaseSpec):
    """Options for one padding run.

    Args:
        time_column: Timestamp column; ``None`` auto-detects the sole candidate
        by: ``"auto"`` or a granularity phrase such as ``"quarter"`` or ``"5 min"``
        pad_value: Value written into numeric columns of inserted rows
        fill_direction: Directional fill applied after padding
        start: Optional explicit first timestamp ("2013", "2013-06-01", ...)
        end: Optional explicit last timestamp
        group_by: Columns whose groups are padded independently
        max_steps: Ceiling on the canonical sequence length per group
        n_jobs: Worker threads used to pad groups
    """

    time_column: str | None = None
    by: str = "auto"
    pad_value: Any = None
    fill_direction: FillDirection = "none"
    start: str | None = None
    end: str | None = None
    group_by: list[str] = Field(default_factory=list)
    max_steps: int = Field(DEFAULT_MAX_STEPS, gt=0)
    n_jobs: int = Field(1, ge=1)

    @field_validator("fill_direction", mode="before")
    @classmethod
    def _lower_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``pad_by_time``."""
        return {
            "time_column": self.time_column,
            "by": self.by,
            "pad_value": self.pad_value,
            "fill_direction": self.fill_direction,
            "start": self.start,
            "end": self.end,
            "group_by": list(self.group_by) or None,
            "max_steps": self.max_steps,
            "n_jobs": self.n_jobs,
        }


__all__ = [
    "BaseSpec",
    "PadConfig",
    "FillDirection",
    "FILL_DIRECTIONS",
    "DEFAULT_MAX_STEPS",
]
