"""Base class for decoded report records."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """Immutable decoded value. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")
