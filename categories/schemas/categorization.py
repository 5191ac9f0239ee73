"""Categorization schemas."""
from pydantic import BaseModel


class SyncChanges(BaseModel):
    """Diff produced by a sync / attach / detach call."""
    attached: list[int] = []
    detached: list[int] = []
    # Always empty: associations carry no extra attributes to update
    updated: list[int] = []

    @property
    def is_empty(self) -> bool:
        return not (self.attached or self.detached or self.updated)
