# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import yaml

from .schemas import WorkflowDispatchInput


@dataclass(frozen=True)
class Job:
    """A job inside a workflow document and the agent labels it runs on."""
    name: str
    runs_on: tuple[str, ...] = ()


@dataclass(frozen=True)
class Workflow:
    """
    A parsed workflow document.

    `jobs` keeps document order. `raw_on` is the untouched trigger node
    (the value of the top-level `on` key), left generic on purpose so
    callers can pick out the bits they understand.
    """
    name: str
    jobs: tuple[Job, ...] = ()
    raw_on: Optional[yaml.Node] = field(default=None, compare=False)


@dataclass(frozen=True)
class DispatchInputNode:
    """One `workflow_dispatch` input: its key and decoded definition."""
    key: str
    value: WorkflowDispatchInput

    def to_dict(self) -> dict:
        return {"name": self.key, **self.value.model_dump(exclude_none=True)}
