from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

# -------------------- Dispatch inputs --------------------

InputType = Literal["string", "choice", "boolean", "environment"]


class WorkflowDispatchInput(BaseModel):
    """Definition of a single manual-dispatch input."""

    type: InputType = "string"
    default: Optional[str] = None
    description: Optional[str] = None
    required: bool = False
    options: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _choice_needs_options(self) -> "WorkflowDispatchInput":
        if self.type == "choice" and not self.options:
            raise ValueError("choice input must list at least one option")
        return self


# -------------------- Agent roster --------------------

class RosterError(Exception):
    """Raised when an agent roster cannot be loaded."""
    pass


class Agent(BaseModel):
    """An execution agent and the labels it advertises."""

    name: str
    labels: list[str] = Field(default_factory=list)
    available: bool = True


class AgentRoster(BaseModel):
    agents: list[Agent] = Field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> "AgentRoster":
        """
        Load a roster from a YAML file.

        Raises:
            RosterError: If the file is missing, is not YAML, or does not
                describe a list of agents.
        """
        roster_path = Path(path)
        if not roster_path.exists():
            raise RosterError(f"Agent roster not found: {roster_path}")

        try:
            with open(roster_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RosterError(f"Invalid YAML in {roster_path}: {e}") from e

        return cls.from_data(data, source=str(roster_path))

    @classmethod
    def from_data(cls, data: Any, source: str = "roster") -> "AgentRoster":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise RosterError(f"Invalid agent roster in {source}: {e}") from e
