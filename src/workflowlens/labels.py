from __future__ import annotations

from typing import Iterable

from .schemas import Agent

EXPRESSION_MARKER = "${{"


def is_expression(label: str) -> bool:
    """True if the label holds an unresolved `${{ ... }}` expression."""
    return EXPRESSION_MARKER in label


def agent_label_set(agents: Iterable[Agent]) -> frozenset[str]:
    """Union of the labels advertised by every available agent."""
    labels: set[str] = set()
    for agent in agents:
        if not agent.available:
            continue
        labels.update(agent.labels)
    return frozenset(labels)
