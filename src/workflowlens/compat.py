from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

from .labels import is_expression
from .model import Job, Workflow


def check_agent_compatibility(
    jobs: Iterable[Job],
    available_labels: AbstractSet[str],
) -> Optional[str]:
    """
    Find the first job label no available agent can serve.

    Jobs are walked in document order, then each job's labels in order.
    Labels holding an unresolved expression can't be evaluated here and
    always count as satisfiable.

    Returns:
        The first offending label, or None if every job can be scheduled.
    """
    for job in jobs:
        for label in job.runs_on:
            if is_expression(label):
                continue
            if label not in available_labels:
                return label
    return None


def check_workflow(workflow: Workflow, available_labels: AbstractSet[str]) -> Optional[str]:
    """Run check_agent_compatibility over a parsed workflow's jobs."""
    return check_agent_compatibility(workflow.jobs, available_labels)
