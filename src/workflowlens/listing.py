# listing.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional

from .compat import check_workflow
from .dispatch import extract_dispatch_inputs
from .model import DispatchInputNode, Workflow
from .parser import WorkflowParseError, read_workflow_file
from .settings import WORKFLOW_DIRS

logger = logging.getLogger(__name__)

WORKFLOW_SUFFIXES = (".yml", ".yaml")


@dataclass
class WorkflowEntry:
    """One workflow file as shown in a listing."""
    name: str
    path: Path
    error: Optional[str] = None  # invalid workflow or no matching runner
    workflow: Optional[Workflow] = None


@dataclass
class WorkflowListing:
    workflows: List[WorkflowEntry] = field(default_factory=list)
    current: Optional[str] = None
    current_disabled: bool = False
    dispatch_inputs: Optional[List[DispatchInputNode]] = None


def find_workflow_files(root: str | Path = ".", dirs: Iterable[str] = WORKFLOW_DIRS) -> list[Path]:
    """
    Find workflow files under a repository root.

    The first of `dirs` that exists wins; later ones are fallbacks, not
    merged in. Returns *.yml / *.yaml files sorted by name.
    """
    root_path = Path(root)
    for d in dirs:
        wf_dir = root_path / d
        if not wf_dir.is_dir():
            continue
        files = sorted(
            (p for p in wf_dir.iterdir() if p.is_file() and p.suffix in WORKFLOW_SUFFIXES),
            key=lambda p: p.name,
        )
        logger.debug("Found %d workflow file(s) in %s", len(files), wf_dir)
        return files
    logger.debug("No workflow directory under %s (looked for %s)", root_path, ", ".join(dirs))
    return []


def build_entry(path: Path, available_labels: AbstractSet[str]) -> WorkflowEntry:
    entry = WorkflowEntry(name=path.name, path=path)
    try:
        wf = read_workflow_file(path)
    except (WorkflowParseError, OSError) as e:
        entry.error = f"invalid workflow: {e}"
        return entry

    entry.workflow = wf
    label = check_workflow(wf, available_labels)
    if label is not None:
        entry.error = f"no matching runner: {label}"
    return entry


def build_listing(
    paths: Iterable[Path],
    available_labels: AbstractSet[str],
    current: Optional[str] = None,
    disabled: AbstractSet[str] = frozenset(),
) -> WorkflowListing:
    """
    Build the workflow listing.

    Each file becomes an entry carrying either a parse error, the first
    label no available agent provides, or nothing. When `current` names a
    parsed workflow that isn't disabled, its dispatch inputs are extracted.
    """
    listing = WorkflowListing(current=current)
    current_wf: Optional[Workflow] = None

    for path in paths:
        entry = build_entry(Path(path), available_labels)
        logger.debug("%s: %s", entry.name, entry.error or "ok")
        listing.workflows.append(entry)
        if current is not None and entry.name == current:
            current_wf = entry.workflow

    if current is None:
        return listing

    listing.current_disabled = current in disabled
    if not listing.current_disabled and current_wf is not None:
        listing.dispatch_inputs = extract_dispatch_inputs(current_wf.raw_on)
    return listing
