# parser.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml

from .dispatch import NodeDecodeError, decode_mapping
from .model import Job, Workflow


class WorkflowParseError(ValueError):
    """Raised when a workflow file can't be read as a workflow document."""
    pass


def _scalar_list(node: Optional[yaml.Node], where: str) -> list[str]:
    if node is None:
        return []
    if isinstance(node, yaml.ScalarNode):
        if node.tag == "tag:yaml.org,2002:null":
            return []
        return [node.value]
    if isinstance(node, yaml.SequenceNode):
        out = []
        for item in node.value:
            if not isinstance(item, yaml.ScalarNode):
                raise WorkflowParseError(f"{where}: expected a list of labels at {item.start_mark}")
            out.append(item.value)
        return out
    raise WorkflowParseError(f"{where}: expected a label or a list of labels at {node.start_mark}")


def runs_on(node: Optional[yaml.Node], job_name: str = "job") -> tuple[str, ...]:
    """
    Labels a job asks for.

    `runs-on` may be a single label, a list of labels, or a mapping with
    `labels` and/or `group`; the group name is appended after the labels.
    """
    where = f"jobs.{job_name}.runs-on"
    if isinstance(node, yaml.MappingNode):
        try:
            fields = decode_mapping(node)
        except NodeDecodeError as e:
            raise WorkflowParseError(f"{where}: {e}") from e
        labels = _scalar_list(fields.get("labels"), where + ".labels")
        labels.extend(_scalar_list(fields.get("group"), where + ".group"))
        return tuple(labels)
    return tuple(_scalar_list(node, where))


def read_workflow(content: str | bytes, name: str = "workflow") -> Workflow:
    """
    Parse workflow YAML into a Workflow.

    Only what the listing needs is interpreted: the job table (in document
    order) and each job's `runs-on`. The `on` node is kept as-is.

    Raises:
        WorkflowParseError: On YAML errors or a document without jobs.
    """
    try:
        root = yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise WorkflowParseError(str(e)) from e

    if root is None:
        raise WorkflowParseError("empty workflow document")
    try:
        doc = decode_mapping(root)
    except NodeDecodeError as e:
        raise WorkflowParseError(f"workflow document: {e}") from e

    jobs_node = doc.get("jobs")
    if jobs_node is None:
        raise WorkflowParseError("workflow has no jobs")
    try:
        job_nodes = decode_mapping(jobs_node)
    except NodeDecodeError as e:
        raise WorkflowParseError(f"jobs: {e}") from e
    if not job_nodes:
        raise WorkflowParseError("workflow has no jobs")

    jobs = []
    for job_name, job_node in job_nodes.items():
        try:
            job_fields = decode_mapping(job_node)
        except NodeDecodeError as e:
            raise WorkflowParseError(f"jobs.{job_name}: {e}") from e
        jobs.append(Job(name=job_name, runs_on=runs_on(job_fields.get("runs-on"), job_name)))

    title = name
    name_node = doc.get("name")
    if isinstance(name_node, yaml.ScalarNode) and name_node.value:
        title = name_node.value

    return Workflow(name=title, jobs=tuple(jobs), raw_on=doc.get("on"))


def read_workflow_file(path: str | Path) -> Workflow:
    wf_path = Path(path)
    return read_workflow(wf_path.read_bytes(), name=wf_path.name)
