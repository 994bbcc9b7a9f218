from .compat import check_agent_compatibility, check_workflow
from .dispatch import extract_dispatch_inputs
from .labels import agent_label_set, is_expression
from .model import DispatchInputNode, Job, Workflow
from .parser import WorkflowParseError, read_workflow, read_workflow_file
from .schemas import Agent, AgentRoster, WorkflowDispatchInput

__all__ = [
    "check_agent_compatibility", "check_workflow", "extract_dispatch_inputs",
    "agent_label_set", "is_expression", "DispatchInputNode", "Job", "Workflow",
    "WorkflowParseError", "read_workflow", "read_workflow_file",
    "Agent", "AgentRoster", "WorkflowDispatchInput",
]
