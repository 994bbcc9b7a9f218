"""Extraction of `workflow_dispatch` inputs from a raw trigger node."""

from __future__ import annotations

import logging
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from yaml.constructor import ConstructorError, SafeConstructor

from .model import DispatchInputNode
from .schemas import WorkflowDispatchInput

logger = logging.getLogger(__name__)

NULL_TAG = "tag:yaml.org,2002:null"
TEXT_FIELDS = ("type", "default", "description")


class NodeDecodeError(ValueError):
    """A YAML node does not have the shape it was expected to have."""
    pass


def _is_null(node: yaml.Node) -> bool:
    return isinstance(node, yaml.ScalarNode) and node.tag == NULL_TAG


def _scalar_value(node: yaml.Node, what: str) -> str:
    # raw source text, so `2024-01-01` or `0x1F` stay as written
    if not isinstance(node, yaml.ScalarNode):
        raise NodeDecodeError(f"{what} must be a scalar, got {node.id} at {node.start_mark}")
    return node.value


def decode_mapping(node: yaml.Node) -> dict[str, yaml.Node]:
    """
    Decode a mapping node into `{key: value_node}`.

    A null node decodes to an empty mapping. Keys must be scalars and may
    not repeat.

    Raises:
        NodeDecodeError: If the node is not mapping-shaped.
    """
    if _is_null(node):
        return {}
    if not isinstance(node, yaml.MappingNode):
        raise NodeDecodeError(f"expected a mapping, got {node.id} at {node.start_mark}")

    out: dict[str, yaml.Node] = {}
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise NodeDecodeError(f"mapping key must be a scalar at {key_node.start_mark}")
        if key_node.value in out:
            raise NodeDecodeError(f"mapping key {key_node.value!r} already defined at {key_node.start_mark}")
        out[key_node.value] = value_node
    return out


def decode_input(node: yaml.Node) -> WorkflowDispatchInput:
    """
    Decode one input definition node.

    Raises:
        NodeDecodeError: If the node is not a valid input definition.
    """
    if _is_null(node):
        return WorkflowDispatchInput()
    if not isinstance(node, yaml.MappingNode):
        raise NodeDecodeError(f"input definition must be a mapping, got {node.id} at {node.start_mark}")

    data: dict[str, Any] = {}
    for key, value in decode_mapping(node).items():
        if _is_null(value):
            continue
        if key in TEXT_FIELDS:
            data[key] = _scalar_value(value, key)
        elif key == "options":
            if not isinstance(value, yaml.SequenceNode):
                raise NodeDecodeError(f"options must be a list at {value.start_mark}")
            data[key] = [_scalar_value(item, "options item") for item in value.value]
        elif key == "required":
            try:
                data[key] = SafeConstructor().construct_document(value)
            except ConstructorError as e:
                raise NodeDecodeError(str(e)) from e

    try:
        return WorkflowDispatchInput.model_validate(data)
    except ValidationError as e:
        raise NodeDecodeError(str(e)) from e


def _decode_node(node: yaml.Node, what: str) -> Optional[dict[str, yaml.Node]]:
    try:
        return decode_mapping(node)
    except NodeDecodeError as e:
        logger.error("Failed to decode %s: %s", what, e)
        return None


def extract_dispatch_inputs(raw_on: Optional[yaml.Node]) -> Optional[list[DispatchInputNode]]:
    """
    Pull the manual-dispatch inputs out of a workflow's `on` node.

    Every failure returns None (and is logged) rather than raising: a
    missing trigger, a malformed `inputs` block, or a single bad input
    definition all mean "no dispatch form". A list is only returned when
    every input decoded, and it keeps the order the inputs were written in.
    """
    if not isinstance(raw_on, yaml.MappingNode):
        logger.debug("Trigger configuration is not a mapping")
        return None

    on =_decode_node(raw_on, "trigger configuration")
    if on is None:
        return None

    dispatch_node = on.get("workflow_dispatch")
    if dispatch_node is None:
        logger.debug("No workflow_dispatch trigger")
        return None
    config = _decode_node(dispatch_node, "workflow_dispatch")
    if config is None:
        return None

    inputs_node = config.get("inputs")
    if inputs_node is None:
        logger.debug("workflow_dispatch declares no inputs")
        return None
    if not isinstance(inputs_node, yaml.MappingNode):
        logger.error("Failed to decode workflow_dispatch inputs: expected a mapping, got %s", inputs_node.id)
        return None

    inputs: list[DispatchInputNode] = []
    seen: set[str] = set()
    for key_node, value_node in inputs_node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            logger.error("Failed to decode dispatch input key at %s", key_node.start_mark)
            return None
        if key_node.value in seen:
            logger.error("Dispatch input %r already defined at %s", key_node.value, key_node.start_mark)
            return None
        seen.add(key_node.value)
        try:
            value = decode_input(value_node)
        except NodeDecodeError as e:
            logger.error("Failed to decode dispatch input %r: %s", key_node.value, e)
            return None
        inputs.append(DispatchInputNode(key=key_node.value, value=value))
    return inputs
