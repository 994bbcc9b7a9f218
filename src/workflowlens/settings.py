from __future__ import annotations
import os

LOG_LEVEL = os.environ.get("WORKFLOWLENS_LOG_LEVEL", "WARNING").upper()
WORKFLOW_DIRS = tuple(
    d.strip()
    for d in os.environ.get("WORKFLOWLENS_WORKFLOW_DIRS", ".gitea/workflows,.github/workflows").split(",")
    if d.strip()
)
AGENTS_FILE = os.environ.get("WORKFLOWLENS_AGENTS_FILE") or None
API_URL = os.environ.get("WORKFLOWLENS_API") or None
