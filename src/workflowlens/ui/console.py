"""Console output formatting utilities for workflowlens."""

from __future__ import annotations

import sys
from typing import Optional

from ..listing import WorkflowEntry, WorkflowListing
from ..model import DispatchInputNode


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_workflow(self, entry: WorkflowEntry, current: bool = False) -> None:
        marker = "*" if current else " "
        if entry.error:
            print(f"{marker} {entry.name}: {entry.error}")
        else:
            print(f"{marker} {entry.name}: ok")

    def print_dispatch_inputs(self, inputs: list[DispatchInputNode]) -> None:
        """Print the manual-dispatch form, one input per line."""
        if not inputs:
            print("  (no inputs)")
            return
        for node in inputs:
            spec = node.value
            flags = [spec.type]
            if spec.required:
                flags.append("required")
            if spec.default is not None:
                flags.append(f"default={spec.default}")
            print(f"  {node.key} ({', '.join(flags)})")
            if spec.description:
                print(f"      {spec.description}")
            if spec.options:
                print(f"      options: {', '.join(spec.options)}")

    def print_listing(self, listing: WorkflowListing) -> None:
        self.print_header("WORKFLOWS")
        if not listing.workflows:
            print("  (none found)")
        for entry in listing.workflows:
            self.print_workflow(entry, current=entry.name == listing.current)

        if listing.current is None:
            return
        if listing.current_disabled:
            print(f"\nWorkflow {listing.current} is disabled")
        elif listing.dispatch_inputs is not None:
            self.print_header(f"DISPATCH INPUTS: {listing.current}")
            self.print_dispatch_inputs(listing.dispatch_inputs)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
