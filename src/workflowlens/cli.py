# cli.py
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from workflowlens import settings
from workflowlens.agent.api_client import APIClient, APIError
from workflowlens.dispatch import extract_dispatch_inputs
from workflowlens.labels import agent_label_set
from workflowlens.listing import WorkflowListing, build_listing, find_workflow_files
from workflowlens.parser import WorkflowParseError, read_workflow_file
from workflowlens.schemas import Agent, AgentRoster, RosterError
from workflowlens.ui.console import Console, set_console, get_console


def load_agents(agents_file: str | None, api: str | None, repo: str | None) -> list[Agent]:
    """
    Load the agent roster from a file or the control-plane API.

    Raises:
        SystemExit: If neither source is given or loading fails
    """
    console = get_console()

    if agents_file:
        try:
            return AgentRoster.load(agents_file).agents
        except RosterError as e:
            console.print_error(
                "Failed to load agent roster",
                str(e),
                suggestion="A roster file lists agents:\n  agents:\n    - name: runner-1\n      labels: [ubuntu-latest]",
            )
            sys.exit(1)

    if api:
        try:
            return APIClient(api).list_agents(repo)
        except APIError as e:
            console.print_error(
                "Failed to fetch agent roster",
                f"Could not read agents from {api}",
                details=[str(e)],
                suggestion="Verify the API URL is correct and the API is running.",
            )
            sys.exit(1)

    console.print_error(
        "No agent roster",
        "Specify where to read agents from.",
        suggestion="workflowlens list --agents agents.yaml\n  or\nworkflowlens list --api http://localhost:8000",
    )
    sys.exit(1)


def listing_to_dict(listing: WorkflowListing) -> dict:
    return {
        "workflows": [
            {"name": e.name, "path": str(e.path), "error": e.error}
            for e in listing.workflows
        ],
        "current": listing.current,
        "current_disabled": listing.current_disabled,
        "dispatch_inputs": (
            [n.to_dict() for n in listing.dispatch_inputs]
            if listing.dispatch_inputs is not None
            else None
        ),
    }


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and debug logging)",
)
@click.pass_context
def cli(ctx, debug):
    """workflowlens: check workflows against the agent pool."""
    console = Console(debug=debug)
    set_console(console)
    logging.basicConfig(
        level=logging.DEBUG if debug else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command("list")
@click.option("--root", default=".", show_default=True, help="Repository root to look for workflows in")
@click.option("--agents", "agents_file", default=settings.AGENTS_FILE, help="Agent roster YAML file")
@click.option("--api", default=settings.API_URL, help="Control-plane API base URL to read agents from")
@click.option("--repo", default=None, help="Repository name used to scope the API roster")
@click.option("--workflow", default=None, help="Workflow file name to show dispatch inputs for")
@click.option("--disabled", multiple=True, help="Workflow file name that is disabled (repeatable)")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the listing as JSON")
@click.pass_context
def list_workflows(ctx, root, agents_file, api, repo, workflow, disabled, as_json):
    """List workflows and whether an available agent can run them."""
    console = get_console()

    agents = load_agents(agents_file, api, repo)
    labels = agent_label_set(agents)

    try:
        paths = find_workflow_files(root)
        listing = build_listing(paths, labels, current=workflow, disabled=frozenset(disabled))
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(listing_to_dict(listing), indent=2))
    else:
        console.print_listing(listing)


@cli.command()
@click.argument("workflow_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the inputs as JSON")
@click.pass_context
def inputs(ctx, workflow_file, as_json):
    """Show the manual-dispatch inputs of a workflow file."""
    console = get_console()

    try:
        wf = read_workflow_file(workflow_file)
    except (WorkflowParseError, OSError) as e:
        console.print_error(
            "Invalid workflow",
            f"Could not parse {workflow_file}",
            details=[str(e)],
        )
        sys.exit(1)

    nodes = extract_dispatch_inputs(wf.raw_on)

    if as_json:
        payload = [n.to_dict() for n in nodes] if nodes is not None else None
        click.echo(json.dumps(payload, indent=2))
        return

    if nodes is None:
        console.print_info(f"{workflow_file.name}: no manual dispatch inputs")
        return
    console.print_header(f"DISPATCH INPUTS: {workflow_file.name}")
    console.print_dispatch_inputs(nodes)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
