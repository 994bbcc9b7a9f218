"""Test fixtures and configuration."""

import textwrap

import pytest
import yaml


def _on_node(text):
    """Compose YAML and return the node under the top-level `on` key."""
    root = yaml.compose(textwrap.dedent(text), Loader=yaml.SafeLoader)
    for key, value in root.value:
        if key.value == "on":
            return value
    raise KeyError("on")


@pytest.fixture
def on_node():
    return _on_node


@pytest.fixture
def repo_dir(tmp_path):
    """A repository root with an empty .gitea/workflows directory."""
    (tmp_path / ".gitea" / "workflows").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_workflow(repo_dir):
    def _write(name, text, subdir=".gitea/workflows"):
        path = repo_dir / subdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text))
        return path

    return _write


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "agents.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            agents:
              - name: linux-1
                labels: [ubuntu-latest, docker]
              - name: mac-1
                labels: [macos]
                available: false
            """
        )
    )
    return path
