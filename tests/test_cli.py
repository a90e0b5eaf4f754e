"""Tests for the command-line interface."""

import json
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from narrato import __version__
from narrato.cli import cli, read_sources
from narrato.config import GatewaySettings
from narrato.generation.gateway import ChatGateway


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_gateway(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make ChatGateway.from_env return a gateway that always replies '# Generated'."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "# Generated"}}]}
        )

    def from_env(cls, client=None):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return cls(GatewaySettings(api_key="test-key"), client=client)

    monkeypatch.setattr(ChatGateway, "from_env", classmethod(from_env))


class TestReadSources:
    """Tests for read_sources."""

    def test_walks_directories_in_sorted_order(self, sample_project_dir: Path) -> None:
        """Should read every file under a directory, sorted by path."""
        files = read_sources((str(sample_project_dir),))
        assert [f.name for f in files] == ["helpers.ts", "package.json", "utils.ts"]

    def test_skips_vendored_directories(self, sample_project_dir: Path) -> None:
        """Should skip dependency and hidden directories."""
        (sample_project_dir / "node_modules").mkdir()
        (sample_project_dir / "node_modules" / "dep.js").write_text("module.exports = 1;\n")
        (sample_project_dir / ".git").mkdir()
        (sample_project_dir / ".git" / "HEAD").write_text("ref: main\n")

        names = [f.name for f in read_sources((str(sample_project_dir),))]
        assert "dep.js" not in names
        assert "HEAD" not in names


class TestCommands:
    """Tests for the CLI commands."""

    def test_version(self, runner: CliRunner) -> None:
        """Should print the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_analyze(self, runner: CliRunner, sample_project_dir: Path) -> None:
        """Should print the analysis and suggestions as JSON."""
        result = runner.invoke(cli, ["analyze", str(sample_project_dir)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["analysis"]["languages"] == ["TypeScript"]
        assert data["analysis"]["frameworks"] == ["Node.js", "React"]
        assert data["analysis"]["total_files"] == 3
        assert "Add LICENSE file" in data["suggestions"]

    def test_graph(self, runner: CliRunner, sample_project_dir: Path) -> None:
        """Should print the code-flow graph as JSON."""
        result = runner.invoke(cli, ["graph", str(sample_project_dir)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [n["label"] for n in data["nodes"]] == ["helpers.ts", "package.json", "utils.ts"]
        assert data["edges"] == [{"id": "e2-0", "source": 2, "target": 0, "kind": "imports"}]
        assert data["layout"] == "hierarchical"

    def test_graph_layout_from_env(
        self, runner: CliRunner, sample_project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should default the layout to NARRATO_LAYOUT."""
        monkeypatch.setenv("NARRATO_LAYOUT", "circular")
        result = runner.invoke(cli, ["graph", str(sample_project_dir)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["layout"] == "circular"

    def test_graph_summary(self, runner: CliRunner, sample_project_dir: Path) -> None:
        """Should print graph metadata with --summary."""
        result = runner.invoke(cli, ["graph", str(sample_project_dir), "--summary"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["edge_count"] == 1
        assert data["isolated"] == ["package.json"]

    def test_score(self, runner: CliRunner, temp_dir: Path) -> None:
        """Should score a saved conversation."""
        messages = temp_dir / "messages.json"
        messages.write_text(json.dumps([{"role": "user", "content": "installation and usage"}]))

        result = runner.invoke(cli, ["score", "--messages", str(messages), "--response", "ok"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "score": 20,
            "level": "Needs Work",
            "hint": "Keep answering questions to improve quality",
        }

    def test_score_rejects_non_list(self, runner: CliRunner, temp_dir: Path) -> None:
        """Should fail cleanly when the messages file is not a list."""
        messages = temp_dir / "messages.json"
        messages.write_text(json.dumps({"role": "user"}))

        result = runner.invoke(cli, ["score", "--messages", str(messages)])

        assert result.exit_code == 1
        assert "Scoring failed" in result.output

    def test_generate_requires_api_key(
        self, runner: CliRunner, sample_project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should exit with an error when the gateway is not configured."""
        monkeypatch.delenv("NARRATO_API_KEY", raising=False)
        result = runner.invoke(cli, ["generate", str(sample_project_dir)])

        assert result.exit_code == 1
        assert "NARRATO_API_KEY" in result.output

    def test_generate_to_file(
        self,
        runner: CliRunner,
        sample_project_dir: Path,
        temp_dir: Path,
        mock_gateway: None,
    ) -> None:
        """Should write the generated README to --output."""
        output = temp_dir / "README.out.md"
        result = runner.invoke(
            cli, ["generate", str(sample_project_dir / "utils.ts"), "--output", str(output)]
        )

        assert result.exit_code == 0
        assert output.read_text() == "# Generated"

    def test_interview(
        self, runner: CliRunner, sample_project_dir: Path, mock_gateway: None
    ) -> None:
        """Should print one interview turn as JSON."""
        result = runner.invoke(cli, ["interview", str(sample_project_dir), "--persona", "student"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["response"] == "# Generated"
        assert data["quality_score"] == 10
