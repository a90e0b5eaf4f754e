"""CLI interface for Narrato.

Reads source files from disk and runs the analysis, graph, scoring, and
generation flows. JSON goes to stdout; logs and errors go to stderr.
"""

import json
import sys
from pathlib import Path

import click

from narrato import __version__
from narrato.config import default_layout
from narrato.models.analysis import SourceFile

# Directories never worth uploading
SKIP_DIRS = frozenset({"node_modules", "__pycache__", "venv", "dist", "build", "target"})


def _iter_paths(path: Path) -> list[Path]:
    if path.is_file():
        return [path]
    found = []
    for child in sorted(path.rglob("*")):
        rel_parts = child.relative_to(path).parts
        if any(part in SKIP_DIRS or part.startswith(".") for part in rel_parts[:-1]):
            continue
        if child.is_file():
            found.append(child)
    return found


def read_sources(paths: tuple[str, ...]) -> list[SourceFile]:
    """Read files (directories are walked) into SourceFiles, in argument order."""
    files: list[SourceFile] = []
    for raw in paths:
        for path in _iter_paths(Path(raw)):
            files.append(SourceFile.from_upload({"name": path.name, "content": path.read_bytes()}))
    return files


def _read_messages(messages_file: str | None) -> list[dict]:
    if messages_file is None:
        return []
    data = json.loads(Path(messages_file).read_text())
    if not isinstance(data, list):
        raise click.BadParameter("messages file must contain a JSON list", param_hint="--messages")
    return data


paths_argument = click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True)
)
persona_option = click.option(
    "--persona",
    type=click.Choice(["student", "opensource", "hackathon", "professional"]),
    default="professional",
    help="Documentation persona (default: professional)",
)


@click.group()
@click.version_option(version=__version__, prog_name="narrato")
def cli() -> None:
    """Narrato - code analysis for documentation generation."""
    pass


@cli.command()
@paths_argument
def analyze(paths: tuple[str, ...]) -> None:
    """Summarize languages, frameworks, and structure of source files.

    PATHS: Files or directories to analyze.
    """
    from narrato.analyzers import analyze as analyze_files
    from narrato.analyzers import generate_suggestions

    try:
        analysis = analyze_files(read_sources(paths))
        result = {
            "analysis": analysis.model_dump(),
            "suggestions": generate_suggestions(analysis),
        }
    except Exception as e:
        click.echo(f"Analysis failed: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2))


@cli.command()
@paths_argument
@click.option(
    "--layout",
    type=click.Choice(["hierarchical", "circular"]),
    default=None,
    help="Node layout (default: NARRATO_LAYOUT or hierarchical)",
)
@click.option(
    "--match",
    "match_mode",
    type=click.Choice(["loose", "strict"]),
    default="loose",
    help="Import-to-file matching (default: loose)",
)
@click.option("--dedupe", is_flag=True, help="Collapse parallel edges")
@click.option("--summary", is_flag=True, help="Print graph metadata instead of the graph")
def graph(
    paths: tuple[str, ...],
    layout: str | None,
    match_mode: str,
    dedupe: bool,
    summary: bool,
) -> None:
    """Build the code-flow graph of source files.

    PATHS: Files or directories to include.
    """
    from narrato.analyzers import code_flow, graph_metadata

    try:
        flow = code_flow(
            read_sources(paths),
            layout=layout or default_layout(),
            match=match_mode,
            dedupe=dedupe,
        )
    except Exception as e:
        click.echo(f"Graph build failed: {e}", err=True)
        sys.exit(1)

    if summary:
        click.echo(json.dumps(graph_metadata(flow), indent=2))
    else:
        click.echo(flow.model_dump_json(indent=2))


@cli.command()
@click.option(
    "--messages",
    "messages_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with a list of {role, content} messages",
)
@click.option("--response", default="", help="Latest assistant response text")
def score(messages_file: str | None, response: str) -> None:
    """Score documentation quality of a conversation."""
    from narrato.analyzers import quality_level
    from narrato.analyzers import score as score_conversation

    try:
        messages = _read_messages(messages_file)
    except (json.JSONDecodeError, click.BadParameter) as e:
        click.echo(f"Scoring failed: {e}", err=True)
        sys.exit(1)

    report = quality_level(score_conversation(messages, response))
    click.echo(report.model_dump_json(indent=2))


@cli.command()
@paths_argument
@persona_option
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the README here instead of stdout",
)
def generate(paths: tuple[str, ...], persona: str, output: str | None) -> None:
    """Generate a README for source files in one request.

    PATHS: Files or directories to document.

    Requires NARRATO_API_KEY.
    """
    from narrato.generation import ChatGateway, auto_generate

    try:
        with ChatGateway.from_env() as gateway:
            result = auto_generate(read_sources(paths), persona, gateway)
    except Exception as e:
        click.echo(f"Generation failed: {e}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.generated_readme)
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(result.generated_readme)
    for suggestion in result.suggestions:
        click.echo(f"Suggestion: {suggestion}", err=True)


@cli.command()
@paths_argument
@persona_option
@click.option(
    "--messages",
    "messages_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with the conversation so far",
)
def interview(paths: tuple[str, ...], persona: str, messages_file: str | None) -> None:
    """Run one documentation interview turn.

    PATHS: Files or directories being documented.

    Requires NARRATO_API_KEY.
    """
    from narrato.generation import ChatGateway, run_interview

    try:
        files = read_sources(paths)
        messages = _read_messages(messages_file) or [
            {
                "role": "user",
                "content": f"I've uploaded {len(files)} files. "
                "Please analyze them and start the interview.",
            }
        ]
        with ChatGateway.from_env() as gateway:
            result = run_interview(files, messages, persona, gateway)
    except Exception as e:
        click.echo(f"Interview failed: {e}", err=True)
        sys.exit(1)

    click.echo(result.model_dump_json(indent=2))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
