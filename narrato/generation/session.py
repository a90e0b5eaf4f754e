"""Documentation session flows.

Each call analyzes the uploaded files from scratch, builds the prompt,
asks the gateway for a reply, and attaches scoring and suggestions.
Gateway exceptions propagate unchanged to the caller.
"""

from collections.abc import Sequence
from typing import Any

from narrato.analyzers.project import analyze, generate_suggestions
from narrato.analyzers.quality import score
from narrato.generation.gateway import ChatGateway
from narrato.generation.prompts import build_auto_generate_prompt, build_system_prompt
from narrato.models.analysis import ChatMessage, SourceFile
from narrato.models.generation import ExtractedData, GenerationResult, InterviewResult

# Score reported for one-shot generation, where there is no conversation to score
AUTO_GENERATE_QUALITY_SCORE = 85
DEFAULT_PROJECT_NAME = "Your Project"
AUTO_GENERATE_REQUEST = "Analyze the code and generate a comprehensive README.md file."


def project_name(files: Sequence[SourceFile]) -> str:
    """Infer a project name from the first uploaded file."""
    if not files:
        return DEFAULT_PROJECT_NAME
    return files[0].name.split(".")[0] or DEFAULT_PROJECT_NAME


def run_interview(
    files: Sequence[SourceFile],
    messages: Sequence[ChatMessage | dict[str, Any]],
    persona: str | None,
    gateway: ChatGateway,
) -> InterviewResult:
    """Run one interview turn.

    Args:
        files: Uploaded files.
        messages: Conversation so far (user and assistant turns).
        persona: Persona id; unknown ids use the professional persona.
        gateway: Chat-completions client.

    Returns:
        InterviewResult with the reply, quality score, and suggestions.
    """
    history = [m if isinstance(m, ChatMessage) else ChatMessage.model_validate(m) for m in messages]
    analysis = analyze(files)

    system = ChatMessage(role="system", content=build_system_prompt(persona, analysis))
    reply = gateway.complete([system, *history])

    return InterviewResult(
        response=reply,
        quality_score=score(history, reply),
        suggestions=generate_suggestions(analysis),
    )


def auto_generate(
    files: Sequence[SourceFile],
    persona: str | None,
    gateway: ChatGateway,
) -> GenerationResult:
    """Generate a README in a single request."""
    analysis = analyze(files)

    readme = gateway.complete(
        [
            ChatMessage(role="system", content=build_auto_generate_prompt(persona, analysis, files)),
            ChatMessage(role="user", content=AUTO_GENERATE_REQUEST),
        ]
    )

    return GenerationResult(
        generated_readme=readme,
        extracted_data=ExtractedData(project_name=project_name(files), features=readme),
        quality_score=AUTO_GENERATE_QUALITY_SCORE,
        suggestions=generate_suggestions(analysis),
    )
