"""Prompt construction from a project analysis.

Serializes a ProjectAnalysis into summary lines and wraps them in
persona-specific instructions for the interview and auto-generate flows.
"""

from collections.abc import Sequence

from narrato.models.analysis import ProjectAnalysis, SourceFile

DEFAULT_PERSONA = "professional"

# Number of files and characters per file quoted in the auto-generate prompt
SAMPLE_FILE_COUNT = 5
SAMPLE_CHARS = 500

INTERVIEW_FOCUS: dict[str, str] = {
    "student": """This is a STUDENT PROJECT. Focus on:
- Clear learning objectives and what was learned
- Step-by-step setup instructions for peers
- Challenges faced and how they were solved
- Simple, educational tone
- Installation commands and dependencies stated clearly""",
    "opensource": """This is an OPEN SOURCE PROJECT. Focus on:
- Contribution guidelines and community aspects
- Clear API documentation and usage examples
- Installation across different platforms
- License and attribution information
- Professional, welcoming tone for contributors""",
    "hackathon": """This is a HACKATHON PROJECT. Focus on:
- The problem being solved and what is new about the solution
- Quick start guide for judges
- Live demo link and screenshots
- Technology choices and the reasons for them
- Impact and future potential
- Energetic tone""",
    "professional": """This is a PROFESSIONAL PROJECT. Focus on:
- Business value and use cases
- Architecture and design decisions
- Security and scalability considerations
- Deployment and maintenance procedures
- API documentation and integration guides
- Formal, technical tone""",
}

GENERATION_STYLE: dict[str, str] = {
    "student": "Educational and clear for learners. Include learning objectives and step-by-step explanations.",
    "opensource": "Community-friendly and welcoming to contributors. Include contribution guidelines and license info.",
    "hackathon": "Problem-focused and energetic. Highlight innovation, impact, and demo links.",
    "professional": "Formal and business-oriented. Focus on architecture, scalability, and operations.",
}

PERSONAS: tuple[str, ...] = tuple(INTERVIEW_FOCUS)


def resolve_persona(persona: str | None) -> str:
    """Return a known persona id, falling back to the professional persona."""
    if persona and persona.lower() in INTERVIEW_FOCUS:
        return persona.lower()
    return DEFAULT_PERSONA


def summary_lines(analysis: ProjectAnalysis) -> list[str]:
    """Human-readable summary of an analysis, one fact per line."""
    return [
        f"{analysis.total_files} files ({analysis.code_files} code files, "
        f"{analysis.config_files} config files)",
        f"{analysis.total_lines} total lines of code",
        f"Languages: {', '.join(analysis.languages) or 'Unknown'}",
        f"Frameworks/Tools: {', '.join(analysis.frameworks) or 'Not detected'}",
        f"Code complexity score: {analysis.complexity}",
        f"Detected {len(analysis.classes)} classes, {len(analysis.functions)} functions",
        f"Found {len(analysis.imports)} import statements",
    ]


def _bullets(lines: Sequence[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


def build_system_prompt(persona: str | None, analysis: ProjectAnalysis) -> str:
    """System prompt for one interview turn."""
    base = (
        "You are NarratO, an AI documentation assistant. "
        "You've analyzed a project with:\n"
        f"{_bullets(summary_lines(analysis))}\n\n"
        "Your role is to interview the developer to create professional documentation. "
        "Be concise and direct: ask one clear question at a time."
    )
    return f"{base}\n\n{INTERVIEW_FOCUS[resolve_persona(persona)]}"


def code_samples(files: Sequence[SourceFile]) -> str:
    """Leading excerpt of the first few files, for the auto-generate prompt."""
    return "\n\n".join(
        f"File: {f.name}\n{f.content[:SAMPLE_CHARS]}..." for f in files[:SAMPLE_FILE_COUNT]
    )


def build_auto_generate_prompt(
    persona: str | None,
    analysis: ProjectAnalysis,
    files: Sequence[SourceFile],
) -> str:
    """System prompt asking for a complete README in one call."""
    return f"""You are NarratO, an AI documentation generator. Analyze this project and create a complete README.md.

PROJECT ANALYSIS:
{_bullets(summary_lines(analysis))}

CODE SAMPLES:
{code_samples(files)}

Generate a complete, professional README.md with:
1. Project title and description (inferred from files and code structure)
2. Key features (from the actual functionality in the code)
3. Installation instructions (from detected package managers and dependencies)
4. Usage examples (from actual code patterns)
5. Technology stack (all detected languages and frameworks)
6. Configuration details (if config files are present)

Format it as a complete markdown document that accurately reflects the analyzed code.

STYLE: {GENERATION_STYLE[resolve_persona(persona)]}"""
