"""Result models for the interview and auto-generate flows."""

from pydantic import BaseModel, Field


class InterviewResult(BaseModel):
    """One interview turn: the assistant reply plus scoring."""

    response: str = Field(description="Assistant reply text")
    quality_score: int = Field(ge=0, le=100, description="Documentation quality score")
    suggestions: list[str] = Field(default_factory=list, description="Files to add")


class ExtractedData(BaseModel):
    """Project facts pulled out for the document templates."""

    project_name: str = Field(description="Name inferred from the first uploaded file")
    description: str = Field(default="Auto-generated from code analysis")
    features: str = Field(default="", description="Generated README text")


class GenerationResult(BaseModel):
    """One-shot README generation."""

    generated_readme: str = Field(description="Markdown README from the model")
    extracted_data: ExtractedData
    quality_score: int = Field(ge=0, le=100, description="Fixed score for generated docs")
    suggestions: list[str] = Field(default_factory=list, description="Files to add")
