"""Narrato - heuristic code analysis for documentation generation."""

# Load .env so NARRATO_API_KEY, NARRATO_MODEL, etc. are set for any entry
# point (CLI, pytest, scripts) that imports narrato.
from dotenv import load_dotenv

load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"
