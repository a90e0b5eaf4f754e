"""Tests for documentation quality scoring."""

import pytest

from narrato.analyzers.quality import QUALITY_KEYWORDS, quality_level, score
from narrato.models.analysis import ChatMessage


def _messages(*texts: str) -> list[dict]:
    return [{"role": "user", "content": text} for text in texts]


class TestScore:
    """Tests for score."""

    def test_empty_inputs(self) -> None:
        """Should score missing inputs as zero."""
        assert score(None, None) == 0
        assert score([], "") == 0

    def test_message_points_are_capped(self) -> None:
        """Should give 10 points per message up to 30."""
        assert score(_messages("a"), "") == 10
        assert score(_messages("a", "b", "c"), "") == 30
        assert score(_messages(*"abcdefg"), "") == 30

    def test_monotonic_in_message_count(self) -> None:
        """Should never drop when another message is added."""
        previous = 0
        for count in range(12):
            current = score(_messages(*(["hello"] * count)), "short")
            assert current >= previous
            previous = current

    def test_keywords_case_insensitive(self) -> None:
        """Should add 5 per keyword found anywhere in the history."""
        result = score(_messages("INSTALLATION and Usage", "see the API"), "")
        assert result == 20 + 3 * 5

    def test_keyword_counted_once(self) -> None:
        """Should count a repeated keyword once."""
        assert score(_messages("setup setup setup"), "") == 10 + 5

    def test_response_shape(self) -> None:
        """Should reward long responses and code fences."""
        assert score([], "x" * 101) == 10
        assert score([], "x" * 100) == 0
        assert score([], "```bash\npip install\n```") == 5

    def test_clamped_to_100(self) -> None:
        """Should never exceed 100."""
        history = _messages(" ".join(QUALITY_KEYWORDS), "b", "c")
        response = "```python\n" + "x" * 200 + "\n```"
        assert score(history, response) == 95
        assert score(history * 3, response) <= 100

    def test_accepts_message_models(self) -> None:
        """Should read content from ChatMessage objects too."""
        assert score([ChatMessage(content="features")], "") == 15

    def test_ignores_non_text_content(self) -> None:
        """Should skip messages without string content."""
        assert score([{"role": "user", "content": None}, {"role": "user"}], "") == 20


class TestQualityLevel:
    """Tests for quality_level."""

    @pytest.mark.parametrize(
        ("value", "level"),
        [
            (100, "Excellent"),
            (80, "Excellent"),
            (79, "Good"),
            (60, "Good"),
            (59, "Fair"),
            (40, "Fair"),
            (39, "Needs Work"),
            (0, "Needs Work"),
        ],
    )
    def test_bands(self, value: int, level: str) -> None:
        """Should map score bands to display levels."""
        report = quality_level(value)
        assert report.level == level
        assert report.score == value

    def test_out_of_range_is_clamped(self) -> None:
        """Should clamp scores outside [0, 100]."""
        assert quality_level(150).score == 100
        assert quality_level(-5).level == "Needs Work"

    def test_hint(self) -> None:
        """Should include a next-step hint."""
        assert quality_level(65).hint == "Almost there! Include examples"
