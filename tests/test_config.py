"""Unit tests for the config module."""

import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from notebook_index.config import Settings


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_defaults_match_scoring_constants(self):
        settings = Settings()

        assert settings.search_limit == 10
        assert settings.link_suggestion_limit == 6
        assert settings.recent_suggestion_limit == 5
        assert settings.recent_notes_limit == 6
        assert settings.similar_top_k == 3
        assert settings.snippet_radius == 48
        assert settings.recency_max_boost == 35.0
        assert settings.recency_window_days == 90.0
        assert settings.log_level == "info"
        assert settings.log_json is True

    @patch.dict(os.environ, {"NOTEBOOK_SEARCH_LIMIT": "25", "NOTEBOOK_SNIPPET_RADIUS": "20"}, clear=False)
    def test_reads_prefixed_environment(self):
        settings = Settings()

        assert settings.search_limit == 25
        assert settings.snippet_radius == 20

    @patch.dict(os.environ, {"notebook_similar_top_k": "7"}, clear=False)
    def test_environment_is_case_insensitive(self):
        assert Settings().similar_top_k == 7

    @patch.dict(os.environ, {"SEARCH_LIMIT": "99"}, clear=False)
    def test_unprefixed_variables_are_ignored(self):
        assert Settings().search_limit == 10

    @patch.dict(os.environ, {"NOTEBOOK_LOG_LEVEL": "DEBUG"}, clear=False)
    def test_log_level_is_normalized(self):
        assert Settings().log_level == "debug"

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("NOTEBOOK_RECENT_NOTES_LIMIT=12\n", encoding="utf-8")

        assert Settings().recent_notes_limit == 12

    def test_rejects_negative_limit(self):
        with pytest.raises(ValidationError):
            Settings(search_limit=-1)

    def test_rejects_non_positive_window(self):
        with pytest.raises(ValidationError):
            Settings(recency_window_days=0)

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_recent_limit_cannot_exceed_suggestion_limit(self):
        with pytest.raises(ValidationError, match="RECENT_SUGGESTION_LIMIT"):
            Settings(link_suggestion_limit=3, recent_suggestion_limit=4)

    def test_extra_keys_are_ignored(self):
        settings = Settings(unknown_option="x")

        assert not hasattr(settings, "unknown_option")
