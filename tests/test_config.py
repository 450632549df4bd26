"""
SVGboard Backend — Settings Tests
===================================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from svgboard.config import Settings


class TestSettings:

    def test_delete_policy_is_normalized(self):
        assert Settings(project_delete_policy=" FORBID ").project_delete_policy == "forbid"

    def test_unknown_delete_policy_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(project_delete_policy="orphan")

    def test_log_level_is_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="verbose")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://localhost:5173, https://board.example.com,")
        assert settings.cors_origins_list == [
            "http://localhost:5173",
            "https://board.example.com",
        ]
