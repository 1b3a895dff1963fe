from __future__ import annotations

import pytest
from pydantic import ValidationError

from gallery.core.config import DEFAULT_CORS_ORIGINS, Settings


def test_list_settings_accept_json_csv_and_lists():
    settings = Settings(
        cors_origins='["https://gallery.example.com", " https://admin.example.com "]',
        admin_subjects="owner@example.com, curator@example.com,",
    )
    assert settings.cors_origins == ["https://gallery.example.com", "https://admin.example.com"]
    assert settings.admin_subjects == ["owner@example.com", "curator@example.com"]

    listed = Settings(admin_subjects=["  editor@example.com", ""])
    assert listed.admin_subjects == ["editor@example.com"]


def test_empty_list_settings_fall_back_to_defaults():
    settings = Settings(cors_origins="", admin_subjects="")
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.admin_subjects == []


def test_page_limits_must_be_non_negative():
    with pytest.raises(ValidationError):
        Settings(max_page_limit=-1)
