"""Shared test fixtures for CommentWall tests."""

import json
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from commentwall.adapters.comment_store import CommentStore
from commentwall.core.config_manager import ConfigManager, DEFAULT_CONFIG
from commentwall.core.i18n_manager import I18nManager


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset all singletons after each test."""
    yield
    ConfigManager.reset()
    I18nManager.reset()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def config_file(tmp_dir):
    """Create a temporary settings.yaml and return its path."""
    config_dir = tmp_dir / "config"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "settings.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(dict(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)

    return config_path


@pytest.fixture
def store():
    """A CommentStore double with no comments."""
    mock = MagicMock(spec=CommentStore)
    mock.list_comments.return_value = []
    return mock


@pytest.fixture
def locale_dir(tmp_dir):
    """Create temporary locale directory with test JSON files."""
    loc_dir = tmp_dir / "locales"
    loc_dir.mkdir(parents=True)

    en_data = {
        "app": {"title": "CommentWall"},
        "list": {"view_more": "View More"},
        "form": {"counter": "{count}/{max} characters"},
    }
    ko_data = {
        "app": {"title": "CommentWall"},
        "list": {"view_more": "더 보기"},
        "form": {"counter": "{count}/{max}자"},
    }

    with open(loc_dir / "en_US.json", "w", encoding="utf-8") as f:
        json.dump(en_data, f, ensure_ascii=False)
    with open(loc_dir / "ko_KR.json", "w", encoding="utf-8") as f:
        json.dump(ko_data, f, ensure_ascii=False)

    return loc_dir
