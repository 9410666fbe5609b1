"""Tests for settings and topic configuration."""

import pytest

from lingua_franca import config
from lingua_franca.config import DEFAULT_TOPICS, Settings, load_topics


@pytest.fixture
def project_root(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "_find_project_root", lambda: tmp_path)
    (tmp_path / "config").mkdir()
    return tmp_path


def test_defaults_without_yaml(project_root, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("CARDS_PER_BATCH", raising=False)

    settings = Settings(_env_file=None, project_root=project_root)

    assert settings.cards_per_batch == 3
    assert settings.target_language == "French"
    assert settings.progress_path == project_root / "data" / "lf_user_stats.json"


def test_yaml_values_are_used(project_root, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    (project_root / "config" / "settings.yaml").write_text(
        "content:\n  cards_per_batch: 5\nvoices:\n  slang: echo\n"
    )

    settings = Settings(_env_file=None, project_root=project_root)

    assert settings.cards_per_batch == 5
    assert settings.tts_voice_slang == "echo"


def test_env_overrides_yaml(project_root, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("CARDS_PER_BATCH", "7")
    (project_root / "config" / "settings.yaml").write_text("content:\n  cards_per_batch: 5\n")

    settings = Settings(_env_file=None, project_root=project_root)

    assert settings.cards_per_batch == 7


def test_topics_fallback(project_root):
    assert load_topics() == DEFAULT_TOPICS


def test_topics_from_yaml(project_root):
    (project_root / "config" / "topics.yaml").write_text("topics:\n  - Travel\n  - Sports\n")

    assert load_topics() == ["Travel", "Sports"]


def test_shipped_topics_file():
    assert len(load_topics()) == 8
