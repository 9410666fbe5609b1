"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_TOPICS: list[str] = [
    "Café & Restaurant",
    "Public Transport",
    "Making Friends",
    "Job Interview",
    "Shopping",
    "Emergency",
    "Romance",
    "Technology",
]


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'server' in data:
            flattened['host'] = data['server'].get('host')
            flattened['port'] = data['server'].get('port')
        if 'content' in data:
            content = data['content']
            flattened['target_language'] = content.get('target_language')
            flattened['cards_per_batch'] = content.get('cards_per_batch')
            flattened['default_level'] = content.get('default_level')
        if 'openai' in data:
            flattened['content_model'] = data['openai'].get('content_model')
            flattened['tts_model'] = data['openai'].get('tts_model')
        if 'voices' in data:
            flattened['tts_voice_formal'] = data['voices'].get('formal')
            flattened['tts_voice_informal'] = data['voices'].get('informal')
            flattened['tts_voice_slang'] = data['voices'].get('slang')
        if 'reminders' in data:
            flattened['reminder_delay_seconds'] = data['reminders'].get('delay_seconds')
        if 'storage' in data:
            flattened['progress_key'] = data['storage'].get('progress_key')

        # Remove None values
        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(description="OpenAI API key")
    content_model: str = Field(default="gpt-4o-mini")
    tts_model: str = Field(default="gpt-4o-mini-tts")
    tts_voice_formal: str = Field(default="onyx")
    tts_voice_informal: str = Field(default="nova")
    tts_voice_slang: str = Field(default="fable")

    # Authentication (optional: None disables auth)
    app_secret: str | None = Field(default=None)

    # Content
    target_language: str = Field(default="French")
    cards_per_batch: int = Field(default=3, ge=1)
    default_level: str = Field(default="A2")

    # Reminders
    reminder_delay_seconds: float = Field(default=5.0, ge=0)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Storage
    progress_key: str = Field(default="lf_user_stats")

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    @property
    def data_dir(self) -> Path:
        d = self.project_root / "data"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def progress_path(self) -> Path:
        """File backing the single persisted progress record."""
        return self.data_dir / f"{self.progress_key}.json"

    @property
    def frontend_dir(self) -> Path:
        return self.project_root / "frontend"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()


def load_topics() -> list[str]:
    """Load the ordered topic list from YAML, falling back to the built-in list."""
    topics_path = _find_project_root() / "config" / "topics.yaml"
    if not topics_path.exists():
        return list(DEFAULT_TOPICS)
    with open(topics_path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    topics = [str(t) for t in data.get('topics', []) if str(t).strip()]
    return topics or list(DEFAULT_TOPICS)
