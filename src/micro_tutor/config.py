"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


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
        if 'generation' in data:
            generation = data['generation']
            flattened['generation_base_url'] = generation.get('base_url')
            flattened['generation_model'] = generation.get('model')
            flattened['generation_timeout_seconds'] = generation.get('timeout_seconds')
            flattened['lesson_max_length'] = generation.get('lesson_max_length')
            flattened['short_max_length'] = generation.get('short_max_length')
        if 'limits' in data:
            flattened['free_daily_lesson_limit'] = data['limits'].get('free_daily_lessons')
            flattened['premium_topics'] = data['limits'].get('premium_topics')

        # Remove None values
        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote generation (optional: None disables it and every request uses canned content)
    huggingface_api_key: str | None = Field(default=None)
    generation_base_url: str = Field(default="https://router.huggingface.co/v1")
    generation_model: str = Field(default="meta-llama/Llama-3.1-8B-Instruct")
    generation_timeout_seconds: float = Field(default=10.0)
    lesson_max_length: int = Field(default=200)
    short_max_length: int = Field(default=100)

    # Authentication (optional: None disables the shared-secret check)
    app_secret: str | None = Field(default=None)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Plans
    free_daily_lesson_limit: int = Field(default=3)
    premium_topics: list[str] = Field(default_factory=lambda: ["Advanced Topics"])

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    @property
    def data_dir(self) -> Path:
        d = self.project_root / "data"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def progress_dir(self) -> Path:
        d = self.data_dir / "progress"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def frontend_dir(self) -> Path:
        return self.project_root / "frontend"

    @property
    def generation_enabled(self) -> bool:
        """Remote generation is configured only when a credential is present."""
        return bool(self.huggingface_api_key)

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
