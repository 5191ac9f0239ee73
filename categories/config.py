"""
Configuration using pydantic-settings.

Option groups mirror the recognised configuration surface:
stats.*, html.select.*, slug.*. Components receive a Settings
instance (or one of its groups) explicitly at construction.
"""
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StatsOptions(BaseModel):
    """Per-category usage counters."""
    model_config = ConfigDict(frozen=True)

    status: bool = True
    # Attribute read off each categorizable entity to partition its bucket
    categorizable_type_field: str = "type"


class SelectOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    separator: str = " > "


class HtmlOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    select: SelectOptions = SelectOptions()


class SlugOptions(BaseModel):
    """
    Slug generation options.

    Every option is nullable so that a misconfiguration reaches the
    SlugGenerator guard instead of being silently defaulted.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: Optional[str] = "slug"
    from_field: Optional[str] = Field(default="name", alias="from")
    on_create: Optional[bool] = True
    on_update: Optional[bool] = True
    separator: Optional[str] = "-"
    lang: Optional[str] = None


class Settings(BaseSettings):
    """Settings loaded from environment variables (CATEGORIES_*)."""

    # Database
    database_url: str = "sqlite:///./categories.db"
    debug: bool = False

    # Default locale for translated names and slug transliteration
    locale: str = "en"

    stats: StatsOptions = StatsOptions()
    html: HtmlOptions = HtmlOptions()
    slug: SlugOptions = SlugOptions()

    model_config = SettingsConfigDict(
        env_prefix="CATEGORIES_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
