"""
Configuration management for Nutq library.

Uses Pydantic Settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the NUTQ_ prefix.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Named thresholds. Kept as module constants so callers can import them,
# and used as the defaults of the matching settings fields below.
CONFUSION_THRESHOLD = 0.3
REMEDIAL_THRESHOLD = 0.5
MASTERY_THRESHOLD = 80
MIN_QUESTIONS_FOR_MASTERY = 5

STORAGE_KEY = "nutq-sound-progress-v1"


class NutqSettings(BaseSettings):
    """
    Configuration settings for Nutq library.

    All settings can be overridden via environment variables with NUTQ_ prefix.

    Example:
        export NUTQ_UNLOCK_ALL_LEVELS="true"
        export NUTQ_MASTERY_THRESHOLD="85"
        export NUTQ_STORAGE_DIR="~/.local/share/nutq"
    """

    model_config = SettingsConfigDict(
        env_prefix="NUTQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ============ Curriculum ============

    unlock_all_levels: bool = Field(
        default=False,
        description="Start every training level as available instead of locked",
    )

    mastery_threshold: int = Field(
        default=MASTERY_THRESHOLD,
        description="Accuracy percentage required to master a level",
        ge=0,
        le=100,
    )

    min_questions_for_mastery: int = Field(
        default=MIN_QUESTIONS_FOR_MASTERY,
        description="Minimum attempts at a level before it can be mastered",
        ge=1,
        le=100,
    )

    # ============ Judge ============

    confusion_threshold: float = Field(
        default=CONFUSION_THRESHOLD,
        description="Similarity from which a wrong answer counts as a confusion error",
        ge=0.0,
        le=1.0,
    )

    remedial_threshold: float = Field(
        default=REMEDIAL_THRESHOLD,
        description="Similarity from which a confusion error triggers similar-sound practice",
        ge=0.0,
        le=1.0,
    )

    # ============ Positions & Recommendations ============

    position_min_samples: int = Field(
        default=3,
        description="Answers needed at a word position before it is classified",
        ge=1,
        le=50,
    )

    strong_position_accuracy: int = Field(
        default=80,
        description="Accuracy at or above which a position is strong",
        ge=0,
        le=100,
    )

    weak_position_accuracy: int = Field(
        default=50,
        description="Accuracy below which a position is weak",
        ge=0,
        le=100,
    )

    review_min_attempts: int = Field(
        default=3,
        description="Attempts at the current level before articulation review is suggested",
        ge=1,
        le=50,
    )

    confusion_repeat_count: int = Field(
        default=2,
        description="Confusions with one sound before reviewing the pair is suggested",
        ge=1,
        le=50,
    )

    mastered_sound_levels: int = Field(
        default=6,
        description="Mastered levels needed for a sound to count as mastered",
        ge=1,
        le=12,
    )

    # ============ Persistence ============

    storage_key: str = Field(
        default=STORAGE_KEY,
        description="Versioned key under which learner progress is stored",
        min_length=1,
    )

    storage_dir: Path = Field(
        default=Path(".nutq"),
        description="Directory used by the JSON file storage backend",
    )

    # ============ Speech ============

    speech_lang: str = Field(
        default="ar-SA",
        description="Language tag for synthesized utterances",
    )

    speech_rate: float = Field(
        default=0.6,
        description="Speaking rate for synthesized utterances",
        ge=0.1,
        le=2.0,
    )

    # ============ Randomness ============

    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the default random source (shuffling, feedback variety)",
    )

    # ============ Validators ============

    @field_validator("storage_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("weak_position_accuracy")
    @classmethod
    def weak_below_strong(cls, v: int, info) -> int:
        """Ensure the weak cutoff does not overlap the strong cutoff."""
        strong = info.data.get("strong_position_accuracy")
        if strong is not None and v > strong:
            raise ValueError("weak_position_accuracy must be <= strong_position_accuracy")
        return v


# Default settings instance
_default_settings: NutqSettings | None = None


def get_settings() -> NutqSettings:
    """
    Get the default settings instance (lazily created).

    Returns:
        NutqSettings: The default settings
    """
    global _default_settings
    if _default_settings is None:
        _default_settings = NutqSettings()
    return _default_settings


def configure(**kwargs) -> NutqSettings:
    """
    Create and set new default settings.

    Args:
        **kwargs: Settings to override

    Returns:
        NutqSettings: The new settings instance
    """
    global _default_settings
    _default_settings = NutqSettings(**kwargs)
    return _default_settings
