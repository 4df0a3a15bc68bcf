import logging
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_OUTPUT_NAMES = {
    "wide": "output.docx",
    "narrow": "output_mobile.docx",
}


class Settings(BaseSettings):
    logo_path: Path = Path("./SKYETRAIN_MERCH_-_SKYETRAIN_LOGO.png")
    content_path: Path | None = None
    tokens_path: Path | None = None
    preset: Literal["wide", "narrow"] = "wide"
    output_path: Path | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SKT_",
        env_file_encoding="utf-8",
    )

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log_level: {v!r}")
        return level

    @property
    def resolved_output_path(self) -> Path:
        """Output path, defaulting to a per-preset file name in the working directory."""
        if self.output_path is not None:
            return self.output_path
        return Path(".") / _DEFAULT_OUTPUT_NAMES[self.preset]
