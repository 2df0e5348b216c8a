"""Settings schema for filepick."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


class AppearanceSettings(BaseModel):
    theme: str = Field(default="textual-dark", description="Textual theme name")


class ScanSettings(BaseModel):
    time_budget_ms: int = Field(default=100, ge=0, le=10_000, description="Wall-clock budget per scan step")
    interval_ms: int = Field(default=500, ge=1, le=60_000, description="Delay between scan steps")
    ignore_prefixes: list[str] = Field(default_factory=lambda: ["."])
    ignore_suffixes: list[str] = Field(default_factory=lambda: [".o", ".obj"])
    extra_ignore_patterns: list[str] = Field(
        default_factory=list,
        description="gitwildmatch patterns applied to root-relative paths",
    )
    use_gitignore: bool = Field(default=False)

    @property
    def time_budget_s(self) -> float:
        return self.time_budget_ms / 1000.0

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0


class DisplaySettings(BaseModel):
    title: str = Field(default="Files")
    min_width: int = Field(default=40, ge=10)
    max_width: int = Field(default=100, ge=10)
    min_height: int = Field(default=5, ge=1)
    max_height: int = Field(default=20, ge=1)
    fallback_width: int = Field(default=80, ge=1, description="Width budget when the list reports none")

    @model_validator(mode="after")
    def check_bounds(self) -> "DisplaySettings":
        if self.min_width > self.max_width:
            raise ValueError("display.min_width must not exceed display.max_width")
        if self.min_height > self.max_height:
            raise ValueError("display.min_height must not exceed display.max_height")
        return self


class PathsSettings(BaseModel):
    root: str = Field(default_factory=lambda: str(Path.cwd()))

    @field_validator("root")
    @classmethod
    def validate_path(cls, value: str) -> str:
        return str(Path(value).expanduser())


class AppSettings(BaseModel):
    schema_version: int = Field(default=1)
    appearance: AppearanceSettings = Field(default_factory=AppearanceSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)
