"""Pydantic models for API request bodies."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted or null fields keep their value."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    couple_name: str | None = Field(default=None, alias="coupleName")
    anniversary_date: date | None = Field(default=None, alias="anniversaryDate")
    background_type: Literal["gradient", "image"] | None = Field(
        default=None, alias="backgroundType"
    )
    gradient_color1: str | None = Field(default=None, alias="gradientColor1")
    gradient_color2: str | None = Field(default=None, alias="gradientColor2")
    background_url: str | None = Field(default=None, alias="backgroundUrl")
    avatar1_url: str | None = Field(default=None, alias="avatar1Url")
    avatar2_url: str | None = Field(default=None, alias="avatar2Url")
    enable_hearts: bool | None = Field(default=None, alias="enableHearts")
    enable_particles: bool | None = Field(default=None, alias="enableParticles")
    enable_gradient: bool | None = Field(default=None, alias="enableGradient")
    enable_parallax: bool | None = Field(default=None, alias="enableParallax")
    animation_intensity: int | None = Field(default=None, alias="animationIntensity")
    theme_color: str | None = Field(default=None, alias="themeColor")

    def changes(self) -> dict[str, object]:
        """Return the fields the client actually sent."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
