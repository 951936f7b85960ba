"""Site-wide presentation settings."""

from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Literal

from love_days.errors import ValidationError

BackgroundType = Literal["gradient", "image"]


@dataclass(frozen=True)
class SiteSettings:
    """Singleton settings record shown on every page."""

    couple_name: str = "Tuyền & Trang"
    anniversary_date: date = date(2024, 12, 4)
    background_type: BackgroundType = "gradient"
    gradient_color1: str = "#FF6B9D"
    gradient_color2: str = "#C06C84"
    background_url: str = ""
    avatar1_url: str = ""
    avatar2_url: str = ""
    enable_hearts: bool = True
    enable_particles: bool = True
    enable_gradient: bool = True
    enable_parallax: bool = True
    animation_intensity: int = 5
    theme_color: str = "#FF6B9D"


DEFAULT_SETTINGS = SiteSettings()

_DOCUMENT_KEYS: dict[str, str] = {
    "couple_name": "coupleName",
    "anniversary_date": "anniversaryDate",
    "background_type": "backgroundType",
    "gradient_color1": "gradientColor1",
    "gradient_color2": "gradientColor2",
    "background_url": "backgroundUrl",
    "avatar1_url": "avatar1Url",
    "avatar2_url": "avatar2Url",
    "enable_hearts": "enableHearts",
    "enable_particles": "enableParticles",
    "enable_gradient": "enableGradient",
    "enable_parallax": "enableParallax",
    "animation_intensity": "animationIntensity",
    "theme_color": "themeColor",
}
_FIELD_NAMES = frozenset(field.name for field in fields(SiteSettings))


def settings_to_document(settings: SiteSettings) -> dict[str, object]:
    """Serialize settings with the camelCase keys used on disk and the wire."""
    doc: dict[str, object] = {}
    for name, key in _DOCUMENT_KEYS.items():
        value = getattr(settings, name)
        doc[key] = value.isoformat() if isinstance(value, date) else value
    return doc


def settings_from_document(doc: dict[str, object]) -> SiteSettings:
    """Build settings from a stored document.

    Keys missing from ``doc`` take their value from ``DEFAULT_SETTINGS`` so
    documents written by older versions keep loading. Unknown keys are
    ignored.
    """
    changes: dict[str, object] = {}
    for name, key in _DOCUMENT_KEYS.items():
        if key in doc:
            changes[name] = doc[key]
    return merge_settings(DEFAULT_SETTINGS, changes)


def merge_settings(current: SiteSettings, changes: dict[str, object]) -> SiteSettings:
    """Return ``current`` with the given snake_case fields replaced."""
    unknown = set(changes) - _FIELD_NAMES
    if unknown:
        raise ValidationError(f"Unknown settings fields: {', '.join(sorted(unknown))}")
    normalized = dict(changes)
    raw_date = normalized.get("anniversary_date")
    if isinstance(raw_date, str):
        try:
            normalized["anniversary_date"] = date.fromisoformat(raw_date[:10])
        except ValueError as exc:
            raise ValidationError(f"Invalid anniversary date: {raw_date}") from exc
    background_type = normalized.get("background_type")
    if background_type is not None and background_type not in {"gradient", "image"}:
        raise ValidationError(f"Invalid background type: {background_type}")
    return replace(current, **normalized)
