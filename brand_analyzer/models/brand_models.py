"""Models for brand analysis: request, partial results and the final record."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from brand_analyzer.constants import FONT_SAMPLE_TEXT

FontCategory = Literal["Serif", "Sans-Serif", "Monospace"]
ColorLabel = Literal["Primary", "Secondary", "Accent"]


class BrandModel(BaseModel):
    """Immutable base with camelCase wire aliases (siteName, scrapedAt)."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AnalyzeRequest(BaseModel):
    """Body accepted by the analyze endpoint."""

    url: str | None = Field(default=None, description="Raw URL to analyze")


class LogoCandidate(BrandModel):
    """A plausible logo location ranked by source reliability."""

    url: str | None = Field(
        default=None, description="Absolute logo URL (None for inline SVG)"
    )
    source: str = Field(..., description="Where the candidate was found")
    priority: int = Field(..., ge=1, description="Lower is preferred")


class ColorSample(BrandModel):
    """A brand color with its accumulated weight and palette role."""

    hex: str = Field(..., pattern=r"^#[0-9A-F]{6}$", description="#RRGGBB")
    rgb: tuple[int, int, int] = Field(..., description="Channel triple 0-255")
    luminance: float = Field(..., ge=0.0, le=1.0)
    frequency: int = Field(..., ge=0, description="Accumulated sighting weight")
    label: ColorLabel


class FontEntry(BrandModel):
    """A font family discovered in markup or CSS."""

    name: str
    category: FontCategory
    sample: str = FONT_SAMPLE_TEXT


class SiteMetadata(BrandModel):
    """Descriptive metadata; every field may be empty."""

    title: str = ""
    description: str = ""
    site_name: str = ""


class AnalysisResult(BrandModel):
    """Aggregate brand identity for one analyzed URL."""

    url: str
    site_name: str
    title: str
    description: str
    tagline: str
    logo: LogoCandidate | None = None
    fonts: tuple[FontEntry, ...] = Field(default_factory=tuple)
    colors: tuple[ColorSample, ...] = Field(default_factory=tuple)
    scraped_at: datetime
    cached: bool = Field(
        default=False, description="True when served from the result cache"
    )

    def to_wire(self) -> dict:
        """Serialize to the JSON shape returned by the HTTP host and CLI."""
        return self.model_dump(mode="json", by_alias=True)
