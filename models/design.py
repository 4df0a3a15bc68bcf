"""Design tokens and page-geometry presets.

Units follow WordprocessingML so values pass straight through to the
serializer:
  - spacing, page size and margins in twips (1/20 pt)
  - font sizes in half-points
  - logo width in pixels

``DesignTokens`` has no defaults: every key must be supplied, so a missing
token fails at construction with a ValidationError naming the field rather
than at render time.
"""
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

# height / width of the source logo artwork (2000 x 466 px)
LOGO_ASPECT = 466 / 2000

_HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{6}$")


class Palette(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    subtitle: str
    heading: str
    accent_blue: str
    accent_red: str
    meta: str

    @field_validator("*")
    @classmethod
    def must_be_hex_color(cls, v: str) -> str:
        v = v.lstrip("#")
        if not _HEX_COLOR.match(v):
            raise ValueError(f"expected a six-digit hex colour, got {v!r}")
        return v.upper()


class Fonts(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str
    heading: str


class Sizes(BaseModel):
    """Font sizes in half-points (22 = 11pt)."""
    model_config = ConfigDict(frozen=True)

    body: int
    heading: int
    title: int
    subtitle: int
    meta: int

    @field_validator("*")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("font sizes must be positive")
        return v


class Spacing(BaseModel):
    """Paragraph gaps and line height in twips."""
    model_config = ConfigDict(frozen=True)

    body_after: int
    body_line: int
    bullet_after: int
    section_before: int
    section_after: int


class DesignTokens(BaseModel):
    model_config = ConfigDict(frozen=True)

    palette: Palette
    fonts: Fonts
    sizes: Sizes
    spacing: Spacing

    @classmethod
    def load(cls, path: Path) -> "DesignTokens":
        """Load from a YAML file. Every token must be present.

        Raises FileNotFoundError if path does not exist.
        """
        import yaml  # lazy — only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(data)

    @classmethod
    def load_or_default(cls, path: Path | None) -> "DesignTokens":
        """Load from path if given, otherwise return the house tokens."""
        if path is None:
            return SKYETRAIN_TOKENS
        return cls.load(path)


SKYETRAIN_TOKENS = DesignTokens(
    palette=Palette(
        text="3A3A3A",
        subtitle="777777",
        heading="2A2A2A",
        accent_blue="3D4DB7",
        accent_red="C65D4A",
        meta="CCCCCC",
    ),
    fonts=Fonts(body="Georgia", heading="Arial"),
    sizes=Sizes(body=22, heading=26, title=38, subtitle=20, meta=16),
    spacing=Spacing(
        body_after=180,
        body_line=336,
        bullet_after=80,
        section_before=600,
        section_after=180,
    ),
)


# ---------------------------------------------------------------------------
# Page geometry
# ---------------------------------------------------------------------------

class TitleBlockSpacing(BaseModel):
    """Twips around the logo/title/subtitle/rule/author block."""
    model_config = ConfigDict(frozen=True)

    logo_before: int
    logo_after: int
    title_before: int
    title_after: int
    subtitle_after: int
    rule_after: int
    author_after: int


class PageGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    width: int
    height: int
    margin_top: int
    margin_right: int
    margin_bottom: int
    margin_left: int
    logo_width: int
    title_block: TitleBlockSpacing

    @property
    def logo_height(self) -> int:
        return round(self.logo_width * LOGO_ASPECT)


WIDE = PageGeometry(
    name="wide",
    width=11906,   # A4
    height=16838,
    margin_top=1440,
    margin_right=1600,
    margin_bottom=1440,
    margin_left=1600,
    logo_width=180,
    title_block=TitleBlockSpacing(
        logo_before=200,
        logo_after=360,
        title_before=60,
        title_after=240,
        subtitle_after=160,
        rule_after=100,
        author_after=480,
    ),
)

NARROW = PageGeometry(
    name="narrow",
    width=8640,    # 6 x 9 inch
    height=12960,
    margin_top=1080,
    margin_right=1080,
    margin_bottom=1080,
    margin_left=1080,
    logo_width=150,
    title_block=TitleBlockSpacing(
        logo_before=120,
        logo_after=300,
        title_before=60,
        title_after=200,
        subtitle_after=140,
        rule_after=80,
        author_after=400,
    ),
)

PRESETS: dict[str, PageGeometry] = {p.name: p for p in (WIDE, NARROW)}


def get_preset(name: str) -> PageGeometry:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown page preset {name!r}; expected one of {sorted(PRESETS)}"
        ) from None
