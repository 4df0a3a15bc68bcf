from pathlib import Path

import pytest
from PIL import Image

from models.content import Content
from models.design import SKYETRAIN_TOKENS, DesignTokens
from pipeline.stage2_assemble import LogoImage, load_logo
from settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_ARTICLE_DIR = FIXTURES_DIR / "sample_article"


@pytest.fixture
def sample_article_dir() -> Path:
    """Directory holding the sample article and token YAML files."""
    return SAMPLE_ARTICLE_DIR


@pytest.fixture
def sample_content(sample_article_dir: Path) -> Content:
    return Content.load(sample_article_dir / "content.yaml")


@pytest.fixture
def tokens() -> DesignTokens:
    return SKYETRAIN_TOKENS


@pytest.fixture
def logo_path(tmp_path: Path) -> Path:
    """A small PNG with the same 2000:466 proportions as the real logo."""
    path = tmp_path / "logo.png"
    Image.new("RGB", (200, 47), color=(61, 77, 183)).save(path, format="PNG")
    return path


@pytest.fixture
def logo(logo_path: Path) -> LogoImage:
    return load_logo(logo_path)


@pytest.fixture
def tmp_settings(tmp_path: Path, logo_path: Path, sample_article_dir: Path) -> Settings:
    """Settings pointing at the sample article, writing into a temp directory."""
    return Settings(
        logo_path=logo_path,
        content_path=sample_article_dir / "content.yaml",
        output_path=tmp_path / "out" / "article.docx",
    )
