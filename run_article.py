#!/usr/bin/env python3
"""Generate a Skyetrain article document end-to-end.

Usage:
    python run_article.py                             # A4 preset, placeholder article
    python run_article.py --preset narrow             # 6x9 inch mobile/book preset
    python run_article.py --content article.yaml --output out/article.docx
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from settings import Settings
from models.design import DesignTokens, PRESETS
from pipeline import stage1_content, stage2_assemble, stage3_write

logger = logging.getLogger("run_article")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a Skyetrain article to .docx")
    parser.add_argument("--preset", choices=sorted(PRESETS),
                        help="Page geometry preset (default: from settings, 'wide')")
    parser.add_argument("--content", type=Path,
                        help="YAML article file; the placeholder article is used when omitted")
    parser.add_argument("--tokens", type=Path,
                        help="YAML design tokens; the house tokens are used when omitted")
    parser.add_argument("--logo", type=Path, help="Logo image path")
    parser.add_argument("--output", type=Path, help="Output .docx path")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "preset": args.preset,
        "content_path": args.content,
        "tokens_path": args.tokens,
        "logo_path": args.logo,
        "output_path": args.output,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> Path:
    args = _parse_args(argv)
    settings = _settings_from_args(args)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    tokens = DesignTokens.load_or_default(settings.tokens_path)

    logger.info("=== Stage 1: Content ===")
    content = stage1_content.run(settings)

    logger.info("=== Stage 2: Assemble (%s) ===", settings.preset)
    plan = stage2_assemble.run(settings, content, tokens)

    logger.info("=== Stage 3: Write docx ===")
    output_path = stage3_write.run(settings, plan)

    print(f"Created: {output_path}")
    return output_path


if __name__ == "__main__":
    main()
