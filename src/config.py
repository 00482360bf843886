"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

CHART_FORMATS = ("png", "svg", "pdf")


@dataclass
class Settings:
    log_level: str = "INFO"
    output_dir: Path = Path(".")
    chart_format: str = "png"
    gedcom_path: Path | None = None


def load_settings(environ=None) -> Settings:
    """Build settings from FAMILY_TREE_* environment variables."""
    env = os.environ if environ is None else environ

    chart_format = env.get("FAMILY_TREE_CHART_FORMAT", "png").lower()
    if chart_format not in CHART_FORMATS:
        chart_format = "png"

    gedcom = env.get("FAMILY_TREE_GEDCOM")
    return Settings(
        log_level=env.get("FAMILY_TREE_LOG_LEVEL", "INFO").upper(),
        output_dir=Path(env.get("FAMILY_TREE_OUTPUT_DIR", ".")),
        chart_format=chart_format,
        gedcom_path=Path(gedcom) if gedcom else None,
    )
