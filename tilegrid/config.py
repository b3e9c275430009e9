"""
Tilegrid Configuration

Loads library defaults from environment variables with sensible fallbacks.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Library defaults loaded from environment variables."""

    # Path map defaults (used when build_path_map receives None)
    DEFAULT_ALLOW_DIAGONALS: bool = _env_flag("TILEGRID_ALLOW_DIAGONALS", "true")
    DEFAULT_DIAGONAL_WEIGHT_RATIO: float = float(
        os.getenv("TILEGRID_DIAGONAL_WEIGHT_RATIO", "1.5")
    )

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    GRIDS_DIR: Path = Path(
        os.getenv("TILEGRID_GRIDS_DIR", str(PROJECT_ROOT / "examples" / "grids"))
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.DEFAULT_DIAGONAL_WEIGHT_RATIO < 1:
            raise ValueError(
                "TILEGRID_DIAGONAL_WEIGHT_RATIO must be >= 1 "
                f"(got {cls.DEFAULT_DIAGONAL_WEIGHT_RATIO}). "
                "A diagonal step can never be cheaper than an orthogonal one."
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Tilegrid Configuration:",
            f"  Allow Diagonals: {cls.DEFAULT_ALLOW_DIAGONALS}",
            f"  Diagonal Weight Ratio: {cls.DEFAULT_DIAGONAL_WEIGHT_RATIO}",
            f"  Grids Directory: {cls.GRIDS_DIR}",
        ]
        return "\n".join(lines)
