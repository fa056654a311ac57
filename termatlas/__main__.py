"""Module entry point to render the map via ``python -m termatlas``."""
from __future__ import annotations

from .main import main


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
