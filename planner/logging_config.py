import logging
import os
from pathlib import Path

from planner.models import Settings


def configure_logging(settings: Settings | None = None, filename: Path | None = None):
    default = settings.log_level if settings is not None else "INFO"
    level_name = os.getenv("PLANNER_LOG_LEVEL", default).upper()
    level = getattr(logging, level_name, logging.INFO)
    kwargs = {}
    if filename is not None:
        filename.parent.mkdir(parents=True, exist_ok=True)
        kwargs["filename"] = str(filename)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        **kwargs,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
