"""
Configuration - environment lookups, default directory, logging
"""
import logging
import os
from pathlib import Path

from .adapters.cninfo import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"

# Keywords excluded from every download unless overridden (report summaries)
DEFAULT_EXCLUDE_KEYWORDS = ("摘要",)


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging once for an entry point"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT
    )
    if not verbose:
        # Suppress per-request INFO logs
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_home_default_dir() -> Path:
    """~/Dropbox/Personal/年报"""
    return Path.home() / "Dropbox" / "Personal" / "年报"


def get_default_dir() -> Path:
    """Get download directory from env, else the home default, else cwd"""
    env_dir = os.environ.get("ANN_DOWNLOADER_DIR")
    if env_dir:
        return Path(env_dir)

    try:
        default = get_home_default_dir()
    except RuntimeError:
        logger.info("HOME not exist, using current directory as default")
        return Path.cwd()

    if not default.exists():
        logger.info(f"{default} not exist, using current directory as default")
        return Path.cwd()

    if not default.is_dir():
        logger.info(f"{default} is not a directory, using current directory as default")
        return Path.cwd()

    return default


def get_default_category() -> str:
    """Get category selector from env or use annual reports"""
    return os.environ.get("ANN_DOWNLOADER_CATEGORY", DEFAULT_CATEGORY)
