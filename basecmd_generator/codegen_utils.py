import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

GOFMT_TIMEOUT_SECONDS = 30


def find_gofmt() -> Optional[str]:
    """Path of the gofmt executable, or None when Go is not installed."""
    return shutil.which("gofmt")


def format_go_code_using_gofmt(filepath: Path, code_string: str, gofmt_path: Optional[str] = None) -> str:
    """
    Formats the given Go code using gofmt.

    gofmt reads the source from stdin. When it is missing or rejects the
    source, the code is returned unchanged so the file is still written.
    """
    gofmt_path = gofmt_path or find_gofmt()
    if not gofmt_path:
        logger.debug(f"gofmt not found, writing unformatted code: {filepath}")
        return code_string

    try:
        completed = subprocess.run(
            [gofmt_path],
            input=code_string,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error(f"Could not run gofmt on {filepath}: {e}")
        logger.warning("Writing unformatted Go code.")
        return code_string

    if completed.returncode != 0:
        logger.error(f"gofmt rejected {filepath}: {completed.stderr.strip()}")
        logger.warning("Writing unformatted Go code due to gofmt error.")
        return code_string

    logger.debug(f"Formatted code using gofmt: {filepath}")
    return completed.stdout
