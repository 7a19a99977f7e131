import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure process-wide logging for the API and dashboard entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Dash/werkzeug request lines drown out calculator logs at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
