import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional client and phase fields."""
    def format(self, record):
        # Add default values for client and phase if not present
        if not hasattr(record, 'client'):
            record.client = '-'
        if not hasattr(record, 'phase'):
            record.phase = '-'
        return super().format(record)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [client=%(client)s phase=%(phase)s] - %(message)s"
    ))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
