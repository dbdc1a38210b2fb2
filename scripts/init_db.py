# scripts/init_db.py
"""Drop and recreate the dashboard schema. All existing rows are lost."""

import logging

from dashboard.config import configure_logging, get_settings
from dashboard.db.engine import get_engine
from dashboard.db.schema import metadata

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info(
        "Schema recreated (%s): %s",
        get_settings().database_url.split("@")[-1],
        ", ".join(sorted(metadata.tables)),
    )


if __name__ == "__main__":
    main()
