"""Check that the configured database accepts connections.

Usage:
    python scripts/check_db_connect.py --settings=./settings.json [--sync]

``--sync`` also creates the missing tables.
"""

import sys

from kiosk_api.core.config import get_configuration
from kiosk_api.infrastructure.database import Database
from kiosk_api.shared.logging import configure_logging


def main() -> int:
    configure_logging()
    database = Database.from_configuration(get_configuration())
    print("engine url:", database.url.render_as_string(hide_password=True))
    try:
        if not database.verify():
            return 1
        if "--sync" in sys.argv:
            database.create_all()
            print("tables created")
        return 0
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
