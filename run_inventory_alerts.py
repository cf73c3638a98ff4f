"""Daily expiry alerts. Run once a day from cron, e.g.

    0 8 * * * cd /srv/grocery && python run_inventory_alerts.py
"""
import argparse
import logging
from datetime import date

from shared.core.config import settings
from shared.core.database import Base, GrocerySessionLocal, grocery_engine
from shared.models import users  # noqa: F401
from grocery_service.app.models.family import families, family_members  # noqa: F401
from grocery_service.app.models.inventory import inventory_items  # noqa: F401
from grocery_service.app.models.procurement import merchants, order_items, orders  # noqa: F401
from grocery_service.app.models.system import notification_reads, notifications  # noqa: F401
from grocery_service.app.crud.scheduler.scheduler_service import process_inventory_alerts

logger = logging.getLogger("inventory_alerts")


def main():
    parser = argparse.ArgumentParser(description="Send expiring-soon / expired summaries to every family")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="treat this ISO date as today (default: the real date)")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL)
    Base.metadata.create_all(bind=grocery_engine)

    db = GrocerySessionLocal()
    try:
        sent = process_inventory_alerts(db, args.date)
    finally:
        db.close()
    logger.info("Done: %s", sent)


if __name__ == "__main__":
    main()
