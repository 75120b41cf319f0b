"""
main.py
-------
Entry point for the book catalogue data layer.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Load the sample catalogue (unless LOAD_SAMPLE_DATA is off).
    - Log what is stored, then release the pool.
"""

from config import LOAD_SAMPLE_DATA
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from repositories.book_dao import BookDao
from services.bootstrap_service import BootstrapService
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Initialize the database and report its contents."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    try:
        create_tables()

        # ── 2. Sample data ────────────────────────────────
        if LOAD_SAMPLE_DATA:
            BootstrapService().run()

        # ── 3. Report ─────────────────────────────────────
        for book in BookDao().find_all():
            logger.info(f"Book: {book}")

    # ── 4. Cleanup ────────────────────────────────────────
    finally:
        close_pool()


if __name__ == "__main__":
    main()
