"""
Create tables and load the sample departments and employees into an empty store.
Run from the project root with .env loaded.

Usage:
  python scripts/seed_sample_data.py
  python scripts/seed_sample_data.py --database-url sqlite:///./demo.db
  python scripts/seed_sample_data.py --log-level DEBUG
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.logging import setup_logging  # noqa: E402
from app.db.init_db import seed_sample_data  # noqa: E402
from app.db.session import build_engine, create_tables, engine as default_engine  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Load sample staff records")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (e.g. DEBUG)")
    args = parser.parse_args()

    setup_logging(args.log_level)
    engine = build_engine(args.database_url) if args.database_url else default_engine
    create_tables(engine)

    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        loaded = seed_sample_data(db)
    finally:
        db.close()

    print("Sample data loaded" if loaded else "Store not empty, nothing loaded")


if __name__ == "__main__":
    main()
