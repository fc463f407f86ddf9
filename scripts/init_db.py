"""Audit database initialization script"""
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from court_fetcher.database.connection import Base, engine
from court_fetcher.database.models import CaseQueryLog, CaseResponseLog  # noqa: F401


def _require_engine():
    if engine is None:
        print("No database configured. Set DATABASE_URL (or DB_HOST/DB_NAME/DB_USER/DB_PASSWORD).")
        sys.exit(1)
    return engine


def init_database():
    """Create the audit tables"""
    bind = _require_engine()
    print("Creating database tables...")

    try:
        Base.metadata.create_all(bind=bind)
        print("Database tables created successfully!")

        print("\nCreated tables:")
        for table in Base.metadata.sorted_tables:
            print(f"  - {table.name}")

    except Exception as e:
        print(f"Error creating tables: {e}")
        raise


def drop_all_tables():
    """Drop the audit tables (use with caution!)"""
    bind = _require_engine()
    confirm = input("This will delete all audit rows. Are you sure? (yes/no): ")

    if confirm.lower() == "yes":
        print("Dropping all tables...")
        Base.metadata.drop_all(bind=bind)
        print("All tables dropped!")
    else:
        print("Operation cancelled.")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Audit database initialization")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables (dangerous!)"
    )

    args = parser.parse_args()

    if args.drop:
        drop_all_tables()
    else:
        init_database()
