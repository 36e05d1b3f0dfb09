#!/usr/bin/env python3
"""
Initialize the element sample database.

Creates the table that stores cropped element images, their OCR summaries
and labels.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from data.database import DatabaseManager
from data.db_models import Base


def main():
    parser = argparse.ArgumentParser(
        description='Initialize element sample database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL or sqlite:///pigeon.db)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys data!)'
    )

    args = parser.parse_args()

    db_manager = DatabaseManager(args.database_url)

    print("=" * 60)
    print("Element Sample Database Initialization")
    print("=" * 60)
    print(f"Database URL: {db_manager.engine.url.render_as_string(hide_password=True)}")
    print()

    if args.drop_existing:
        confirm = input("Drop existing tables? This will DELETE ALL DATA! (yes/no): ")
        if confirm.lower() == 'yes':
            db_manager.drop_tables()
            print()
        else:
            print("Aborted.")
            return

    db_manager.create_tables()

    print()
    print("Database initialized successfully!")
    print()
    print("Tables created:")
    for table_name in Base.metadata.tables:
        print(f"  - {table_name}")
    print()
    print("You can now start the API server: uvicorn serving.app:app --port 8000")
    print()


if __name__ == '__main__':
    main()
