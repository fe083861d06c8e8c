#!/usr/bin/env python3
"""
Initialize the settings database.

Creates the key-value table holding the assistant model id and API key.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from data.database import DatabaseManager


def main():
    parser = argparse.ArgumentParser(
        description='Initialize the PDF Slice settings database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL setting)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys saved settings!)'
    )

    args = parser.parse_args()

    # Create database manager
    db_manager = DatabaseManager(args.database_url)

    print("=" * 60)
    print("PDF Slice Settings Database Initialization")
    print("=" * 60)
    print(f"Database URL: {db_manager.database_url}")
    print()

    # Drop tables if requested
    if args.drop_existing:
        confirm = input("⚠️  Drop existing tables? This will DELETE ALL SETTINGS! (yes/no): ")
        if confirm.lower() == 'yes':
            db_manager.drop_tables()
            print()
        else:
            print("Aborted.")
            return

    # Create tables
    db_manager.create_tables()

    print()
    print("✓ Database initialized successfully!")
    print()
    print("Tables created:")
    print("  - app_settings")
    print()
    print("You can now:")
    print("  1. Start the API server: uvicorn serving.workflow_api:app --port 8002")
    print("  2. Browse and export documents via API or CLI")
    print()


if __name__ == '__main__':
    main()
