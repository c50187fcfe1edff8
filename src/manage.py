"""Off-road park directory management CLI.

Creates and drops the database schema, and rebuilds every park's rating
summary from its approved reviews.

Usage:
    python src/manage.py setup-db            # Create all tables
    python src/manage.py drop-db             # Drop all tables
    python src/manage.py recompute-ratings   # Rebuild every park's rating summary
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the parks domain."""
    from parks.domain import parks
    from parks.utils.db import setup_db

    print("Initializing parks domain...")
    parks.init()
    print("Creating parks database schema...")
    setup_db(parks)
    print("Done.")


def drop_database():
    """Drop the database schema for the parks domain."""
    from parks.domain import parks
    from parks.utils.db import drop_db

    print("Initializing parks domain...")
    parks.init()
    print("Dropping parks database schema...")
    drop_db(parks)
    print("Done.")


def recompute_ratings():
    """Recompute the rating summary of every park."""
    from parks.domain import parks
    from parks.park.ratings import recompute_all_park_ratings

    print("Initializing parks domain...")
    parks.init()
    with parks.domain_context():
        processed = recompute_all_park_ratings()
    print(f"Recomputed ratings for {processed} park(s).")
    return processed


def main():
    parser = argparse.ArgumentParser(description="Off-road park directory management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("recompute-ratings", help="Rebuild every park's rating summary")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "recompute-ratings":
        recompute_ratings()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
