"""ReNew marketplace management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo users and products
"""

import argparse
import sys


def _initialized_domain():
    from marketplace.domain import marketplace

    print("Initializing marketplace domain...")
    marketplace.init()
    return marketplace


def setup_database():
    from marketplace.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating marketplace database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from marketplace.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping marketplace database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    from marketplace.utils.seed import seed_demo_data

    domain = _initialized_domain()
    with domain.domain_context():
        counts = seed_demo_data()
    print(f"Seeded {counts['users']} users and {counts['products']} products.")


def main():
    parser = argparse.ArgumentParser(description="ReNew marketplace management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load demo users and products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
