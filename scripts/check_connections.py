#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB is reachable, create the indexes and see whether
outgoing email is configured.
Usage: python scripts/check_connections.py
"""
from collexa.core.config import get_settings
from collexa.core.logging_config import setup_logging
from collexa.db.mongodb import init_mongo_indexes, test_mongo_connection


def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    print("=" * 50)
    print("COLLEXA - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    MongoDB: CONNECTED")
        init_mongo_indexes()
        print("    Indexes: CREATED")
    else:
        print("    MongoDB: FAILED")

    print("\n[2] Checking SMTP settings...")
    if settings.smtp_configured:
        print(f"    Host: {settings.smtp_host}:{settings.smtp_port} as {settings.smtp_email}")
    else:
        print("    SMTP not configured: reset codes will only be logged")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
