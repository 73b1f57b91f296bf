#!/usr/bin/env python3
"""
Database initialization script

Creates the finance tracker schema (users, tags, recurring transactions,
transactions).
"""
import sys
from pathlib import Path

import psycopg2

from finance_tracker.utils.db_connection import get_db_connection

SCHEMA_FILE = Path(__file__).parent.parent / "db" / "schema.sql"


def run_sql_file(conn, sql_file: Path, description: str):
    """Execute a SQL file"""
    print(f"\n📄 {description}")
    print(f"   File: {sql_file}")

    with open(sql_file, 'r') as f:
        sql = f.read()

    cursor = conn.cursor()
    try:
        cursor.execute(sql)
        conn.commit()
        print(f"   ✅ Success")
    except psycopg2.Error as e:
        conn.rollback()
        print(f"   ❌ Error: {e}")
        raise
    finally:
        cursor.close()


def print_summary(conn):
    """Print database summary"""
    cursor = conn.cursor()

    print("\n" + "=" * 80)
    print("📊 DATABASE SUMMARY")
    print("=" * 80)

    for table, title in [
        ('users', 'Users'),
        ('tags', 'Tags'),
        ('recurring_transactions', 'Recurring transactions'),
        ('transactions', 'Transactions'),
    ]:
        cursor.execute(f"SELECT COUNT(*) FROM {table}")
        print(f"{title}: {cursor.fetchone()[0]}")

    print("=" * 80)

    cursor.close()


def main():
    """Main initialization function"""
    print("=" * 80)
    print("🚀 FINANCE TRACKER DATABASE INITIALIZATION")
    print("=" * 80)

    if not SCHEMA_FILE.exists():
        print(f"\n❌ Missing schema file: {SCHEMA_FILE}")
        sys.exit(1)

    # Connect to database
    print("\n🔌 Connecting to database...")
    try:
        conn = get_db_connection()
        print("   ✅ Connected")
    except psycopg2.Error as e:
        print(f"   ❌ Connection failed: {e}")
        print("\nMake sure PostgreSQL is running and DB_* variables are set")
        sys.exit(1)

    try:
        run_sql_file(conn, SCHEMA_FILE, "Creating database schema")
        print_summary(conn)

        print("\n✅ Database initialization complete!")
        print("\nNext steps:")
        print("  1. Get suggestions: finance-recommend <transaction-id>")
        print("  2. Or use: python -m finance_tracker.cli.recommend <transaction-id>")

    except psycopg2.Error as e:
        print(f"\n❌ Initialization failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
