#!/usr/bin/env python3
"""
Recommendation CLI

Prints tag and recurring transaction suggestions for a stored transaction.
"""
import argparse
import logging
import sys
from typing import List

import psycopg2

from finance_tracker.config import load_settings
from finance_tracker.core.models import Recommendation
from finance_tracker.core.recommender import recurring_recommender, tag_recommender
from finance_tracker.exceptions import FinanceTrackerError
from finance_tracker.storage.postgres import PostgresHistory
from finance_tracker.utils.db_connection import get_db_connection


def print_recommendations(title: str, recommendations: List[Recommendation]):
    """Print one block of recommendations"""
    print(f"\n{title}")
    if not recommendations:
        print("   (no suggestion)")
        return

    for i, rec in enumerate(recommendations, 1):
        print(f"   {i}. {rec.target_display_name:<30} {rec.confidence_percentage:>3d}%  {rec.reason}")


def main():
    """Main recommendation function"""
    parser = argparse.ArgumentParser(description='Suggest tags and recurring transactions')
    parser.add_argument('transaction_id', help='Transaction id (UUID)')
    parser.add_argument('--kind', choices=['tags', 'recurring', 'all'],
                        default='all', help='What to recommend (default: all)')
    parser.add_argument('--limit', type=int, help='Maximum suggestions (default: RECOMMENDATION_LIMIT)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        settings = load_settings()
    except FinanceTrackerError as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    if args.limit is not None and args.limit < 0:
        print("❌ --limit must be >= 0")
        sys.exit(1)

    # Connect to database
    try:
        conn = get_db_connection(statement_timeout_ms=settings.statement_timeout_ms)
    except psycopg2.Error as e:
        print(f"❌ Connection failed: {e}")
        sys.exit(1)

    try:
        history = PostgresHistory(conn)
        transaction = history.get_transaction(args.transaction_id)
        if transaction is None:
            print(f"❌ Transaction not found: {args.transaction_id}")
            sys.exit(1)

        print("=" * 80)
        print(f"💡 SUGGESTIONS FOR: {transaction.label}")
        print(f"   Amount: {transaction.amount}  Date: {transaction.date}  Month: {transaction.budget_month}")
        print("=" * 80)

        if args.kind in ('tags', 'all'):
            recommender = tag_recommender(history.tag_source(), settings)
            print_recommendations("🏷️  Tags", recommender.recommend(transaction, args.limit))

        if args.kind in ('recurring', 'all'):
            recommender = recurring_recommender(history.recurring_source(), settings)
            print_recommendations("🔁 Recurring transactions", recommender.recommend(transaction, args.limit))

        print("\n" + "=" * 80)

    except FinanceTrackerError as e:
        print(f"\n❌ Recommendation failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
