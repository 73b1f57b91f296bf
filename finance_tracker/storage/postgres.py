"""
PostgreSQL transaction history

Read-only queries backing the recommendation engine. Each query returns
one row per (transaction, target) pair; rows are grouped back into
HistoryEntry objects in query order.
"""
import logging
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

import psycopg2

from ..core.models import HistoryEntry, RecurringTransaction, Tag, Target, Transaction
from ..exceptions import HistoryAccessError

logger = logging.getLogger(__name__)

EXCLUDE_CONDITION = "(%(exclude_id)s::uuid IS NULL OR t.txn_id <> %(exclude_id)s::uuid)"


class PostgresTargetSource:
    """TargetSource reading one kind of target from PostgreSQL"""

    def __init__(self,
                 conn,
                 target_join: str,
                 has_target: str,
                 frequent_sql: str,
                 make_target: Callable[[tuple], Target]):
        """
        Args:
            conn: psycopg2 connection
            target_join: JOIN clause exposing the target as alias g
                (target_id, target_name, target_color columns)
            has_target: SQL condition on t true when it has a target
            frequent_sql: Query returning (target_id, name, color, count)
            make_target: Builds a target from (target_id, name, color, user_id)
        """
        self.conn = conn
        self.target_join = target_join
        self.has_target = has_target
        self.frequent_sql = frequent_sql
        self.make_target = make_target

    def _fetch(self, sql: str, params: Dict) -> List[tuple]:
        cursor = self.conn.cursor()
        try:
            cursor.execute(sql, params)
            return cursor.fetchall()
        except psycopg2.Error as e:
            raise HistoryAccessError(f"History query failed: {e}") from e
        finally:
            cursor.close()

    def _entries(self, rows: List[tuple], user_id: str) -> List[HistoryEntry]:
        grouped: Dict[str, Tuple[Optional[str], List[Target]]] = OrderedDict()
        for txn_id, label, target_id, target_name, target_color in rows:
            _, targets = grouped.setdefault(txn_id, (label, []))
            if target_id is not None:
                targets.append(self.make_target((target_id, target_name, target_color, user_id)))

        return [
            HistoryEntry(txn_id, label, tuple(targets))
            for txn_id, (label, targets) in grouped.items()
        ]

    def _windowed(self, condition: str, params: Dict) -> List[HistoryEntry]:
        sql = f"""
            WITH window_txns AS (
                SELECT t.txn_id, t.label, t.transaction_date, t.recurring_transaction_id
                FROM transactions t
                WHERE t.user_id = %(user_id)s::uuid
                  AND {EXCLUDE_CONDITION}
                  AND {self.has_target}
                  {condition}
                ORDER BY t.transaction_date DESC, t.txn_id
                LIMIT %(limit)s
            )
            SELECT t.txn_id::text, t.label, g.target_id, g.target_name, g.target_color
            FROM window_txns t
            {self.target_join}
            ORDER BY t.transaction_date DESC, t.txn_id
        """
        return self._entries(self._fetch(sql, params), params['user_id'])

    def exact_label(self, user_id, label, exclude_id):
        sql = f"""
            SELECT t.txn_id::text, t.label, g.target_id, g.target_name, g.target_color
            FROM transactions t
            {self.target_join}
            WHERE t.user_id = %(user_id)s::uuid
              AND t.label = %(label)s
              AND {EXCLUDE_CONDITION}
            ORDER BY t.transaction_date DESC, t.txn_id
        """
        params = {'user_id': user_id, 'label': label, 'exclude_id': exclude_id}
        return self._entries(self._fetch(sql, params), user_id)

    def assigned_window(self, user_id, exclude_id, limit):
        params = {'user_id': user_id, 'exclude_id': exclude_id, 'limit': limit}
        return self._windowed('', params)

    def label_contains(self, user_id, keyword, exclude_id, limit):
        params = {
            'user_id': user_id,
            'exclude_id': exclude_id,
            'limit': limit,
            'keyword': keyword.upper(),
        }
        return self._windowed("AND POSITION(%(keyword)s IN UPPER(t.label)) > 0", params)

    def most_frequent(self, user_id, limit):
        rows = self._fetch(self.frequent_sql, {'user_id': user_id, 'limit': limit})
        return [
            (self.make_target((target_id, name, color, user_id)), count)
            for target_id, name, color, count in rows
        ]


TAG_JOIN = """
    LEFT JOIN (
        SELECT tt.txn_id, tg.tag_id::text AS target_id, tg.name AS target_name,
               tg.color AS target_color
        FROM transaction_tags tt
        JOIN tags tg ON tg.tag_id = tt.tag_id
    ) g ON g.txn_id = t.txn_id
"""

TAG_EXISTS = "EXISTS (SELECT 1 FROM transaction_tags tt WHERE tt.txn_id = t.txn_id)"

TAG_FREQUENT_SQL = """
    SELECT tg.tag_id::text, tg.name, tg.color, COUNT(tt.txn_id) AS transaction_count
    FROM tags tg
    LEFT JOIN transaction_tags tt ON tt.tag_id = tg.tag_id
    WHERE tg.user_id = %(user_id)s::uuid
    GROUP BY tg.tag_id, tg.name, tg.color
    ORDER BY transaction_count DESC, tg.name
    LIMIT %(limit)s
"""

RECURRING_JOIN = """
    LEFT JOIN (
        SELECT rt.recurring_id, rt.recurring_id::text AS target_id, rt.name AS target_name,
               NULL::text AS target_color
        FROM recurring_transactions rt
    ) g ON g.recurring_id = t.recurring_transaction_id
"""

RECURRING_EXISTS = "t.recurring_transaction_id IS NOT NULL"

RECURRING_FREQUENT_SQL = """
    SELECT rt.recurring_id::text, rt.name, NULL, COUNT(t.txn_id) AS transaction_count
    FROM recurring_transactions rt
    LEFT JOIN transactions t ON t.recurring_transaction_id = rt.recurring_id
    WHERE rt.user_id = %(user_id)s::uuid
    GROUP BY rt.recurring_id, rt.name
    ORDER BY transaction_count DESC, rt.name
    LIMIT %(limit)s
"""


def _make_tag(row) -> Tag:
    target_id, name, color, user_id = row
    return Tag(id=target_id, name=name, user_id=user_id, color=color)


def _make_recurring(row) -> RecurringTransaction:
    target_id, name, _, user_id = row
    return RecurringTransaction(id=target_id, name=name, user_id=user_id)


class PostgresHistory:
    """
    Transaction history stored in PostgreSQL (see db/schema.sql)
    """

    def __init__(self, conn):
        self.conn = conn

    def get_transaction(self, txn_id: str) -> Optional[Transaction]:
        """Load a transaction with its tag ids and recurring link"""
        cursor = self.conn.cursor()
        try:
            cursor.execute("""
                SELECT t.txn_id::text, t.label, t.amount, t.transaction_date,
                       t.user_id::text, t.recurring_transaction_id::text, t.budget_month,
                       COALESCE(
                           array_agg(tt.tag_id::text) FILTER (WHERE tt.tag_id IS NOT NULL),
                           '{}'
                       )
                FROM transactions t
                LEFT JOIN transaction_tags tt ON tt.txn_id = t.txn_id
                WHERE t.txn_id = %(txn_id)s::uuid
                GROUP BY t.txn_id
            """, {'txn_id': txn_id})
            row = cursor.fetchone()
        except psycopg2.Error as e:
            raise HistoryAccessError(f"Could not load transaction {txn_id}: {e}") from e
        finally:
            cursor.close()

        if row is None:
            logger.debug("Transaction %s not found", txn_id)
            return None

        txn_id, label, amount, txn_date, user_id, recurring_id, budget_month, tag_ids = row
        return Transaction(
            id=txn_id,
            label=label,
            amount=amount,
            date=txn_date,
            user_id=user_id,
            tag_ids=frozenset(tag_ids),
            recurring_transaction_id=recurring_id,
            budget_month=budget_month,
        )

    def tag_source(self) -> PostgresTargetSource:
        return PostgresTargetSource(
            self.conn, TAG_JOIN, TAG_EXISTS, TAG_FREQUENT_SQL, _make_tag
        )

    def recurring_source(self) -> PostgresTargetSource:
        return PostgresTargetSource(
            self.conn, RECURRING_JOIN, RECURRING_EXISTS, RECURRING_FREQUENT_SQL, _make_recurring
        )
