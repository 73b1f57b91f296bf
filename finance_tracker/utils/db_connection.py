"""
Database connection utilities
"""
import os
import psycopg2
from typing import Optional
from dotenv import load_dotenv

from ..config import load_settings


# Load environment variables
load_dotenv()


def get_db_connection(
    host: Optional[str] = None,
    port: Optional[int] = None,
    database: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    statement_timeout_ms: Optional[int] = None
):
    """
    Get database connection using environment variables or provided values

    Args:
        host: Database host (default: from DB_HOST env var)
        port: Database port (default: from DB_PORT env var)
        database: Database name (default: from DB_NAME env var)
        user: Database user (default: from DB_USER env var)
        password: Database password (default: from DB_PASSWORD env var)
        statement_timeout_ms: Per-query timeout, 0 disables it
            (default: from DB_STATEMENT_TIMEOUT_MS env var)

    Returns:
        psycopg2 connection object
    """
    if statement_timeout_ms is None:
        statement_timeout_ms = load_settings().statement_timeout_ms

    options = None
    if statement_timeout_ms:
        options = f"-c statement_timeout={statement_timeout_ms}"

    return psycopg2.connect(
        host=host or os.getenv('DB_HOST', 'localhost'),
        port=port or int(os.getenv('DB_PORT', '5432')),
        database=database or os.getenv('DB_NAME', 'finance_db'),
        user=user or os.getenv('DB_USER', 'finance_user'),
        password=password or os.getenv('DB_PASSWORD', 'finance_password_local_dev'),
        options=options
    )
