"""SQLite schema management (code-first approach)."""

import logging

from src.core import db_client


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = [
    "users",
    "condos",
    "tasks",
    "incidents",
    "messages",
    "logs",
    "vendors",
    "documents",
    "budgets",
    "categories",
    "job_functions",
]

# Columns holding JSON-encoded lists
JSON_FIELDS: dict[str, set[str]] = {
    "tasks": {"photos"},
    "incidents": {"photos"},
    "vendors": {"documents"},
    "budgets": {"items", "documents"},
}

TABLE_SCHEMAS: dict[str, str] = {
    "users": """CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        role TEXT NOT NULL CHECK (role IN ('SINDICO', 'GESTOR', 'ZELADOR', 'LIMPEZA', 'PORTEIRO')),
        job_title TEXT,
        email TEXT NOT NULL DEFAULT '',
        password_hash TEXT NOT NULL,
        avatar TEXT,
        active INTEGER NOT NULL DEFAULT 1,
        condo_id TEXT
    )""",
    "condos": """CREATE TABLE IF NOT EXISTS condos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        address TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL
    )""",
    "tasks": """CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        status TEXT NOT NULL CHECK (status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')),
        frequency TEXT NOT NULL CHECK (frequency IN ('DAILY', 'WEEKLY', 'MONTHLY', 'ONCE')),
        created_at TEXT NOT NULL,
        scheduled_for TEXT NOT NULL,
        completed_at TEXT,
        assigned_to TEXT NOT NULL DEFAULT '',
        assigned_name TEXT NOT NULL DEFAULT '',
        category TEXT NOT NULL DEFAULT '',
        photos TEXT NOT NULL DEFAULT '[]',
        completion_observation TEXT,
        condo_id TEXT NOT NULL
    )""",
    "incidents": """CREATE TABLE IF NOT EXISTS incidents (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        condo_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        user_name TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        timestamp TEXT NOT NULL,
        status TEXT NOT NULL CHECK (status IN ('OPEN', 'RESOLVED')),
        photos TEXT NOT NULL DEFAULT '[]'
    )""",
    "messages": """CREATE TABLE IF NOT EXISTS messages (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        sender_id TEXT NOT NULL,
        sender_name TEXT NOT NULL,
        recipient_id TEXT,
        recipient_name TEXT,
        text TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        condo_id TEXT NOT NULL,
        broadcast INTEGER NOT NULL DEFAULT 1
    )""",
    "logs": """CREATE TABLE IF NOT EXISTS logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        user_id TEXT NOT NULL,
        user_name TEXT NOT NULL,
        action TEXT NOT NULL,
        module TEXT NOT NULL,
        target_name TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        condo_id TEXT NOT NULL
    )""",
    "vendors": """CREATE TABLE IF NOT EXISTS vendors (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        tax_id TEXT NOT NULL DEFAULT '',
        phone TEXT NOT NULL DEFAULT '',
        category TEXT NOT NULL DEFAULT '',
        condo_id TEXT NOT NULL,
        documents TEXT NOT NULL DEFAULT '[]'
    )""",
    "documents": """CREATE TABLE IF NOT EXISTS documents (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        title TEXT NOT NULL,
        category TEXT NOT NULL DEFAULT '',
        file_url TEXT NOT NULL,
        upload_date TEXT NOT NULL,
        condo_id TEXT NOT NULL
    )""",
    "budgets": """CREATE TABLE IF NOT EXISTS budgets (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        status TEXT NOT NULL CHECK (status IN ('PENDING', 'APPROVED', 'REJECTED')),
        vendor_id TEXT,
        value REAL,
        items TEXT NOT NULL DEFAULT '[]',
        condo_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        documents TEXT NOT NULL DEFAULT '[]'
    )""",
    "categories": """CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL UNIQUE
    )""",
    "job_functions": """CREATE TABLE IF NOT EXISTS job_functions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL UNIQUE
    )""",
}

INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_condo ON tasks (condo_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assigned ON tasks (assigned_to)",
    "CREATE INDEX IF NOT EXISTS idx_incidents_condo ON incidents (condo_id)",
    "CREATE INDEX IF NOT EXISTS idx_logs_condo ON logs (condo_id)",
    "CREATE INDEX IF NOT EXISTS idx_messages_condo ON messages (condo_id)",
]


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes if they do not already exist."""
    conn = await db_client.get_connection(db_path=db_path)

    for collection in COLLECTIONS:
        await conn.execute(TABLE_SCHEMAS[collection])
    for index in INDEXES:
        await conn.execute(index)
    await conn.commit()

    logger.info("Schema initialized", extra={"collections": len(COLLECTIONS)})
