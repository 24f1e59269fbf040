from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy import text
from signage_lite.config import DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _add_missing_columns(conn, table: str, columns: dict[str, str]) -> None:
    rows = conn.execute(text(f"PRAGMA table_info({table})")).fetchall()
    if not rows:
        return
    col_names = {row[1] for row in rows}  # (cid, name, type, notnull, dflt_value, pk)
    for name, ddl in columns.items():
        if name not in col_names:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}"))


def ensure_sqlite_schema():
    """
    Lightweight runtime schema patching for SQLite.

    `Base.metadata.create_all()` won't add new columns to existing tables.
    This keeps local/dev databases created before fit modes, design sizes,
    transitions and screen reporting working without requiring Alembic.
    """
    if not DATABASE_URL.startswith("sqlite"):
        return

    with engine.begin() as conn:
        _add_missing_columns(
            conn,
            "player",
            {
                "screen_width": "INTEGER",
                "screen_height": "INTEGER",
            },
        )
        _add_missing_columns(
            conn,
            "playlist",
            {
                "design_width": "INTEGER",
                "design_height": "INTEGER",
                "fit_mode": "VARCHAR(16) DEFAULT 'CONTAIN'",
            },
        )
        _add_missing_columns(
            conn,
            "playlist_item",
            {
                "transition_type": "VARCHAR(16) DEFAULT 'NONE'",
                "transition_duration_ms": "INTEGER DEFAULT 0",
            },
        )
        conn.execute(
            text(
                "UPDATE playlist SET fit_mode='CONTAIN' "
                "WHERE fit_mode IS NULL OR trim(fit_mode)=''"
            )
        )
        conn.execute(
            text(
                "UPDATE playlist_item SET transition_type='NONE', transition_duration_ms=0 "
                "WHERE transition_type IS NULL OR trim(transition_type)=''"
            )
        )
        conn.execute(
            text(
                "UPDATE playlist_item SET transition_duration_ms=10000 "
                "WHERE transition_duration_ms > 10000"
            )
        )
