"""SQLite product store for the warehouse reorder engine.

Provides connection management, table initialization and the
``ProductStore`` collaborator that loads and saves product snapshots
together with their sales history.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path

from .config import settings
from .models import Product, SalesEntry

logger = logging.getLogger(__name__)

# SQL for creating the core tables
_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS products (
    product_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    current_stock INTEGER NOT NULL,
    average_daily_sales REAL NOT NULL DEFAULT 0,
    supplier_lead_time INTEGER NOT NULL,
    minimum_reorder_quantity INTEGER NOT NULL DEFAULT 0,
    cost_per_unit REAL NOT NULL,
    criticality_level TEXT NOT NULL,
    last_updated TEXT,
    created_at TEXT DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS sales_history (
    product_id TEXT NOT NULL,
    date TEXT NOT NULL,
    quantity INTEGER NOT NULL,
    PRIMARY KEY (product_id, date),
    FOREIGN KEY (product_id) REFERENCES products(product_id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_sales_history_product_date ON sales_history(product_id, date);
"""

_PRODUCT_COLUMNS = (
    "product_id",
    "name",
    "current_stock",
    "average_daily_sales",
    "supplier_lead_time",
    "minimum_reorder_quantity",
    "cost_per_unit",
    "criticality_level",
    "last_updated",
)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Get a SQLite connection with row factory enabled."""
    path = Path(db_path) if db_path else settings.database_abs_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db(db_path: str | Path | None = None) -> None:
    """Create all tables if they don't exist."""
    conn = get_connection(db_path)
    try:
        conn.executescript(_CREATE_TABLES_SQL)
        conn.commit()
    finally:
        conn.close()


class ProductStore:
    """Product records keyed by product ID.

    Each call opens its own connection, so a product and its history are
    always read from (or written to) one consistent snapshot.

    Usage:
        store = ProductStore("data/warehouse.db")
        product = store.get("PROD003")
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self.db_path = Path(db_path) if db_path else settings.database_abs_path
        init_db(self.db_path)

    def get(self, product_id: str) -> Product | None:
        """Load one product, or None if the ID is unknown."""
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT * FROM products WHERE product_id = ?", (product_id,)
            ).fetchone()
            if not row:
                return None
            return self._to_product(row, self._get_history(conn, product_id))
        finally:
            conn.close()

    def list_all(self) -> list[Product]:
        """Load every product, ordered by product ID."""
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute("SELECT * FROM products ORDER BY product_id").fetchall()
            history_rows = conn.execute(
                "SELECT product_id, date, quantity FROM sales_history ORDER BY product_id, date"
            ).fetchall()
        finally:
            conn.close()

        histories: dict[str, list[SalesEntry]] = {}
        for h in history_rows:
            histories.setdefault(h["product_id"], []).append(
                SalesEntry(date=date.fromisoformat(h["date"]), quantity=h["quantity"])
            )
        return [self._to_product(row, histories.get(row["product_id"], [])) for row in rows]

    def insert(self, product: Product) -> None:
        """Insert a new product. Raises ValueError if the ID already exists."""
        conn = get_connection(self.db_path)
        try:
            try:
                conn.execute(
                    f"INSERT INTO products ({', '.join(_PRODUCT_COLUMNS)}) "
                    f"VALUES ({', '.join('?' for _ in _PRODUCT_COLUMNS)})",
                    self._product_params(product),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Product {product.product_id} already exists") from e
            self._write_history(conn, product)
            conn.commit()
            logger.debug("Inserted product %s", product.product_id)
        finally:
            conn.close()

    def save(self, product: Product) -> None:
        """Insert or fully replace a product, including its sales history."""
        conn = get_connection(self.db_path)
        try:
            updates = ", ".join(f"{col} = excluded.{col}" for col in _PRODUCT_COLUMNS[1:])
            conn.execute(
                f"INSERT INTO products ({', '.join(_PRODUCT_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in _PRODUCT_COLUMNS)}) "
                f"ON CONFLICT(product_id) DO UPDATE SET {updates}",
                self._product_params(product),
            )
            conn.execute(
                "DELETE FROM sales_history WHERE product_id = ?", (product.product_id,)
            )
            self._write_history(conn, product)
            conn.commit()
            logger.debug("Saved product %s", product.product_id)
        finally:
            conn.close()

    def delete_all(self) -> int:
        """Remove every product and its history. Returns the number removed."""
        conn = get_connection(self.db_path)
        try:
            conn.execute("DELETE FROM sales_history")
            cursor = conn.execute("DELETE FROM products")
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    @staticmethod
    def _get_history(conn: sqlite3.Connection, product_id: str) -> list[SalesEntry]:
        rows = conn.execute(
            "SELECT date, quantity FROM sales_history WHERE product_id = ? ORDER BY date",
            (product_id,),
        ).fetchall()
        return [
            SalesEntry(date=date.fromisoformat(row["date"]), quantity=row["quantity"])
            for row in rows
        ]

    @staticmethod
    def _write_history(conn: sqlite3.Connection, product: Product) -> None:
        conn.executemany(
            "INSERT INTO sales_history (product_id, date, quantity) VALUES (?, ?, ?)",
            [
                (product.product_id, entry.date.isoformat(), entry.quantity)
                for entry in product.sales_history
            ],
        )

    @staticmethod
    def _product_params(product: Product) -> tuple:
        return (
            product.product_id,
            product.name,
            product.current_stock,
            product.average_daily_sales,
            product.supplier_lead_time,
            product.minimum_reorder_quantity,
            product.cost_per_unit,
            product.criticality_level.value,
            product.last_updated.isoformat() if product.last_updated else None,
        )

    @staticmethod
    def _to_product(row: sqlite3.Row, history: list[SalesEntry]) -> Product:
        last_updated = row["last_updated"]
        return Product(
            product_id=row["product_id"],
            name=row["name"],
            current_stock=row["current_stock"],
            average_daily_sales=row["average_daily_sales"],
            supplier_lead_time=row["supplier_lead_time"],
            minimum_reorder_quantity=row["minimum_reorder_quantity"],
            cost_per_unit=row["cost_per_unit"],
            criticality_level=row["criticality_level"],
            sales_history=history,
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
        )
