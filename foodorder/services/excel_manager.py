"""
Excel Export with Concurrency Control

Writes the full order book to a spreadsheet for administrators. The file
is rewritten on every export and read back under the same file lock, so
a download always carries one complete export even when two admins export
at once.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import pandas as pd
from filelock import FileLock, Timeout

from foodorder.models import Order

logger = logging.getLogger(__name__)


class ExcelManager:
    """File-locked Excel writer for order exports."""

    ORDER_COLUMNS = [
        "order_id",
        "owner",
        "user_id",
        "restaurant",
        "food",
        "drink",
        "created_at",
        "updated_at",
        "exported_at",
    ]

    def __init__(self, data_directory: str, filename: str = "orders.xlsx", lock_timeout: int = 30):
        self.data_dir = Path(data_directory)
        self.orders_file = self.data_dir / filename
        self.orders_lock = self.data_dir / f"{filename}.lock"
        self.lock_timeout = lock_timeout

    def _ensure_data_dir(self) -> None:
        """Create data directory if needed."""
        if not self.data_dir.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {self.data_dir}")

    @staticmethod
    def _isoformat(value: datetime | None) -> str | None:
        # Excel cannot store timezone-aware datetimes
        return value.isoformat() if value is not None else None

    def order_rows(self, orders: Iterable[Order], exported_at: str) -> list[dict[str, Any]]:
        return [
            {
                "order_id": order.id,
                "owner": order.owner,
                "user_id": order.user_id,
                "restaurant": order.restaurant,
                "food": order.food,
                "drink": order.drink,
                "created_at": self._isoformat(order.created_at),
                "updated_at": self._isoformat(order.updated_at),
                "exported_at": exported_at,
            }
            for order in orders
        ]

    def export_orders(self, orders: Iterable[Order]) -> dict[str, Any]:
        """Rewrite the export file with ``orders`` and return its bytes in ``content``."""
        self._ensure_data_dir()

        result = {
            "success": False,
            "message": "",
            "path": str(self.orders_file),
            "rows": 0,
            "exported_at": None,
            "content": None,
        }

        try:
            lock = FileLock(str(self.orders_lock), timeout=self.lock_timeout)

            with lock:
                logger.debug(f"Lock acquired for {self.orders_file}")

                export_time = datetime.now().isoformat()
                rows = self.order_rows(orders, export_time)
                df = pd.DataFrame(rows, columns=self.ORDER_COLUMNS)
                df.to_excel(str(self.orders_file), index=False, engine="openpyxl")
                result["content"] = self.orders_file.read_bytes()

                logger.info(f"Exported {len(rows)} orders to {self.orders_file}")

                result["success"] = True
                result["message"] = f"{len(rows)} orders exported"
                result["rows"] = len(rows)
                result["exported_at"] = export_time

            logger.debug(f"Lock released for {self.orders_file}")

        except Timeout:
            result["message"] = f"Lock timeout ({self.lock_timeout}s)"
            logger.error(f"Lock timeout exporting {self.orders_file}")

        except OSError as e:
            result["message"] = str(e)
            logger.exception(f"Error writing {self.orders_file}")

        return result

