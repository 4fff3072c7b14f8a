"""JSON-file-backed implementation of LedgerRepository (append-only)."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockflow.domain.model.stock_ledger import LedgerEntry, StockDirection
from stockflow.domain.repository.ledger_repository import LedgerRepository
from stockflow.infrastructure.persistence.json_file import JsonFile


class JsonLedgerRepository(LedgerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=lambda: {"last_id": 0, "entries": []})

    # --- LedgerRepository interface -------------------------------------------

    def append(
        self,
        product_id: str,
        direction: StockDirection,
        quantity: int,
        cause: str,
        created_at: datetime,
    ) -> LedgerEntry:
        with self._file.updating() as doc:
            doc["last_id"] += 1
            entry = LedgerEntry(
                id=doc["last_id"],
                product_id=product_id,
                direction=direction,
                quantity=quantity,
                cause=cause,
                created_at=created_at,
            )
            doc["entries"].append(self._to_raw(entry))
        return entry

    def list_for_product(self, product_id: str) -> list[LedgerEntry]:
        return [
            self._to_domain(raw)
            for raw in self._file.read()["entries"]
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[LedgerEntry]:
        return [self._to_domain(raw) for raw in self._file.read()["entries"]]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: LedgerEntry) -> dict:
        return {
            "id": entry.id,
            "product_id": entry.product_id,
            "direction": entry.direction.value,
            "quantity": entry.quantity,
            "cause": entry.cause,
            "created_at": entry.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> LedgerEntry:
        return LedgerEntry(
            id=raw["id"],
            product_id=raw["product_id"],
            direction=StockDirection(raw["direction"]),
            quantity=raw["quantity"],
            cause=raw["cause"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
