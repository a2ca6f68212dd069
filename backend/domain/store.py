from __future__ import annotations

import sqlite3
import threading
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from backend.models import ContributionHistoryEntry, ContributionSettings

CONTRIBUTION = "contribution"

DEMO_CONTRIBUTIONS: List[Tuple[str, float]] = [
    (f"2025-{month:02d}-15", 250.0) for month in range(1, 12)
]


class ContributionStore:
    """Settings snapshots and the append-only contribution log.

    One sqlite connection is shared by all request threads, so every call
    takes the lock. ``:memory:`` databases only live as long as the store.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self.path = path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row

    def init_schema(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                """
                create table if not exists user_settings (
                    id integer primary key autoincrement,
                    contribution_type text not null
                        check (contribution_type in ('percentage', 'fixed')),
                    contribution_value real not null,
                    age integer not null,
                    salary real not null,
                    retirement_age integer not null,
                    updated_at text not null
                )
                """
            )
            self._conn.execute(
                """
                create table if not exists contribution_history (
                    id integer primary key autoincrement,
                    date text not null,
                    amount real not null,
                    type text not null
                )
                """
            )

    def latest_settings(self) -> Optional[Tuple[int, ContributionSettings]]:
        with self._lock:
            row = self._conn.execute(
                """
                select id, contribution_type, contribution_value, age, salary, retirement_age
                from user_settings
                order by id desc
                limit 1
                """
            ).fetchone()
        if row is None:
            return None
        return row["id"], ContributionSettings.model_validate(dict(row))

    def save_settings(self, settings: ContributionSettings) -> int:
        with self._lock, self._conn:
            cursor = self._conn.execute(
                """
                insert into user_settings
                    (contribution_type, contribution_value, age, salary, retirement_age, updated_at)
                values (?, ?, ?, ?, ?, ?)
                """,
                (
                    settings.contribution_type,
                    settings.contribution_value,
                    settings.age,
                    settings.salary,
                    settings.retirement_age,
                    datetime.utcnow().isoformat(timespec="seconds"),
                ),
            )
        return cursor.lastrowid

    def append_contribution(
        self, date: str, amount: float, type: str = CONTRIBUTION
    ) -> ContributionHistoryEntry:
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "insert into contribution_history (date, amount, type) values (?, ?, ?)",
                (date, amount, type),
            )
        return ContributionHistoryEntry(id=cursor.lastrowid, date=date, amount=amount, type=type)

    def seed_contributions(self, entries: Iterable[Tuple[str, float]]) -> int:
        count = 0
        for date, amount in entries:
            self.append_contribution(date, amount)
            count += 1
        logger.debug(f"Seeded {count} contribution rows into {self.path}")
        return count

    def list_contributions(self) -> List[ContributionHistoryEntry]:
        with self._lock:
            rows = self._conn.execute(
                "select id, date, amount, type from contribution_history where type = ? order by id",
                (CONTRIBUTION,),
            ).fetchall()
        return [ContributionHistoryEntry(**dict(row)) for row in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
