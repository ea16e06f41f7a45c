"""
Topic Catalog Provider

Owns the current catalog snapshot and refreshes it from the configured
source. Readers always get one complete snapshot; a reload builds a new
catalog and swaps the reference.
"""

from typing import Dict, Any, Optional, Iterable
from pathlib import Path
from sqlalchemy import text
import asyncio
import json
import logging
import re

from config.database import get_async_db
from config.settings import settings
from curriculum.topic_catalog import TopicCatalog


TOPIC_COLUMNS = (
    "id", "name", "\"displayName\"", "description", "\"gradeId\"", "\"subjectId\"",
    "difficulty", "\"estimatedHours\"", "prerequisites", "skills",
    "\"sortOrder\"", "\"isActive\""
)

# Plain or schema-qualified table name
TABLE_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


class CatalogProvider:
    """Holds the current TopicCatalog and reloads it on demand"""

    def __init__(self, catalog: Optional[TopicCatalog] = None):
        self._catalog = catalog if catalog is not None else TopicCatalog()
        self._reload_lock = asyncio.Lock()
        self.logger = logging.getLogger("CatalogProvider")

    def current(self) -> TopicCatalog:
        """The snapshot to use for one request"""
        return self._catalog

    def replace(self, catalog: TopicCatalog) -> TopicCatalog:
        previous = self._catalog
        self._catalog = catalog
        self.logger.info(f"Topic catalog replaced: {len(previous)} -> {len(catalog)} topics")
        return catalog

    def load_from_records(self, records: Iterable[Dict[str, Any]]) -> TopicCatalog:
        return self.replace(TopicCatalog.from_records(records))

    def load_from_file(self, path: str) -> TopicCatalog:
        """
        Load topics from a JSON file holding an array of topic records.

        Raises:
            OSError, ValueError: file missing, unreadable or not a JSON array
        """
        return self.replace(self._read_file(path))

    def _read_file(self, path: str) -> TopicCatalog:
        try:
            records = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.error(f"Error reading topic catalog file {path}: {str(e)}")
            raise

        if not isinstance(records, list):
            raise ValueError(f"Topic catalog file {path} must contain a JSON array")
        return TopicCatalog.from_records(records)

    async def load_from_database(self, table: Optional[str] = None) -> TopicCatalog:
        """
        Load every topic row from PostgreSQL and swap in the new catalog.

        Raises:
            ValueError: table is not a plain or schema-qualified identifier
        """
        table = table or settings.CATALOG_TABLE
        source = self._quote_table(table)
        try:
            async with get_async_db() as db:
                query = text(f"""
                    SELECT {", ".join(TOPIC_COLUMNS)}
                    FROM {source}
                    ORDER BY "gradeId", "subjectId", "sortOrder"
                """)
                result = await db.execute(query)
                rows = result.fetchall()
        except Exception as e:
            self.logger.error(f"Error loading topic catalog from database: {str(e)}")
            raise

        records = [self._row_to_record(row) for row in rows]
        self.logger.info(f"Fetched {len(records)} topic rows from {table}")
        return self.load_from_records(records)

    async def reload(self) -> TopicCatalog:
        """
        Reload from the configured source.

        A failed reload keeps the previous snapshot in place and re-raises
        the error to the caller.
        """
        async with self._reload_lock:
            try:
                if settings.CATALOG_SOURCE == "file":
                    if not settings.CATALOG_FILE:
                        raise ValueError("CATALOG_FILE must be set when CATALOG_SOURCE is 'file'")
                    catalog = await asyncio.to_thread(self._read_file, settings.CATALOG_FILE)
                    return self.replace(catalog)
                return await self.load_from_database()
            except Exception as e:
                self.logger.error(f"Topic catalog reload failed, keeping {len(self._catalog)} topics: {e}")
                raise

    async def run_periodic_reload(self, interval: int):
        """Reload the catalog every `interval` seconds until cancelled"""
        self.logger.info(f"Periodic catalog reload every {interval}s")
        while True:
            await asyncio.sleep(interval)
            try:
                await self.reload()
            except Exception:
                # Already logged by reload; try again next interval
                continue

    @staticmethod
    def _quote_table(table: str) -> str:
        if not TABLE_NAME_PATTERN.fullmatch(table):
            raise ValueError(f"Invalid topic catalog table name: {table!r}")
        return ".".join(f'"{part}"' for part in table.split("."))

    @staticmethod
    def _row_to_record(row) -> Dict[str, Any]:
        return {
            "id": row[0],
            "name": row[1],
            "display_name": row[2],
            "description": row[3],
            "grade_id": row[4],
            "subject_id": row[5],
            "difficulty": row[6],
            "estimated_hours": row[7],
            "prerequisites": row[8] or [],
            "skills": row[9] or [],
            "sort_order": row[10] if row[10] is not None else 0,
            "is_active": bool(row[11]) if row[11] is not None else True,
        }


# Global provider instance
catalog_provider = CatalogProvider()
