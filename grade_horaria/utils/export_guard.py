from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Any

import hashlib
import json
import logging

from grade_horaria.errors import ExportInProgressError

logger = logging.getLogger("grade_horaria.export")


def snapshot_key(kind: str, timetable: Any, input_data: Any) -> str:
    raw = json.dumps([kind, timetable, input_data], sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class ExportGuard:
    """
    One export per snapshot at a time. A second identical request while the
    first is still rendering is refused; the key is released when the first
    one settles, success or failure.
    All access happens on the event loop thread, so a plain set is enough.
    """

    def __init__(self):
        self._in_flight: set[str] = set()

    def busy(self, key: str) -> bool:
        return key in self._in_flight

    @asynccontextmanager
    async def hold(self, key: str):
        if key in self._in_flight:
            logger.warning("Export %s already in progress, refusing duplicate", key[:12])
            raise ExportInProgressError("Exportação já em andamento. Aguarde a conclusão.")
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)


export_guard = ExportGuard()
