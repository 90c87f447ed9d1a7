from __future__ import annotations

import logging

from ..core.enums import PushStatus
from ..core.exceptions import ConnectivityError
from .connector import SheetConnector
from .model import PushResult, SheetRequest, request_action

logger = logging.getLogger(__name__)


class SheetPusher:
    """Best-effort mirror of local writes to the sheet. Never raises."""

    def __init__(self, *, connector: SheetConnector, default_sheet_id: str = ""):
        self._connector = connector
        self._default_sheet_id = (default_sheet_id or "").strip()

    @property
    def default_sheet_id(self) -> str:
        return self._default_sheet_id

    def push(self, request: SheetRequest) -> PushResult:
        action = request_action(request).value
        if not request.sheet_id or not self._connector.can_write:
            logger.info("Sheet push %s skipped: sheet sync not configured", action)
            return PushResult(PushStatus.SKIPPED, reason="Sheet sync is not configured")

        try:
            ack = self._connector.send(request)
        except ConnectivityError as exc:
            logger.warning("Sheet push %s failed: %s", action, exc)
            return PushResult(PushStatus.FAILED, reason=str(exc))

        if ack.success:
            logger.info("Sheet push %s ok (row %s)", action, ack.row_number)
            return PushResult(PushStatus.OK, row_number=ack.row_number)
        if ack.is_not_found:
            logger.warning("Sheet push %s found no matching row: %s", action, ack.error)
            return PushResult(PushStatus.NOT_FOUND, reason=ack.error)

        logger.warning("Sheet push %s rejected: %s", action, ack.error)
        return PushResult(PushStatus.FAILED, reason=ack.error or "Sheet webhook reported failure")
