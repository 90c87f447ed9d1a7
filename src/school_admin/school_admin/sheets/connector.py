from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from ..core.constants import (
    DEFAULT_SHEETS_EXPORT_BASE_URL,
    ENROLLMENT_TAB,
    ENROLLMENT_TAB_GID,
    TEACHER_TAB,
    TEACHER_TAB_GID,
)
from ..core.exceptions import ConnectivityError
from .csv_parser import parse_csv_text
from .model import EnrollmentSheetRow, SheetAck, SheetRequest, TeacherSheetRow, build_envelope

logger = logging.getLogger(__name__)


class SheetConnector:
    """Reads tabs as exported CSV and writes rows through a webhook.

    One attempt per call, no retry. ``timeout=None`` leaves the HTTP client default.
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        webhook_url: str = "",
        export_base_url: str = DEFAULT_SHEETS_EXPORT_BASE_URL,
        teacher_tab: str = TEACHER_TAB,
        enrollment_tab: str = ENROLLMENT_TAB,
        tab_gids: Optional[dict] = None,
        timeout: Optional[float] = None,
    ):
        self._session = session
        self._webhook_url = (webhook_url or "").strip()
        self._export_base_url = (export_base_url or DEFAULT_SHEETS_EXPORT_BASE_URL).rstrip("/")
        self._teacher_tab = teacher_tab
        self._enrollment_tab = enrollment_tab
        self._tab_gids = {teacher_tab: TEACHER_TAB_GID, enrollment_tab: ENROLLMENT_TAB_GID}
        if tab_gids:
            self._tab_gids.update(tab_gids)
        self._timeout = timeout

    @property
    def can_write(self) -> bool:
        return bool(self._webhook_url)

    def gviz_url(self, sheet_id: str, tab_name: str) -> str:
        return f"{self._export_base_url}/{sheet_id}/gviz/tq?tqx=out:csv&sheet={quote(tab_name)}"

    def export_url(self, sheet_id: str, tab_name: str) -> str:
        gid = self._tab_gids.get(tab_name, 0)
        return f"{self._export_base_url}/{sheet_id}/export?format=csv&gid={gid}"

    def _get_text(self, url: str) -> requests.Response:
        return self._session.get(url, timeout=self._timeout)

    def read_tab(self, sheet_id: str, tab_name: str) -> List[List[str]]:
        if not sheet_id:
            raise ConnectivityError("No sheet id configured")

        primary = self.gviz_url(sheet_id, tab_name)
        try:
            resp = self._get_text(primary)
            if resp.ok:
                return parse_csv_text(resp.text)
            logger.warning("Sheet export %s returned HTTP %s, trying gid export", tab_name, resp.status_code)
        except requests.RequestException as exc:
            logger.warning("Sheet export %s failed (%s), trying gid export", tab_name, exc)

        fallback = self.export_url(sheet_id, tab_name)
        try:
            resp = self._get_text(fallback)
        except requests.RequestException as exc:
            raise ConnectivityError(f"Failed to fetch sheet data: {exc}") from exc
        if not resp.ok:
            raise ConnectivityError(
                f"Failed to fetch sheet data: HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        return parse_csv_text(resp.text)

    def read_teacher_rows(self, sheet_id: str) -> List[TeacherSheetRow]:
        cells = self.read_tab(sheet_id, self._teacher_tab)
        rows = [TeacherSheetRow.from_cells(c, row_number=i + 2) for i, c in enumerate(cells)]
        return [r for r in rows if r.is_identifiable]

    def read_enrollment_rows(self, sheet_id: str) -> List[EnrollmentSheetRow]:
        cells = self.read_tab(sheet_id, self._enrollment_tab)
        rows = [EnrollmentSheetRow.from_cells(c, row_number=i + 2) for i, c in enumerate(cells)]
        return [r for r in rows if r.is_identifiable]

    def send(self, request: SheetRequest) -> SheetAck:
        """Single dispatch point for every webhook write."""
        if not self._webhook_url:
            raise ConnectivityError("No sheet webhook URL configured")

        body = build_envelope(request)
        try:
            resp = self._session.post(self._webhook_url, json=body, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ConnectivityError(f"Sheet webhook request failed: {exc}") from exc

        if not resp.ok:
            raise ConnectivityError(
                f"Sheet webhook returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ConnectivityError("Sheet webhook returned a non-JSON response", status_code=resp.status_code) from exc

        return SheetAck.from_json(payload)
