from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import requests

from ..models.config_models import ApiConfig
from ..models.entity_kind import EntityKind
from ..models.processing_result import ImportSummary
from ..models.records import NormalizedRecord, NormalizedVirtualMachine

"""HTTP client for the SRPH-MIS persistence API.

The import endpoints take `{"<plural>": [record, ...]}` and answer with a
summary `{total, successful, updated?, failed, errors, message}`. Records
the server rejects are reported in that summary (partial success); only a
non-2xx response or a transport error fails the whole submission.

Virtual machines are created one by one through `/api/vm-inventory`; the
per-record answers are tallied into the same summary shape.
"""

__all__ = [
    "ImportApiClient",
    "SubmissionError",
]

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """Raised when a batch could not be submitted at all."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ImportApiClient:
    """Thin requests.Session wrapper around the import and VM inventory endpoints."""

    def __init__(self, config: ApiConfig, session: requests.Session | None = None):
        self.config = config
        self._session = session or requests.Session()
        self._session.headers["Accept"] = "application/json"
        if config.token:
            self._session.headers["Authorization"] = f"Bearer {config.token}"

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    @staticmethod
    def _error_message(response: requests.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback

    def submit(self, kind: EntityKind, records: Sequence[NormalizedRecord]) -> ImportSummary:
        """POST one file's records to /api/<plural>/import and return the server summary.

        Virtual machines have no bulk import endpoint; see `_submit_vms`.
        """
        if kind is EntityKind.VM:
            return self._submit_vms(records)  # type: ignore[arg-type]
        url = self._url(f"/api/{kind.plural}/import")
        body = {kind.plural: [r.to_payload() for r in records]}
        logger.debug("POST %s records=%d", url, len(records))
        try:
            response = self._session.post(
                url,
                json=body,
                timeout=self.config.timeout_seconds,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as e:
            raise SubmissionError(f"import request failed: {e}") from e

        if not response.ok:
            raise SubmissionError(self._error_message(response, "Import failed"), response.status_code)
        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionError(f"invalid import response: {e}", response.status_code) from e
        return ImportSummary.from_response(data)

    def _submit_vms(self, records: Sequence[NormalizedVirtualMachine]) -> ImportSummary:
        """POST each VM to /api/vm-inventory and tally the responses.

        A non-2xx answer rejects that record only (`Row <n>: <message>`);
        a transport error aborts the file.
        """
        url = self._url("/api/vm-inventory")
        modified_at = datetime.now(UTC).isoformat()
        logger.debug("POST %s records=%d (one request each)", url, len(records))
        successful = 0
        errors: list[str] = []
        for index, record in enumerate(records, start=1):
            try:
                response = self._session.post(
                    url,
                    json=record.to_inventory_payload(modified_at),
                    timeout=self.config.timeout_seconds,
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as e:
                raise SubmissionError(f"VM inventory request failed: {e}") from e
            if response.ok:
                successful += 1
            else:
                errors.append(f"Row {index}: {self._error_message(response, 'Failed to create VM')}")
        return ImportSummary(total=len(records), successful=successful, failed=len(errors), errors=errors)

    def fetch_vms(self) -> list[dict[str, Any]]:
        """GET the VM inventory (camelCase records) for CSV export."""
        url = self._url("/api/vm-inventory")
        try:
            response = self._session.get(url, timeout=self.config.timeout_seconds, verify=self.config.verify_ssl)
        except requests.RequestException as e:
            raise SubmissionError(f"VM inventory request failed: {e}") from e
        if not response.ok:
            raise SubmissionError(
                self._error_message(response, "Failed to fetch VM inventory"), response.status_code
            )
        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionError(f"invalid VM inventory response: {e}", response.status_code) from e
        if not isinstance(data, list):
            raise SubmissionError("invalid VM inventory response: expected a list")
        return data

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> ImportApiClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
