"""Fetches financial reports from the dashboard backend."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import httpx

from src.domain.enums import ReportPeriod
from src.domain.errors import AuthenticationError
from src.domain.reports import FinancialReport, period_dates
from src.infrastructure.api_client import ApiClient

logger = logging.getLogger(__name__)

REPORTS_PATH = "/financial/reports"


class ReportService:
    def __init__(self, api_client: ApiClient):
        self.api_client = api_client

    async def fetch(
        self,
        period: ReportPeriod = ReportPeriod.MONTH,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        today: Optional[date] = None,
    ) -> FinancialReport:
        """Return the report for *period*; an all-zero report if the call fails."""
        start, end = period_dates(period, today, date_from, date_to)
        params = {"period": period.value}
        if start:
            params["date_from"] = start.isoformat()
        if end:
            params["date_to"] = end.isoformat()

        try:
            payload = await self.api_client.get(REPORTS_PATH, params=params)
        except (httpx.HTTPError, AuthenticationError, ValueError) as exc:
            logger.error("Error fetching financial report: %s", exc)
            return FinancialReport.empty()
        return FinancialReport.from_payload(payload)
