"""
Financial report model.

The reports endpoint answers in one of two shapes:

* **structured** -- ``{"summary": {...}, "driverStats": [...],
  "expenseBreakdown": [...], "revenueTrend": [...]}``
* **flat** -- raw totals (``totalRevenue``, ``totalExpenses``,
  ``completedDeliveries``, ``totalExpenseTransactions``, ``drivers``,
  ``expensesByType``) from which the summary is derived here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Optional

from .enums import ReportPeriod


def period_dates(
    period: ReportPeriod,
    today: Optional[date] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> tuple[Optional[date], date]:
    """Return the ``(start, end)`` dates covered by *period*."""
    today = today or date.today()
    if period is ReportPeriod.TODAY:
        return today, today
    if period is ReportPeriod.WEEK:
        return today - timedelta(days=7), today
    if period is ReportPeriod.MONTH:
        return today.replace(day=1), today
    if period is ReportPeriod.YEAR:
        return date(today.year, 1, 1), today
    return date_from, date_to or today


@dataclass(frozen=True)
class FinancialSummary:
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0
    completed_deliveries: int = 0
    revenue_from_deliveries: float = 0.0
    average_revenue_per_delivery: float = 0.0
    average_expense_per_transaction: float = 0.0

    @classmethod
    def from_totals(cls, payload: dict[str, Any]) -> "FinancialSummary":
        revenue = payload.get("totalRevenue") or 0
        expenses = payload.get("totalExpenses") or 0
        deliveries = payload.get("completedDeliveries") or 0
        transactions = payload.get("totalExpenseTransactions") or 0
        return cls(
            total_revenue=revenue,
            total_expenses=expenses,
            net_profit=revenue - expenses,
            profit_margin=((revenue - expenses) / revenue * 100) if revenue else 0.0,
            completed_deliveries=deliveries,
            revenue_from_deliveries=revenue,
            average_revenue_per_delivery=(revenue / deliveries) if deliveries else 0.0,
            average_expense_per_transaction=(expenses / transactions) if transactions else 0.0,
        )

    @classmethod
    def from_summary(cls, summary: dict[str, Any]) -> "FinancialSummary":
        return cls(
            total_revenue=summary.get("totalRevenue", 0),
            total_expenses=summary.get("totalExpenses", 0),
            net_profit=summary.get("netProfit", 0),
            profit_margin=summary.get("profitMargin", 0),
            completed_deliveries=summary.get("completedDeliveries", 0),
            revenue_from_deliveries=summary.get("revenueFromDeliveries", 0),
            average_revenue_per_delivery=summary.get("averageRevenuePerDelivery", 0),
            average_expense_per_transaction=summary.get("averageExpensePerTransaction", 0),
        )


@dataclass(frozen=True)
class FinancialReport:
    summary: FinancialSummary = field(default_factory=FinancialSummary)
    driver_stats: list[dict[str, Any]] = field(default_factory=list)
    expense_breakdown: list[dict[str, Any]] = field(default_factory=list)
    revenue_trend: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "FinancialReport":
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> "FinancialReport":
        if not isinstance(payload, dict):
            payload = {}
        if payload.get("summary"):
            return cls(
                summary=FinancialSummary.from_summary(payload["summary"]),
                driver_stats=list(payload.get("driverStats") or []),
                expense_breakdown=list(payload.get("expenseBreakdown") or []),
                revenue_trend=list(payload.get("revenueTrend") or []),
            )
        return cls(
            summary=FinancialSummary.from_totals(payload),
            driver_stats=list(payload.get("drivers") or []),
            expense_breakdown=list(payload.get("expensesByType") or []),
        )
