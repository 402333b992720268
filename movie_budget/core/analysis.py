"""
Budget analysis and reporting.

Read-only summaries over a LedgerState: utilization, per-category
breakdown, largest variances and a monthly budget-vs-actual rollup.
Nothing here mutates the ledger.
"""

from dataclasses import dataclass
from typing import Dict, List

from .ledger import LedgerState
from .templates import format_amount


OVER_BUDGET_SUGGESTIONS = (
    "Reviewing high-variance items",
    "Adjusting spending in remaining categories",
    "Reallocating funds from under-budget areas",
)

UNDER_BUDGET_SUGGESTIONS = (
    "Additional expenses",
    "Quality improvements",
    "Contingency allocation",
)

TOP_VARIANCE_LIMIT = 10


@dataclass(frozen=True)
class CategorySummary:
    """Budget and spend rolled up for one category."""
    category: str
    budget: float
    actual: float
    variance: float
    percentage: float  # Share of total budget, 0-100


@dataclass(frozen=True)
class VarianceEntry:
    """One item with a non-zero variance."""
    item_id: str
    description: str
    variance: float

    @property
    def is_over(self) -> bool:
        return self.variance > 0


@dataclass(frozen=True)
class MonthlySummary:
    month: str  # YYYY-MM
    budget: float
    actual: float


@dataclass(frozen=True)
class BudgetAnalysis:
    """Snapshot of ledger health used by the chat analysis reply."""
    total_budget: float
    total_actual: float
    total_variance: float
    utilization: float
    categories: List[CategorySummary]

    @property
    def status(self) -> str:
        return "Over Budget" if self.total_variance >= 0 else "Under Budget"


def utilization(state: LedgerState) -> float:
    """Percentage of the budget spent; 0 when nothing is budgeted."""
    if state.total_budget == 0:
        return 0.0
    return state.total_actual / state.total_budget * 100


def category_breakdown(state: LedgerState) -> List[CategorySummary]:
    """Summarize each taxonomy category that has a non-zero budget.

    Categories follow taxonomy order. Items whose category is not in the
    taxonomy are not reported.
    """
    summaries = []
    for category in state.categories:
        items = state.items_in(category)
        budget = sum(item.amount for item in items)
        if budget == 0:
            continue
        actual = sum(item.actual for item in items)
        percentage = budget / state.total_budget * 100 if state.total_budget else 0.0
        summaries.append(CategorySummary(
            category=category,
            budget=budget,
            actual=actual,
            variance=actual - budget,
            percentage=percentage,
        ))
    return summaries


def top_variances(state: LedgerState, limit: int = TOP_VARIANCE_LIMIT) -> List[VarianceEntry]:
    """Items with the largest absolute variance, biggest first."""
    entries = [
        VarianceEntry(item_id=item.id, description=item.description, variance=item.variance)
        for item in state.items
        if item.variance != 0
    ]
    entries.sort(key=lambda entry: abs(entry.variance), reverse=True)
    return entries[:limit]


def monthly_rollup(state: LedgerState) -> List[MonthlySummary]:
    """Budget and actual summed per calendar month of the item date."""
    totals: Dict[str, List[float]] = {}
    for item in state.items:
        month = item.date.strftime("%Y-%m")
        bucket = totals.setdefault(month, [0.0, 0.0])
        bucket[0] += item.amount
        bucket[1] += item.actual
    return [
        MonthlySummary(month=month, budget=budget, actual=actual)
        for month, (budget, actual) in totals.items()
    ]


def analyze_budget(state: LedgerState) -> BudgetAnalysis:
    return BudgetAnalysis(
        total_budget=state.total_budget,
        total_actual=state.total_actual,
        total_variance=state.total_variance,
        utilization=utilization(state),
        categories=category_breakdown(state),
    )


def render_analysis(analysis: BudgetAnalysis) -> str:
    """Render an analysis as chat markup."""
    variance = analysis.total_variance
    lines = [
        "📊 **Budget Analysis Report**",
        "",
        f"**Total Budget:** ${format_amount(analysis.total_budget)}",
        f"**Total Spent:** ${format_amount(analysis.total_actual)}",
        f"**Variance:** ${format_amount(abs(variance))} ({analysis.status})",
        f"**Utilization:** {analysis.utilization:.1f}%",
        "",
    ]

    if variance > 0:
        lines.append("⚠️ **Budget Overrun Alert**")
        lines.append(f"Your project is over budget by ${format_amount(variance)}. Consider:")
        lines.extend(f"• {suggestion}" for suggestion in OVER_BUDGET_SUGGESTIONS)
        lines.append("")
    elif variance < 0:
        lines.append("✅ **Budget Status: Good**")
        lines.append(
            f"You're under budget by ${format_amount(abs(variance))}. You may have room for:"
        )
        lines.extend(f"• {suggestion}" for suggestion in UNDER_BUDGET_SUGGESTIONS)
        lines.append("")

    if analysis.categories:
        lines.append("**Category Breakdown:**")
        for summary in analysis.categories:
            lines.append(
                f"• {summary.category}: ${format_amount(summary.budget)} budget, "
                f"${format_amount(summary.actual)} spent"
            )

    return "\n".join(lines).rstrip("\n")


def format_signed(amount: float) -> str:
    """Format a variance as +$x, -$x or $0."""
    sign = "+" if amount > 0 else "-" if amount < 0 else ""
    return f"{sign}${format_amount(abs(amount))}"


def render_report(state: LedgerState) -> str:
    """Render the full budget report: categories, largest variances, months."""
    lines = ["📈 **Budget Report**", ""]
    if not state.items:
        lines.append("No budget items yet.")
        return "\n".join(lines)

    breakdown = category_breakdown(state)
    if breakdown:
        lines.append("**Budget by Category:**")
        for summary in breakdown:
            lines.append(
                f"• {summary.category}: ${format_amount(summary.budget)} "
                f"({summary.percentage:.1f}%), variance {format_signed(summary.variance)}"
            )
        lines.append("")

    variances = top_variances(state)
    if variances:
        lines.append("**Largest Variances:**")
        for entry in variances:
            label = "over" if entry.is_over else "under"
            lines.append(f"• {entry.description}: ${format_amount(abs(entry.variance))} {label}")
        lines.append("")

    lines.append("**Monthly Budget vs. Actual:**")
    for month in monthly_rollup(state):
        lines.append(
            f"• {month.month}: ${format_amount(month.budget)} budget, "
            f"${format_amount(month.actual)} spent"
        )
    return "\n".join(lines)
