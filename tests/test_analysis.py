"""
Tests for budget analysis and reporting.
"""

from datetime import date

from movie_budget.core.analysis import (
    analyze_budget,
    category_breakdown,
    monthly_rollup,
    format_signed,
    render_analysis,
    render_report,
    top_variances,
    utilization,
)
from movie_budget.core.ledger import BudgetLineItem, LedgerStore


def make_item(item_id, category, amount, actual, item_date=date(2024, 1, 15)):
    return BudgetLineItem(
        id=item_id,
        category=category,
        subcategory="Misc",
        description=f"Item {item_id}",
        amount=amount,
        actual=actual,
        date=item_date,
    )


class TestAnalysis:
    """Test analysis numbers."""

    def setup_method(self):
        self.store = LedgerStore()

    def test_utilization_zero_budget(self):
        assert utilization(self.store.state) == 0
        self.store.add_item(make_item("a", "Other", 0, 500))
        assert utilization(self.store.state) == 0

    def test_utilization(self):
        self.store.add_item(make_item("a", "Production", 1000, 250))
        assert utilization(self.store.state) == 25.0

    def test_category_breakdown_skips_empty_and_keeps_order(self):
        self.store.add_item(make_item("a", "Other", 100, 50))
        self.store.add_item(make_item("b", "Above the Line", 300, 400))
        self.store.add_item(make_item("c", "Above the Line", 100, 0))

        breakdown = category_breakdown(self.store.state)

        assert [summary.category for summary in breakdown] == ["Above the Line", "Other"]
        above = breakdown[0]
        assert above.budget == 400
        assert above.actual == 400
        assert above.variance == 0
        assert above.percentage == 80.0

    def test_category_breakdown_ignores_unknown_categories(self):
        self.store.add_item(make_item("a", "Catering", 100, 0))
        assert category_breakdown(self.store.state) == []

    def test_top_variances(self):
        self.store.add_item(make_item("a", "Other", 100, 100))
        self.store.add_item(make_item("b", "Other", 100, 50))
        self.store.add_item(make_item("c", "Other", 100, 300))

        entries = top_variances(self.store.state)

        assert [entry.item_id for entry in entries] == ["c", "b"]
        assert entries[0].is_over
        assert not entries[1].is_over

    def test_top_variances_limit(self):
        for index in range(15):
            self.store.add_item(make_item(str(index), "Other", 10, index + 20))
        assert len(top_variances(self.store.state)) == 10

    def test_monthly_rollup(self):
        self.store.add_item(make_item("a", "Other", 100, 10, date(2024, 2, 3)))
        self.store.add_item(make_item("b", "Other", 50, 5, date(2024, 1, 9)))
        self.store.add_item(make_item("c", "Other", 25, 0, date(2024, 2, 28)))

        rollup = monthly_rollup(self.store.state)

        assert [(m.month, m.budget, m.actual) for m in rollup] == [
            ("2024-02", 125, 10),
            ("2024-01", 50, 5),
        ]


class TestRenderAnalysis:
    """Test rendered analysis text."""

    def setup_method(self):
        self.store = LedgerStore()

    def test_empty_ledger(self):
        text = render_analysis(analyze_budget(self.store.state))

        assert "**Total Budget:** $0" in text
        assert "**Variance:** $0 (Over Budget)" in text
        assert "**Utilization:** 0.0%" in text
        assert "Budget Overrun Alert" not in text
        assert "Budget Status: Good" not in text
        assert "Category Breakdown" not in text

    def test_over_budget(self):
        self.store.add_item(make_item("a", "Production", 1000, 1500))
        text = render_analysis(analyze_budget(self.store.state))

        assert "**Variance:** $500 (Over Budget)" in text
        assert "**Utilization:** 150.0%" in text
        assert "⚠️ **Budget Overrun Alert**" in text
        assert "over budget by $500" in text
        assert "• Reviewing high-variance items" in text
        assert "• Production: $1,000 budget, $1,500 spent" in text

    def test_under_budget(self):
        self.store.add_item(make_item("a", "Post-Production", 60000, 20000))
        text = render_analysis(analyze_budget(self.store.state))

        assert "**Variance:** $40,000 (Under Budget)" in text
        assert "✅ **Budget Status: Good**" in text
        assert "under budget by $40,000" in text
        assert "• Contingency allocation" in text

    def test_exactly_on_budget_has_no_suggestions(self):
        self.store.add_item(make_item("a", "Other", 100, 100))
        analysis = analyze_budget(self.store.state)
        text = render_analysis(analysis)

        assert analysis.status == "Over Budget"
        assert "Budget Overrun Alert" not in text
        assert "Budget Status: Good" not in text
        assert "• Other: $100 budget, $100 spent" in text


class TestRenderReport:
    """Test the full budget report."""

    def setup_method(self):
        self.store = LedgerStore()

    def test_format_signed(self):
        assert format_signed(1500) == "+$1,500"
        assert format_signed(-40000) == "-$40,000"
        assert format_signed(0) == "$0"

    def test_empty_ledger(self):
        text = render_report(self.store.state)
        assert text == "📈 **Budget Report**\n\nNo budget items yet."

    def test_report_sections(self):
        self.store.add_item(make_item("a", "Production", 3000, 3500, date(2024, 2, 3)))
        self.store.add_item(make_item("b", "Other", 1000, 200, date(2024, 3, 9)))
        self.store.add_item(make_item("c", "Other", 1000, 1000, date(2024, 3, 20)))

        text = render_report(self.store.state)

        assert "• Production: $3,000 (60.0%), variance +$500" in text
        assert "• Other: $2,000 (40.0%), variance -$800" in text
        assert "**Largest Variances:**" in text
        assert "• Item b: $800 under" in text
        assert "• Item a: $500 over" in text
        assert "Item c:" not in text
        assert text.index("Item b:") < text.index("Item a:")
        assert "• 2024-02: $3,000 budget, $3,500 spent" in text
        assert "• 2024-03: $2,000 budget, $1,200 spent" in text

    def test_report_without_variances(self):
        self.store.add_item(make_item("a", "Other", 100, 100))
        text = render_report(self.store.state)
        assert "Largest Variances" not in text
        assert "Monthly Budget vs. Actual" in text
