"""
Unit Tests for the fintrack Aggregation Module.

These tests verify:
1. Filter stages and their composition
2. Totals and category breakdown (including sum conservation)
3. Trailing monthly series
4. Budget consumption bands and clamping
5. Insights and tip priority
6. Quick stats

Test Categories:
- test_filter_*: Filtering pipeline tests
- test_totals_* / test_breakdown_*: Sum tests
- test_monthly_*: Time series tests
- test_budget_*: Budget consumption tests
- test_tip_* / test_insights_*: Insight tests
- test_quick_stats_*: Headline number tests
"""

import itertools
from datetime import date

import pytest

from fintrack.domain.entities import (
    FilterState,
    PeriodFilter,
    SplitFilter,
    TransactionType,
    TypeFilter,
)
from fintrack.service.analytics import (
    AnalyticsSettings,
    BudgetBand,
    apply_filters,
    apply_predicates,
    budget_progress,
    build_insights,
    calculate_totals,
    category_breakdown,
    category_totals,
    monthly_series,
    month_scope,
    period_predicate,
    quick_stats,
    savings_rate,
    search_predicate,
    split_predicate,
    top_expense_category,
    type_predicate,
)
from tests.fakes import TODAY, make_transaction

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


@pytest.fixture
def ledger():
    """A small mixed list, newest first."""
    return [
        make_transaction(6, 50.0, EXPENSE, "🛒 Shopping", "2026-10-19", "New shoes"),
        make_transaction(5, 30.0, EXPENSE, "🍔 Food & Dining", "2026-10-15", "Pizza night", is_splitwise=True),
        make_transaction(4, 1000.0, INCOME, "💼 Salary", "2026-10-01", "October salary"),
        make_transaction(3, 20.0, EXPENSE, "🍔 Food & Dining", "2026-10-01", "Groceries"),
        make_transaction(2, 80.0, EXPENSE, "🚗 Transportation", "2026-09-28", "Train pass"),
        make_transaction(1, 900.0, INCOME, "💼 Salary", "2026-09-01", "September salary"),
    ]


# =============================================================================
# Filter Tests
# =============================================================================

class TestFilters:
    """Tests for the filtering pipeline."""

    def test_filter_month_scope(self, ledger):
        """Only transactions in the selected month are kept."""
        result = month_scope(ledger, FilterState(selected_month="2026-09"))
        assert [t.id for t in result] == [2, 1]

    def test_filter_month_none_is_all_time(self, ledger):
        assert len(month_scope(ledger, FilterState(selected_month=None))) == len(ledger)

    def test_filter_search_matches_description_case_insensitive(self, ledger):
        result = apply_predicates(ledger, [search_predicate("PIZZA")])
        assert [t.id for t in result] == [5]

    def test_filter_search_matches_category(self, ledger):
        result = apply_predicates(ledger, [search_predicate("food")])
        assert [t.id for t in result] == [5, 3]

    def test_filter_search_blank_matches_everything(self, ledger):
        assert len(apply_predicates(ledger, [search_predicate("   ")])) == len(ledger)

    def test_filter_type(self, ledger):
        income = apply_predicates(ledger, [type_predicate(TypeFilter.INCOME)])
        expense = apply_predicates(ledger, [type_predicate(TypeFilter.EXPENSE)])

        assert [t.id for t in income] == [4, 1]
        assert len(income) + len(expense) == len(ledger)

    def test_filter_period_today(self, ledger):
        result = apply_predicates(ledger, [period_predicate(PeriodFilter.TODAY, TODAY)])
        assert [t.id for t in result] == [6]

    def test_filter_period_week_is_seven_days_back(self, ledger):
        """Week starts seven days before today, inclusive."""
        result = apply_predicates(ledger, [period_predicate(PeriodFilter.WEEK, TODAY)])
        assert [t.id for t in result] == [6, 5]

        edge = make_transaction(9, txn_date="2026-10-12")
        assert period_predicate(PeriodFilter.WEEK, TODAY)(edge)

    def test_filter_period_month_starts_on_the_first(self, ledger):
        result = apply_predicates(ledger, [period_predicate(PeriodFilter.MONTH, TODAY)])
        assert [t.id for t in result] == [6, 5, 4, 3]

    def test_filter_period_week_uses_setting(self, ledger):
        settings = AnalyticsSettings(week_days=3)
        result = apply_predicates(ledger, [period_predicate(PeriodFilter.WEEK, TODAY, settings)])
        assert [t.id for t in result] == [6]

    def test_filter_split(self, ledger):
        shared = apply_predicates(ledger, [split_predicate(SplitFilter.SHARED)])
        personal = apply_predicates(ledger, [split_predicate(SplitFilter.PERSONAL)])

        assert [t.id for t in shared] == [5]
        assert len(personal) == len(ledger) - 1

    def test_filter_composition_is_order_independent(self, ledger):
        """Search, type and period give the same result in any order."""
        stages = [
            search_predicate("o"),
            type_predicate(TypeFilter.EXPENSE),
            period_predicate(PeriodFilter.MONTH, TODAY),
        ]
        expected = apply_predicates(ledger, stages)

        for order in itertools.permutations(stages):
            assert apply_predicates(ledger, order) == expected

    def test_filter_full_pipeline(self, ledger):
        filters = FilterState(
            selected_month="2026-10",
            split=SplitFilter.PERSONAL,
            type=TypeFilter.EXPENSE,
        )
        result = apply_filters(ledger, filters, TODAY)
        assert [t.id for t in result] == [6, 3]

    def test_filter_does_not_mutate_input(self, ledger):
        before = list(ledger)
        apply_filters(ledger, FilterState(search="x", type=TypeFilter.INCOME), TODAY)
        assert ledger == before


# =============================================================================
# Totals and Breakdown Tests
# =============================================================================

class TestTotals:
    """Tests for totals and category breakdown."""

    def test_totals_income_expense_net(self, ledger):
        totals = calculate_totals(month_scope(ledger, FilterState(selected_month="2026-10")))

        assert totals.income == 1000.0
        assert totals.expense == 100.0
        assert totals.net == 900.0

    def test_totals_empty(self):
        totals = calculate_totals([])
        assert (totals.income, totals.expense, totals.net) == (0, 0, 0)

    def test_breakdown_sorted_descending(self, ledger):
        result = category_totals(ledger, EXPENSE)

        assert [c.category for c in result] == [
            "🚗 Transportation",
            "🛒 Shopping",
            "🍔 Food & Dining",
        ]
        assert result[2].total == 50.0

    def test_breakdown_ties_keep_first_encountered_order(self):
        transactions = [
            make_transaction(3, 25.0, EXPENSE, "🎬 Entertainment"),
            make_transaction(2, 25.0, EXPENSE, "📚 Education"),
            make_transaction(1, 25.0, EXPENSE, "🏠 Housing"),
        ]
        result = category_totals(transactions, EXPENSE)
        assert [c.category for c in result] == [
            "🎬 Entertainment",
            "📚 Education",
            "🏠 Housing",
        ]

    @pytest.mark.parametrize("selected_month", [None, "2026-10", "2026-09", "2026-08"])
    @pytest.mark.parametrize("split", list(SplitFilter))
    def test_breakdown_sums_match_totals(self, ledger, selected_month, split):
        """Category sums add up to the type total for the same subset."""
        subset = apply_filters(
            ledger,
            FilterState(selected_month=selected_month, split=split),
            TODAY,
        )
        totals = calculate_totals(subset)
        breakdown = category_breakdown(subset)

        assert sum(c.total for c in breakdown.income) == pytest.approx(totals.income)
        assert sum(c.total for c in breakdown.expense) == pytest.approx(totals.expense)

    def test_top_expense_category(self, ledger):
        assert top_expense_category(ledger) == "🚗 Transportation"
        assert top_expense_category([]) is None


# =============================================================================
# Monthly Series Tests
# =============================================================================

class TestMonthlySeries:
    """Tests for the trailing monthly series."""

    def test_monthly_six_points_oldest_first(self, ledger):
        series = monthly_series(ledger, TODAY)

        assert [p.month for p in series] == [
            "2026-05", "2026-06", "2026-07", "2026-08", "2026-09", "2026-10",
        ]
        assert series[-1].label == "Oct 26"

    def test_monthly_sums(self, ledger):
        series = monthly_series(ledger, TODAY)

        assert series[-1].income == 1000.0
        assert series[-1].expense == 100.0
        assert series[-2].income == 900.0
        assert series[-2].expense == 80.0
        assert series[0].income == 0.0

    def test_monthly_crosses_year_boundary(self):
        series = monthly_series([], date(2026, 2, 10))
        assert [p.month for p in series] == [
            "2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02",
        ]
        assert series[0].label == "Sep 25"

    def test_monthly_ignores_older_months(self):
        old = make_transaction(1, 500.0, INCOME, "💼 Salary", "2025-01-15")
        series = monthly_series([old], TODAY)
        assert all(p.income == 0 for p in series)


# =============================================================================
# Budget Tests
# =============================================================================

class TestBudget:
    """Tests for budget consumption."""

    def test_budget_counts_only_this_month_expenses(self, ledger):
        progress = budget_progress(ledger, 1000.0, TODAY)

        assert progress.spent == 100.0
        assert progress.percentage == pytest.approx(10.0)
        assert progress.band == BudgetBand.ON_TRACK
        assert progress.message == "💪 On track! Keep it up!"

    @pytest.mark.parametrize(
        "spent,band,message",
        [
            (499.0, BudgetBand.ON_TRACK, "💪 On track! Keep it up!"),
            (500.0, BudgetBand.MIDWAY, "📊 Halfway through your budget."),
            (800.0, BudgetBand.WARNING, "⚠️ Almost there! Spend carefully."),
            (1000.0, BudgetBand.EXCEEDED, "🚨 Budget exceeded! Time to cut back."),
        ],
    )
    def test_budget_band_boundaries(self, spent, band, message):
        transactions = [make_transaction(1, spent, EXPENSE, txn_date="2026-10-05")]
        progress = budget_progress(transactions, 1000.0, TODAY)

        assert progress.band == band
        assert progress.message == message

    def test_budget_clamped_to_100(self):
        transactions = [make_transaction(1, 2500.0, EXPENSE, txn_date="2026-10-05")]
        progress = budget_progress(transactions, 1000.0, TODAY)

        assert progress.percentage == 100.0
        assert progress.spent == 2500.0

    def test_budget_monotonic_in_spending(self):
        previous = -1.0
        for amount in [0.0, 100.0, 450.0, 999.0, 1000.0, 1500.0]:
            transactions = [make_transaction(1, amount or 0.01, EXPENSE, txn_date="2026-10-05")]
            pct = budget_progress(transactions, 1000.0, TODAY).percentage
            assert pct >= previous
            previous = pct

    def test_budget_rejects_non_positive(self):
        with pytest.raises(ValueError):
            budget_progress([], 0, TODAY)


# =============================================================================
# Insights Tests
# =============================================================================

class TestInsights:
    """Tests for insights and tip selection."""

    def test_tip_no_data(self):
        insights = build_insights([], FilterState())

        assert insights.tip == "💡 Add your income and expenses to see insights!"
        assert insights.top_category == "N/A"
        assert insights.savings_rate == 0

    def test_tip_pending_split_reminder(self, ledger):
        insights = build_insights(ledger, FilterState())

        assert insights.pending_split == 3
        assert insights.tip == (
            "💡 You have 3 personal expenses. Don't forget to add shared items to Splitwise! 👥"
        )

    def test_tip_no_reminder_when_viewing_shared(self):
        """The reminder is skipped when the shared filter is on; the next rule applies."""
        transactions = [
            make_transaction(2, 100.0, INCOME, "💼 Salary"),
            make_transaction(1, 50.0, EXPENSE),
        ]
        insights = build_insights(transactions, FilterState(split=SplitFilter.SHARED))
        assert insights.tip.startswith("🎉 Excellent!")

    def test_tip_overspend_names_top_category(self):
        transactions = [
            make_transaction(3, 100.0, INCOME, "💼 Salary"),
            make_transaction(2, 150.0, EXPENSE, "🏠 Housing", is_splitwise=True),
        ]
        insights = build_insights(transactions, FilterState())

        assert insights.tip == (
            "⚠️ You're spending more than you earn! Try to cut back on 🏠 Housing"
        )

    @pytest.mark.parametrize(
        "expense,tip",
        [
            (650.0, "🎉 Excellent! You're saving 35.0% of your income!"),
            (750.0, "👍 Good job! You're on track with 25.0% savings rate!"),
            (850.0, "💪 Not bad! Try to increase your savings rate above 20%"),
            (950.0, "💡 Tip: Aim to save at least 20% of your income for financial security"),
        ],
    )
    def test_tip_savings_tiers(self, expense, tip):
        transactions = [
            make_transaction(2, 1000.0, INCOME, "💼 Salary"),
            make_transaction(1, expense, EXPENSE, is_splitwise=True),
        ]
        assert build_insights(transactions, FilterState()).tip == tip

    def test_insights_savings_rate_rounded(self):
        transactions = [
            make_transaction(2, 300.0, INCOME, "💼 Salary"),
            make_transaction(1, 200.0, EXPENSE, is_splitwise=True),
        ]
        insights = build_insights(transactions, FilterState())

        assert insights.savings == 100.0
        assert insights.savings_rate == 33.3
        assert insights.transaction_count == 2

    def test_insights_rate_zero_without_income(self):
        totals = calculate_totals([make_transaction(1, 10.0, EXPENSE)])
        assert savings_rate(totals) == 0.0


# =============================================================================
# Quick Stats Tests
# =============================================================================

class TestQuickStats:
    """Tests for quick stats."""

    def test_quick_stats(self, ledger):
        stats = quick_stats(ledger, TODAY)

        assert stats.month_expense == 100.0
        assert stats.daily_average == pytest.approx(100.0 / 19)
        assert stats.top_category == "🚗 Transportation"
        assert stats.total_transactions == 6

    def test_quick_stats_empty(self):
        stats = quick_stats([], TODAY)

        assert stats.daily_average == 0
        assert stats.top_category == "N/A"
