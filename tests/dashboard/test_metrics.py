"""Tests for the individual metric reduction."""

from datetime import date, datetime

from scorecard.dashboard.metrics import calculate_individual_metrics, evaluations_to_dataframe
from scorecard.dashboard.models import EvaluationRecord, IndividualMetrics


class TestCalculateIndividualMetrics:
    """Tests for calculate_individual_metrics."""

    def test_no_records_gives_zeroed_metrics(self, fixed_now):
        """Test zero records produce all-zero metrics."""
        metrics = calculate_individual_metrics([], now=fixed_now)

        assert metrics == IndividualMetrics(
            total_evaluations=0, average_score=0, total_score=0, this_month=0
        )

    def test_single_record_this_month(self, make_record, fixed_now):
        """Test one record with scores 4 and 6 in the current month."""
        metrics = calculate_individual_metrics([make_record(scores=(4, 6))], now=fixed_now)

        assert metrics.total_evaluations == 1
        assert metrics.average_score == 5.0
        assert metrics.average_score_display == "5.0"
        assert metrics.total_score == 10
        assert metrics.this_month == 1

    def test_empty_items_record_counts_as_zero_average(self, make_record, fixed_now):
        """Test a record without items adds 0 to the average pool, not NaN."""
        records = [
            make_record("e-1", scores=(4, 6)),
            EvaluationRecord(id="e-2", visit_date=date(2025, 3, 20), items=[]),
        ]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        assert metrics.total_evaluations == 2
        # (5.0 + 0) / 2
        assert metrics.average_score == 2.5
        assert metrics.total_score == 10
        assert metrics.this_month == 2

    def test_average_is_mean_of_record_means(self, make_record, fixed_now):
        """Test average score is the mean of per-record averages."""
        records = [
            make_record("e-1", scores=(5,)),
            make_record("e-2", scores=(1, 1, 1)),
        ]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        # Record means are 5 and 1 -> 3.0; a flat mean would be 2.0
        assert metrics.average_score == 3.0
        assert metrics.total_score == 8

    def test_average_rounded_to_one_decimal(self, make_record, fixed_now):
        """Test the average keeps one decimal place."""
        records = [make_record(scores=(4, 4, 5))]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        assert metrics.average_score == 4.3
        assert metrics.average_score_display == "4.3"

    def test_average_rounds_ties_up(self, make_record, fixed_now):
        """Test an exact .x5 average rounds up rather than to even."""
        records = [make_record(scores=(3, 3, 4, 3))]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        assert metrics.average_score == 3.3
        assert metrics.average_score_display == "3.3"

    def test_average_rounds_binary_value(self, make_record, fixed_now):
        """Test a mean that only looks like a tie (1.45 is stored below it) rounds down."""
        records = [
            make_record(record_id="e-1", scores=(1, 2, 1, 2, 1)),
            make_record(record_id="e-2", scores=(1, 2)),
        ]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        assert metrics.average_score == 1.4

    def test_this_month_requires_same_month_and_year(self, make_record, fixed_now):
        """Test only visits in the current month of the current year count."""
        records = [
            make_record("e-1", visit=date(2025, 3, 1)),
            make_record("e-2", visit=date(2025, 3, 31)),
            make_record("e-3", visit=date(2024, 3, 15)),
            make_record("e-4", visit=date(2025, 2, 28)),
            make_record("e-5", visit=date(2025, 4, 1)),
        ]

        metrics = calculate_individual_metrics(records, now=fixed_now)

        assert metrics.total_evaluations == 5
        assert metrics.this_month == 2

    def test_fractional_scores_total(self, make_record, fixed_now):
        """Test non-integer scores keep their fractional total."""
        metrics = calculate_individual_metrics([make_record(scores=(2.5, 3))], now=fixed_now)

        assert metrics.total_score == 5.5

    def test_defaults_to_current_time(self, make_record):
        """Test a record dated today counts toward this month without an explicit now."""
        metrics = calculate_individual_metrics([make_record(visit=datetime.now().date())])

        assert metrics.this_month == 1


class TestEvaluationsToDataframe:
    """Tests for evaluations_to_dataframe."""

    def test_columns_and_counts(self, make_record):
        """Test one row per record with item count and score sum."""
        df = evaluations_to_dataframe([make_record(scores=(1, 2, 3))])

        assert list(df.columns) == ['id', 'visit_date', 'item_count', 'score_sum']
        assert df.iloc[0]['item_count'] == 3
        assert df.iloc[0]['score_sum'] == 6

    def test_empty(self):
        """Test no records gives an empty frame with the expected columns."""
        df = evaluations_to_dataframe([])

        assert df.empty
        assert 'score_sum' in df.columns
