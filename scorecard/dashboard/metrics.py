# scorecard/dashboard/metrics.py
"""
KPI Calculations for the Scorecard Dashboard

Handles the individual-contributor metric reduction:
- Evaluation count
- Mean of per-evaluation average scores
- Flat total of all item scores
- Evaluations visited in the current calendar month
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import pandas as pd

from .models import EvaluationRecord, IndividualMetrics

logger = logging.getLogger(__name__)


def evaluations_to_dataframe(records: Iterable[EvaluationRecord]) -> pd.DataFrame:
    """
    Flatten evaluation records to one row per record.

    Columns: id, visit_date, item_count, score_sum
    """
    rows = [
        {
            'id': record.id,
            'visit_date': record.visit_date,
            'item_count': len(record.items),
            'score_sum': record.score_sum,
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=['id', 'visit_date', 'item_count', 'score_sum'])


def calculate_individual_metrics(
    records: Iterable[EvaluationRecord],
    now: Optional[datetime] = None
) -> IndividualMetrics:
    """
    Reduce evaluation records into dashboard metrics.

    The average score is the mean of per-record averages, not a flat mean
    of all item scores. A record without items counts as average 0 and
    adds nothing to the total.

    Args:
        records: Evaluations returned for the current user
        now: Reference time for the "this month" count. One value is used
            for the whole pass; defaults to the current local time.

    Returns:
        IndividualMetrics
    """
    df = evaluations_to_dataframe(records)

    if df.empty:
        return IndividualMetrics.empty()

    if now is None:
        now = datetime.now()

    has_items = df['item_count'] > 0
    record_average = (df['score_sum'] / df['item_count'].where(has_items)).where(has_items, 0.0)

    visit_dates = pd.to_datetime(df['visit_date'])
    in_month = (visit_dates.dt.month == now.month) & (visit_dates.dt.year == now.year)

    total_score = df['score_sum'].sum()

    metrics = IndividualMetrics(
        total_evaluations=len(df),
        average_score=_round_half_up(float(record_average.sum()) / len(df)),
        total_score=_as_plain_number(total_score),
        this_month=int(in_month.sum()),
    )

    logger.debug(
        f"Individual metrics: {metrics.total_evaluations} evaluations, "
        f"{int((~has_items).sum())} without items"
    )
    return metrics


def _round_half_up(value: float) -> float:
    """
    Round to one decimal, ties away from zero.

    Works on the exact binary value of the float, so 3.25 becomes 3.3 while
    1.45 (stored as 1.4499...) becomes 1.4.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _as_plain_number(value):
    """Convert a numpy scalar to int when it is whole, float otherwise."""
    value = float(value)
    return int(value) if value.is_integer() else value
