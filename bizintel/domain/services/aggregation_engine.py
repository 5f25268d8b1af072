"""
Domain Service - Aggregation Engine

Post-processing for totals the store has already grouped: rolling daily
buckets up into weeks or months, and turning per-product sales into
margins against the catalog price.

Ranking and truncation happen in the store. Equal totals are ordered by
the earliest order in each group, then by id.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Mapping, Union

from bizintel.domain.entities.analytics import (
    AggregationBucket,
    ProductProfitability,
    ProductSalesTotals,
)
from bizintel.domain.entities.operations import Product
from bizintel.domain.entities.prediction import ForecastPeriod
from bizintel.domain.entities.query import ensure_utc

PROFITABILITY_LIMIT = 20


def truncate_to_period(value: Union[date, datetime], period: ForecastPeriod) -> date:
    """Return the first day of the bucket ``value`` falls in (UTC)."""
    day = ensure_utc(value).date() if isinstance(value, datetime) else value
    if period == ForecastPeriod.DAILY:
        return day
    if period == ForecastPeriod.WEEKLY:
        return day - timedelta(days=day.weekday())
    return day.replace(day=1)


def profit_margin(average_selling_price: float, catalog_price: float) -> float:
    """Margin in percent of the selling price; 0 when nothing was sold."""
    if average_selling_price == 0:
        return 0.0
    return (average_selling_price - catalog_price) / average_selling_price * 100


@dataclass
class _Accumulator:
    count: int = 0
    total: float = 0.0


class AggregationEngine:
    """Stateless aggregations over grouped order totals."""

    def sales_trends(
        self, daily: Iterable[AggregationBucket], period: ForecastPeriod
    ) -> List[AggregationBucket]:
        buckets: Dict[date, _Accumulator] = {}
        for day in daily:
            acc = buckets.setdefault(truncate_to_period(day.period, period), _Accumulator())
            acc.count += day.order_count
            acc.total += day.total_revenue

        return [
            AggregationBucket(
                period=key,
                order_count=acc.count,
                total_revenue=acc.total,
                avg_order_value=acc.total / acc.count if acc.count else 0.0,
            )
            for key, acc in sorted(buckets.items(), key=lambda item: item[0])
        ]

    def product_profitability(
        self,
        totals: Iterable[ProductSalesTotals],
        products: Mapping[str, Product],
    ) -> List[ProductProfitability]:
        rows: List[ProductProfitability] = []
        for row in totals:
            product = products.get(row.product_id)
            average_price = (
                row.total_revenue / row.total_quantity if row.total_quantity > 0 else 0.0
            )
            margin = profit_margin(average_price, product.price) if product else 0.0
            rows.append(
                ProductProfitability(
                    product_id=row.product_id,
                    total_revenue=row.total_revenue,
                    total_quantity=row.total_quantity,
                    order_count=row.line_count,
                    average_price=average_price,
                    profit_margin=margin,
                    product=product,
                )
            )
        return rows
