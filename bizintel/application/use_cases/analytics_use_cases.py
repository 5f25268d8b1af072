"""
Analytics Use Cases - Application Layer

Reporting over transactional records. Grouping, ranking and truncation
run in the store; the aggregation engine only rolls daily totals into
periods and applies catalog prices.
"""

from typing import Dict, List, Optional

import structlog

from bizintel.domain.entities.analytics import ClientRanking
from bizintel.domain.entities.client import Client, ClientStatus
from bizintel.domain.entities.query import OrderQuery
from bizintel.domain.repositories.client_repository import IClientRepository
from bizintel.domain.repositories.order_repository import IOrderRepository
from bizintel.domain.repositories.product_repository import IProductRepository
from bizintel.domain.services.aggregation_engine import (
    PROFITABILITY_LIMIT,
    AggregationEngine,
)

from ..dtos.analytics_dto import (
    AnalyticsQuery,
    ClientRevenueDTO,
    DashboardKPIsDTO,
    DashboardResponseDTO,
    OrderSummaryDTO,
    ProductProfitabilityDTO,
    ProfitabilityResponseDTO,
    SalesTrendBucketDTO,
    SalesTrendsResponseDTO,
    TopClientsResponseDTO,
)

logger = structlog.get_logger(__name__)

DASHBOARD_TOP_CLIENTS = 5
DASHBOARD_RECENT_ORDERS = 5


async def _attach_clients(
    client_repository: IClientRepository, rankings: List[ClientRanking]
) -> List[ClientRanking]:
    if not rankings:
        return rankings
    clients = await client_repository.get_by_ids([row.client_id for row in rankings])
    lookup: Dict[str, Client] = {client.id: client for client in clients}
    for row in rankings:
        row.client = lookup.get(row.client_id)
    return rankings


class GetSalesTrendsUseCase:
    """Order totals bucketed by day, ISO week or month."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        engine: Optional[AggregationEngine] = None,
    ):
        self.order_repository = order_repository
        self.engine = engine or AggregationEngine()

    async def execute(self, query: AnalyticsQuery) -> SalesTrendsResponseDTO:
        daily = await self.order_repository.daily_sales(query.date_range())
        buckets = self.engine.sales_trends(daily, query.period)
        logger.debug("analytics.sales_trends", days=len(daily), buckets=len(buckets))
        return SalesTrendsResponseDTO(
            period=query.period,
            trends=[SalesTrendBucketDTO.from_domain(bucket) for bucket in buckets],
        )


class GetProfitabilityUseCase:
    """Product margins and client revenue over the requested range."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        client_repository: IClientRepository,
        engine: Optional[AggregationEngine] = None,
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.client_repository = client_repository
        self.engine = engine or AggregationEngine()

    async def execute(self, query: AnalyticsQuery) -> ProfitabilityResponseDTO:
        date_range = query.date_range()
        totals = await self.order_repository.sales_by_product(
            date_range, PROFITABILITY_LIMIT
        )
        products = await self.product_repository.get_by_ids(
            [row.product_id for row in totals]
        )
        product_rows = self.engine.product_profitability(
            totals, {product.id: product for product in products}
        )

        client_rows = await _attach_clients(
            self.client_repository,
            await self.order_repository.revenue_by_client(date_range, PROFITABILITY_LIMIT),
        )

        return ProfitabilityResponseDTO(
            product_profitability=[
                ProductProfitabilityDTO.from_domain(row) for row in product_rows
            ],
            client_profitability=[
                ClientRevenueDTO.from_domain(row) for row in client_rows
            ],
        )


class GetTopClientsUseCase:
    """Clients ranked by revenue, truncated to the requested limit."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        client_repository: IClientRepository,
    ):
        self.order_repository = order_repository
        self.client_repository = client_repository

    async def execute(self, query: AnalyticsQuery) -> TopClientsResponseDTO:
        rankings = await _attach_clients(
            self.client_repository,
            await self.order_repository.revenue_by_client(
                query.date_range(), query.limit
            ),
        )
        return TopClientsResponseDTO(
            top_clients=[ClientRevenueDTO.from_domain(row) for row in rankings]
        )


class GetDashboardUseCase:
    """Headline KPIs, status distribution, best clients and latest orders."""

    def __init__(
        self,
        client_repository: IClientRepository,
        product_repository: IProductRepository,
        order_repository: IOrderRepository,
    ):
        self.client_repository = client_repository
        self.product_repository = product_repository
        self.order_repository = order_repository

    async def execute(self, query: AnalyticsQuery) -> DashboardResponseDTO:
        date_range = query.date_range()
        total_clients = await self.client_repository.count_by_status(
            ClientStatus.ACTIVE
        )
        total_products = await self.product_repository.count_active()
        by_status = await self.order_repository.status_totals(date_range)
        recent_orders = await self.order_repository.find(
            OrderQuery(), newest_first=True, limit=DASHBOARD_RECENT_ORDERS
        )
        top_clients = await _attach_clients(
            self.client_repository,
            await self.order_repository.revenue_by_client(
                date_range, DASHBOARD_TOP_CLIENTS
            ),
        )

        return DashboardResponseDTO(
            kpis=DashboardKPIsDTO(
                total_clients=total_clients,
                total_products=total_products,
                total_orders=sum(row.order_count for row in by_status),
                total_revenue=sum(row.total_revenue for row in by_status),
            ),
            orders_by_status={row.key: row.order_count for row in by_status},
            top_clients=[ClientRevenueDTO.from_domain(row) for row in top_clients],
            recent_orders=[OrderSummaryDTO.from_domain(o) for o in recent_orders],
        )
