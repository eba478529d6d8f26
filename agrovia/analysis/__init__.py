"""Dashboard and report analytics over tracked batches and bills."""

from .dashboard import (
    BATCH_COLUMNS,
    batches_to_frame,
    DashboardAnalytics,
    get_analytics,
    ExpiryAlert,
    expiry_alerts,
    filter_warehouse_batches,
)
from .reports import (
    filter_batches_by_harvest_date,
    filter_bills_by_date,
    WasteMetrics,
    waste_metrics,
    farmer_performance,
    revenue_by_product,
    revenue_by_grade,
    daily_trend,
)

__all__ = [
    'BATCH_COLUMNS',
    'batches_to_frame',
    'DashboardAnalytics',
    'get_analytics',
    'ExpiryAlert',
    'expiry_alerts',
    'filter_warehouse_batches',
    'filter_batches_by_harvest_date',
    'filter_bills_by_date',
    'WasteMetrics',
    'waste_metrics',
    'farmer_performance',
    'revenue_by_product',
    'revenue_by_grade',
    'daily_trend',
]
