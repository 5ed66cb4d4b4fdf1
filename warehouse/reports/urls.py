from django.urls import path
from .views import (
    dashboard, sales_chart, inventory_chart_view, statistics,
    material_price_chart, material_real_time_prices,
)

urlpatterns = [
    # Dashboard endpoints
    path('', dashboard, name='dashboard'),
    path('reports/sales/', sales_chart, name='sales-chart'),
    path('reports/inventory/', inventory_chart_view, name='inventory-chart'),
    path('reports/stats/<str:kind>/', statistics, name='statistics'),
    path('reports/material-prices/', material_price_chart, name='material-price-chart'),
    path('reports/material-prices/real-time/', material_real_time_prices, name='material-real-time-prices'),
]
