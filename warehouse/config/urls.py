"""
URL configuration for the warehouse portal.

Every page is served at the site root; access is decided by
warehouse.core.middleware.NavigationGuardMiddleware before a view runs.
"""
from django.urls import path, include

urlpatterns = [
    path('', include('warehouse.core.urls')),
    path('', include('warehouse.orders.urls')),
    path('', include('warehouse.inventory.urls')),
    path('', include('warehouse.parties.urls')),
    path('', include('warehouse.staff.urls')),
    path('', include('warehouse.reports.urls')),
]
