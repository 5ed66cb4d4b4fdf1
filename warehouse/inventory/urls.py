from django.urls import path
from .views import (
    inventory_list_create, inventory_detail, material_list, specification_list,
    inventory_import, inventory_export,
)

urlpatterns = [
    # Inventory endpoints
    path('inventory/', inventory_list_create, name='inventory-list-create'),
    path('inventory/<int:pk>/', inventory_detail, name='inventory-detail'),
    path('inventory/materials/', material_list, name='inventory-materials'),
    path('inventory/specifications/', specification_list, name='inventory-specifications'),

    # Import / export endpoints
    path('inventory/import/', inventory_import, name='inventory-import'),
    path('inventory/export/', inventory_export, name='inventory-export'),
]
