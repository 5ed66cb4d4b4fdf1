from django.urls import path
from .views import (
    order_list, order_detail, order_convert, order_pdf,
    order_create, order_create_items, order_create_item,
    order_edit, order_edit_items, order_edit_item,
)

urlpatterns = [
    # Order endpoints
    path('orders/', order_list, name='order-list'),
    path('orders/new/', order_create, name='order-create'),
    path('orders/new/items/', order_create_items, name='order-create-items'),
    path('orders/new/items/<int:index>/', order_create_item, name='order-create-item'),
    path('orders/<int:pk>/', order_detail, name='order-detail'),
    path('orders/<int:pk>/convert/', order_convert, name='order-convert'),
    path('orders/<int:pk>/pdf/', order_pdf, name='order-pdf'),

    # Order edit endpoints (admin / boss)
    path('orders/<int:pk>/edit/', order_edit, name='order-edit'),
    path('orders/<int:pk>/edit/items/', order_edit_items, name='order-edit-items'),
    path('orders/<int:pk>/edit/items/<int:index>/', order_edit_item, name='order-edit-item'),
]
