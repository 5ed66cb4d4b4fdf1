from django.urls import path
from .views import (
    employee_list_create, employee_delete, employee_overtime_pdf,
    leave_list_create, leave_delete,
    overtime_list_create, overtime_delete,
    pending_user_list, pending_user_approve,
)

urlpatterns = [
    # Employee endpoints
    path('employees/', employee_list_create, name='employee-list-create'),
    path('employees/<int:pk>/', employee_delete, name='employee-delete'),
    path('employees/<int:pk>/overtime-pdf/', employee_overtime_pdf, name='employee-overtime-pdf'),

    # Attendance endpoints
    path('employees/leaves/', leave_list_create, name='leave-list-create'),
    path('employees/leaves/<int:pk>/', leave_delete, name='leave-delete'),
    path('employees/overtimes/', overtime_list_create, name='overtime-list-create'),
    path('employees/overtimes/<int:pk>/', overtime_delete, name='overtime-delete'),

    # Pending user endpoints
    path('employees/pending/', pending_user_list, name='pending-user-list'),
    path('employees/pending/<int:pk>/approve/', pending_user_approve, name='pending-user-approve'),
]
