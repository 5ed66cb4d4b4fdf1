import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from warehouse.core.api_client import get_api_client
from warehouse.core.errors import result_response
from warehouse.core.permissions import capability_required
from warehouse.core.utils import is_confirmed, json_ready
from . import api
from .serializers import (
    EmployeeSerializer, LeaveSerializer, OvertimeSerializer, OvertimeReportSerializer, ApprovalSerializer,
)

logger = logging.getLogger(__name__)

ManageEmployees = capability_required('employee.manage')
ApproveUsers = capability_required('user.approve')


def _confirm_delete(request, what):
    if is_confirmed(request):
        return None
    return Response({'success': False, 'confirm_required': True, 'msg': f'Are you sure you want to delete this {what}?'})


def _create(request, serializer_class, create):
    serializer = serializer_class(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return result_response(create(get_api_client(request), json_ready(serializer.validated_data)), status.HTTP_201_CREATED)


# Employee views
@api_view(['GET', 'POST'])
@permission_classes([ManageEmployees])
def employee_list_create(request):
    """List employees or add a new one"""
    if request.method == 'GET':
        return result_response(api.get_employees(get_api_client(request)))
    return _create(request, EmployeeSerializer, api.add_employee)


@api_view(['DELETE'])
@permission_classes([ManageEmployees])
def employee_delete(request, pk):
    """Delete an employee after confirmation"""
    pending = _confirm_delete(request, 'employee')
    if pending is not None:
        return pending
    result = api.delete_employee(get_api_client(request), pk)
    if result.get('success'):
        logger.info(f'Employee {pk} deleted by {request.user}')
    return result_response(result)


@api_view(['GET'])
@permission_classes([ManageEmployees])
def employee_overtime_pdf(request, pk):
    """Overtime report of one employee as a PDF attachment"""
    serializer = OvertimeReportSerializer(data=request.query_params)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    dates = json_ready(serializer.validated_data)
    result = api.download_overtime_pdf(
        get_api_client(request), pk,
        start_date=dates.get('start_date'),
        end_date=dates.get('end_date'),
    )
    if not result.get('success'):
        return result_response(result)
    response = HttpResponse(result['content'], content_type=result['content_type'])
    response['Content-Disposition'] = f'attachment; filename="overtime_{pk}.pdf"'
    return response


# Leave views
@api_view(['GET', 'POST'])
@permission_classes([ManageEmployees])
def leave_list_create(request):
    if request.method == 'GET':
        return result_response(api.get_leaves(get_api_client(request)))
    return _create(request, LeaveSerializer, api.add_leave)


@api_view(['DELETE'])
@permission_classes([ManageEmployees])
def leave_delete(request, pk):
    pending = _confirm_delete(request, 'leave record')
    if pending is not None:
        return pending
    return result_response(api.delete_leave(get_api_client(request), pk))


# Overtime views
@api_view(['GET', 'POST'])
@permission_classes([ManageEmployees])
def overtime_list_create(request):
    if request.method == 'GET':
        return result_response(api.get_overtimes(get_api_client(request)))
    return _create(request, OvertimeSerializer, api.add_overtime)


@api_view(['DELETE'])
@permission_classes([ManageEmployees])
def overtime_delete(request, pk):
    pending = _confirm_delete(request, 'overtime record')
    if pending is not None:
        return pending
    return result_response(api.delete_overtime(get_api_client(request), pk))


# Pending user views
@api_view(['GET'])
@permission_classes([ManageEmployees])
def pending_user_list(request):
    """Registered accounts waiting for approval"""
    return result_response(api.get_pending_users(get_api_client(request)))


@api_view(['POST'])
@permission_classes([ApproveUsers])
def pending_user_approve(request, pk):
    """Approve (activate) or reject (deactivate) a pending account"""
    serializer = ApprovalSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    approved = serializer.validated_data['approved']
    result = api.approve_user(get_api_client(request), pk, approved)
    if result.get('success'):
        logger.info(f"User {pk} {'approved' if approved else 'rejected'} by {request.user}")
    return result_response(result)
