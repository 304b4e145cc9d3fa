"""
Tenant and customer resolution shared by the loyalty views.
"""
from rest_framework import status
from rest_framework.response import Response

from apps.customers.models import Customer
from apps.tenants.models import Tenant


def invalid_input(serializer):
    return Response({
        'success': False,
        'message': 'Invalid input',
        'errors': serializer.errors
    }, status=status.HTTP_400_BAD_REQUEST)


def error_response(code, message, status_code):
    return Response({
        'success': False,
        'error': code,
        'message': message
    }, status=status_code)


def tenant_not_found():
    return error_response('tenant_not_found', 'Restaurant not found', status.HTTP_404_NOT_FOUND)


def customer_not_found():
    return error_response('customer_not_found', 'Customer not found', status.HTTP_404_NOT_FOUND)


def resolve_tenant(slug):
    return Tenant.get_active_by_slug(slug)


def resolve_customer_id(tenant, validated_data):
    """Customer id for the lookup, or None when no such customer exists in the tenant"""
    customer_id = validated_data.get('customer_id')
    if customer_id:
        return customer_id
    customer = Customer.find_for_tenant(tenant.id, phone=validated_data.get('phone'))
    return customer.id if customer else None
