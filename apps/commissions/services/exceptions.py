"""
Domain exceptions for commissions app.

Errors surface through DRF's exception handler as ``{"detail": ...}``
with the status code of the exception class.
"""
from rest_framework.exceptions import APIException


class InvalidPriceError(APIException):
    """Price handed to the resolver is negative."""
    status_code = 400
    default_detail = 'Price must be zero or positive.'
    default_code = 'invalid_price'


class CommissionRuleNotFoundError(APIException):
    """Commission rule not found."""
    status_code = 404
    default_detail = 'Commission rule not found.'
    default_code = 'commission_rule_not_found'


class CommissionNotFoundError(APIException):
    """Commission record not found."""
    status_code = 404
    default_detail = 'Commission not found.'
    default_code = 'commission_not_found'


class CommissionAlreadyPaidError(APIException):
    """Commission already marked as paid."""
    status_code = 400
    default_detail = 'Commission is already marked as paid.'
    default_code = 'commission_already_paid'
