"""
Domain exceptions for transactions app.

Raised by the lifecycle and query services and rendered by DRF's
exception handler with the status code of the class.
"""
from rest_framework.exceptions import APIException


class TransactionNotFoundError(APIException):
    """Transaction not found."""
    status_code = 404
    default_detail = 'Transaction not found.'
    default_code = 'transaction_not_found'


class VehicleNotFoundError(APIException):
    """Vehicle named in a purchase offer does not exist."""
    status_code = 404
    default_detail = 'Vehicle not found.'
    default_code = 'vehicle_not_found'


class InvalidTransactionStateError(APIException):
    """Lifecycle operation not allowed from the current status."""
    status_code = 400
    default_detail = 'Invalid state transition for transaction.'
    default_code = 'invalid_transaction_state'


class VehicleNotAvailableError(APIException):
    """Vehicle is not published or not available for sale."""
    status_code = 400
    default_detail = 'Vehicle is not available for purchase.'
    default_code = 'vehicle_not_available'


class SelfPurchaseError(APIException):
    """Seller tried to buy their own vehicle."""
    status_code = 400
    default_detail = 'You cannot buy your own vehicle.'
    default_code = 'self_purchase'


class OpenTransactionExistsError(APIException):
    """Another pending or processing transaction holds the vehicle."""
    status_code = 409
    default_detail = 'An open transaction already exists for this vehicle.'
    default_code = 'open_transaction_exists'


class NotTransactionParticipantError(APIException):
    """User is neither buyer nor seller of the transaction."""
    status_code = 403
    default_detail = 'You are not a participant of this transaction.'
    default_code = 'not_transaction_participant'


class InsufficientPermissionsError(APIException):
    """User doesn't have permission for operation."""
    status_code = 403
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'insufficient_permissions'


class TransactionNumberExhaustedError(APIException):
    """No unused transaction number found within the retry budget."""
    status_code = 503
    default_detail = 'Could not allocate a transaction number, please retry.'
    default_code = 'transaction_number_exhausted'
