"""Services for transactions business logic."""

from .exceptions import (
    TransactionNotFoundError,
    VehicleNotFoundError,
    InvalidTransactionStateError,
    VehicleNotAvailableError,
    SelfPurchaseError,
    OpenTransactionExistsError,
    NotTransactionParticipantError,
    InsufficientPermissionsError,
    TransactionNumberExhaustedError,
)
from .numbering import generate_transaction_number, allocate_transaction_number
from .lifecycle import (
    create_transaction,
    process_transaction,
    complete_transaction,
    cancel_transaction,
)
from .queries import (
    list_user_transactions,
    list_transactions,
    list_pending_transactions,
    get_transaction,
    get_transaction_by_number,
    get_user_transaction_stats,
)

__all__ = [
    # Exceptions
    'TransactionNotFoundError',
    'VehicleNotFoundError',
    'InvalidTransactionStateError',
    'VehicleNotAvailableError',
    'SelfPurchaseError',
    'OpenTransactionExistsError',
    'NotTransactionParticipantError',
    'InsufficientPermissionsError',
    'TransactionNumberExhaustedError',
    # Numbering
    'generate_transaction_number',
    'allocate_transaction_number',
    # Lifecycle
    'create_transaction',
    'process_transaction',
    'complete_transaction',
    'cancel_transaction',
    # Queries
    'list_user_transactions',
    'list_transactions',
    'list_pending_transactions',
    'get_transaction',
    'get_transaction_by_number',
    'get_user_transaction_stats',
]
