"""Transaction number allocation: TXN-YYYYMMDD-XXXXXX."""

import logging
import secrets
import string
from typing import Optional

from django.conf import settings
from django.utils import timezone

from ..models import Transaction
from .exceptions import TransactionNumberExhaustedError

logger = logging.getLogger(__name__)

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 6


def generate_transaction_number(*, now=None) -> str:
    now = now or timezone.now()
    suffix = ''.join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"TXN-{now:%Y%m%d}-{suffix}"


def allocate_transaction_number(*, max_retries: Optional[int] = None) -> str:
    """
    Return a number not used by any transaction yet.

    The unique index on transaction_number still guards the insert.

    Raises:
        TransactionNumberExhaustedError: If every attempt collided
    """
    if max_retries is None:
        max_retries = settings.TRANSACTION_NUMBER_MAX_RETRIES

    for attempt in range(max_retries):
        number = generate_transaction_number()
        if not Transaction.objects.filter(transaction_number=number).exists():
            return number
        logger.warning("Transaction number collision on %s (attempt %d)", number, attempt + 1)

    raise TransactionNumberExhaustedError()
