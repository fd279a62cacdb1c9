"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    CREDIT_NORMAL_CATEGORIES,
    DEBIT_NORMAL_CATEGORIES,
    AccountCategory,
)


def validate_balance_sign(
    account_id: int,
    category: AccountCategory,
    balance: Decimal,
    logger: Logger,
) -> bool:
    """Warn when a balance sits on the unusual side of its normal balance.

    Args:
        account_id: Identifier of the checked account.
        category: Account category.
        balance: Stored running balance.
        logger: Logger used for warnings.

    Returns:
        bool: True when the sign matches the category's normal balance.
    """
    if category in DEBIT_NORMAL_CATEGORIES and balance < 0:
        logger.warning(
            f"Balance is negative for {category.value} account "
            f"{account_id}: {balance}"
        )
        return False
    if category in CREDIT_NORMAL_CATEGORIES and balance > 0:
        logger.warning(
            f"Balance is positive for {category.value} account "
            f"{account_id}: {balance}"
        )
        return False
    return True


__all__ = ["validate_balance_sign"]
