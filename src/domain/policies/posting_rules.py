"""Posting rule table for the normal-balance convention.

Asset and expense accounts grow with debits; liability, equity and revenue
accounts grow with credits. The table maps every (category, direction)
pair to the arithmetic sign applied to a transaction amount.
"""

from decimal import Decimal

from src.domain.constants import AccountCategory, PostingDirection


POSTING_RULES: dict[tuple[AccountCategory, PostingDirection], int] = {
    (AccountCategory.ASSET, PostingDirection.DEBIT): 1,
    (AccountCategory.ASSET, PostingDirection.CREDIT): -1,
    (AccountCategory.EXPENSE, PostingDirection.DEBIT): 1,
    (AccountCategory.EXPENSE, PostingDirection.CREDIT): -1,
    (AccountCategory.LIABILITY, PostingDirection.DEBIT): -1,
    (AccountCategory.LIABILITY, PostingDirection.CREDIT): 1,
    (AccountCategory.EQUITY, PostingDirection.DEBIT): -1,
    (AccountCategory.EQUITY, PostingDirection.CREDIT): 1,
    (AccountCategory.REVENUE, PostingDirection.DEBIT): -1,
    (AccountCategory.REVENUE, PostingDirection.CREDIT): 1,
}


def posting_effect(
    category: AccountCategory | str,
    direction: PostingDirection | str,
) -> int:
    """Return the signed multiplier for a posting.

    Args:
        category: Account category of the posting's owning account.
        direction: Posting direction of the transaction.

    Returns:
        int: ``1`` or ``-1``.

    Raises:
        ValueError: If the category or direction is not recognized.
    """
    try:
        key = (AccountCategory(category), PostingDirection(direction))
    except ValueError as exc:
        raise ValueError(
            f"No posting rule for category={category!r}, "
            f"direction={direction!r}"
        ) from exc
    return POSTING_RULES[key]


def posting_delta(
    category: AccountCategory | str,
    direction: PostingDirection | str,
    amount: Decimal,
) -> Decimal:
    """Return the signed balance adjustment produced by a posting."""
    return amount * posting_effect(category, direction)


def reversal_delta(
    category: AccountCategory | str,
    direction: PostingDirection | str,
    amount: Decimal,
) -> Decimal:
    """Return the adjustment that undoes a previously applied posting."""
    return -posting_delta(category, direction, amount)


__all__ = [
    "POSTING_RULES",
    "posting_effect",
    "posting_delta",
    "reversal_delta",
]
