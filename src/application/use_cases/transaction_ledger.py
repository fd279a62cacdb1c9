"""Use cases posting, amending and removing transactions.

These use cases are the only writers of ``Account.balance``. Each one runs
in a single unit of work that locks the affected account rows, mutates the
transaction row and applies the signed balance adjustments together:

* create applies ``posting_delta`` to the owning account;
* update reverses the old posting on the old account, then reapplies the
  new posting on the (possibly different) new account;
* delete removes the row and reverses the posting.

Account rows are always locked before the transaction row they own, in
ascending id order, so ledger use cases and account deletion acquire locks
in the same parent-then-child order.
"""

from collections.abc import Iterable

from src.application.ports.ledger_repository import (
    LedgerSessionPort,
    LedgerUnitOfWorkPort,
)
from src.application.use_cases.unit_of_work_support import (
    log_storage_failure,
    utc_now,
)
from src.domain.errors import LedgerError, ValidationPreconditionError
from src.domain.models import (
    Account,
    CreateTransactionInput,
    Transaction,
    UpdateTransactionInput,
)
from src.domain.policies.posting_rules import posting_delta, reversal_delta
from src.domain.services.normalization import normalize_text
from src.infrastructure.logging.logger import get_app_logger


MAX_LOCK_ATTEMPTS = 3


def lock_accounts(
    session: LedgerSessionPort,
    account_ids: Iterable[int],
) -> dict[int, Account | None]:
    """Lock account rows in ascending id order.

    Args:
        session: Open ledger session.
        account_ids: Accounts about to receive balance adjustments.

    Returns:
        dict[int, Account | None]: Locked accounts keyed by id, None when
        the id does not resolve.
    """
    return {
        account_id: session.get_account(account_id, lock=True)
        for account_id in sorted(set(account_ids))
    }


def lock_transaction(
    session: LedgerSessionPort,
    transaction_id: int,
    extra_account_ids: Iterable[int] = (),
) -> tuple[Transaction | None, dict[int, Account | None]]:
    """Lock a transaction after the accounts it touches.

    The owning account is learned from an unlocked read, locked together
    with ``extra_account_ids``, and the transaction is then re-read under
    lock. If the owner changed in between, the sequence is retried.

    Args:
        session: Open ledger session.
        transaction_id: Transaction about to be changed.
        extra_account_ids: Further accounts the change will touch.

    Returns:
        tuple: The locked transaction (None when absent) and the locked
        accounts keyed by id.

    Raises:
        LedgerError: If the owning account kept changing while locking.
    """
    for _ in range(MAX_LOCK_ATTEMPTS):
        observed = session.get_transaction(transaction_id)
        if observed is None:
            return None, {}
        locked = lock_accounts(
            session,
            (observed.account_id, *extra_account_ids),
        )
        current = session.get_transaction(transaction_id, lock=True)
        if current is None or current.account_id == observed.account_id:
            return current, locked
    raise LedgerError(
        f"Transaction {transaction_id} changed account while being locked"
    )


class CreateTransactionUseCase:
    """Post a new transaction and apply its effect on the account balance."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreateTransactionInput) -> Transaction:
        """Create the transaction.

        Args:
            data: Validated transaction input.

        Returns:
            Transaction: The stored transaction.

        Raises:
            ValidationPreconditionError: If the account does not exist.
        """
        with log_storage_failure(self._logger, "Transaction creation"):
            with self._unit_of_work.begin() as session:
                account = session.get_account(data.account_id, lock=True)
                if account is None:
                    raise ValidationPreconditionError(
                        f"Account with ID {data.account_id} not found"
                    )
                now = utc_now()
                delta = posting_delta(
                    account.category,
                    data.direction,
                    data.amount,
                )
                transaction = session.insert_transaction(
                    {
                        "account_id": account.id,
                        "direction": data.direction,
                        "amount": data.amount,
                        "description": normalize_text(data.description),
                        "transaction_date": data.transaction_date,
                        "reference_number": normalize_text(
                            data.reference_number
                        ),
                        "created_at": now,
                        "updated_at": now,
                    }
                )
                session.adjust_account_balance(account.id, delta, now)

        self._logger.info(
            f"Posted transaction {transaction.id} on account {account.id}: "
            f"{transaction.direction.value} {transaction.amount} "
            f"(balance delta {delta})"
        )
        return transaction


class UpdateTransactionUseCase:
    """Amend a transaction with the reversal-then-reapply protocol."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdateTransactionInput) -> Transaction | None:
        """Apply the provided changes to a transaction.

        When the amount, direction or owning account changes, the old
        posting is reversed on the old account and the new posting applied
        on the new account. Other fields are written without touching any
        balance. The row is only rewritten while its stored posting still
        matches the one being reversed.

        Args:
            data: Partial update; None fields are left unchanged.

        Returns:
            Transaction | None: Updated transaction, or None when the
            transaction does not exist.

        Raises:
            ValidationPreconditionError: If the target account does not exist.
        """
        changes = data.provided_fields()
        for key in ("description", "reference_number"):
            if key in changes:
                changes[key] = normalize_text(changes[key])
        target_ids = (changes["account_id"],) if "account_id" in changes else ()

        with log_storage_failure(self._logger, "Transaction update"):
            with self._unit_of_work.begin() as session:
                current, locked = lock_transaction(
                    session, data.id, extra_account_ids=target_ids
                )
                if current is None:
                    return None

                new_account_id = changes.get("account_id", current.account_id)
                new_direction = changes.get("direction", current.direction)
                new_amount = changes.get("amount", current.amount)
                rebalance = (
                    new_account_id != current.account_id
                    or new_direction != current.direction
                    or new_amount != current.amount
                )
                old_account = locked[current.account_id]
                new_account = locked[new_account_id]
                if new_account is None:
                    raise ValidationPreconditionError(
                        f"Account with ID {new_account_id} not found"
                    )
                if old_account is None:
                    raise LedgerError(
                        f"Transaction {current.id} references missing account "
                        f"{current.account_id}"
                    )

                now = utc_now()
                changes["updated_at"] = now
                updated = session.update_transaction(
                    current.id, changes, expected=current
                )
                if updated is None:
                    return None
                if rebalance:
                    session.adjust_account_balance(
                        old_account.id,
                        reversal_delta(
                            old_account.category,
                            current.direction,
                            current.amount,
                        ),
                        now,
                    )
                    session.adjust_account_balance(
                        new_account.id,
                        posting_delta(
                            new_account.category,
                            new_direction,
                            new_amount,
                        ),
                        now,
                    )

        if rebalance:
            self._logger.info(
                f"Reposted transaction {updated.id}: account "
                f"{current.account_id}->{updated.account_id}, "
                f"{current.direction.value}->{updated.direction.value}, "
                f"{current.amount}->{updated.amount}"
            )
        else:
            self._logger.info(f"Updated details of transaction {updated.id}")
        return updated


class DeleteTransactionUseCase:
    """Remove a transaction and reverse its effect on the account balance."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, transaction_id: int) -> bool:
        """Delete the transaction.

        The reversal is applied only when this call removed the row, so a
        transaction deleted twice is reversed once.

        Args:
            transaction_id: Identifier of the transaction to remove.

        Returns:
            bool: True when removed, False when it did not exist.
        """
        with log_storage_failure(self._logger, "Transaction deletion"):
            with self._unit_of_work.begin() as session:
                transaction, locked = lock_transaction(session, transaction_id)
                if transaction is None:
                    return False
                account = locked[transaction.account_id]
                if account is None:
                    raise LedgerError(
                        f"Transaction {transaction.id} references missing "
                        f"account {transaction.account_id}"
                    )
                if session.delete_transaction(transaction.id) != 1:
                    return False
                delta = reversal_delta(
                    account.category,
                    transaction.direction,
                    transaction.amount,
                )
                session.adjust_account_balance(account.id, delta, utc_now())

        self._logger.info(
            f"Deleted transaction {transaction_id} from account "
            f"{account.id} (balance delta {delta})"
        )
        return True


__all__ = [
    "lock_accounts",
    "lock_transaction",
    "CreateTransactionUseCase",
    "UpdateTransactionUseCase",
    "DeleteTransactionUseCase",
]
