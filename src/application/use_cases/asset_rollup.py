"""Use cases maintaining portfolio valuations as assets change.

These use cases are the only writers of ``Portfolio.total_value``. Every
path recomputes the total from the assets currently assigned to the
portfolio, inside the same unit of work as the asset mutation and after
locking the affected portfolio rows. Portfolio rows are always locked
before the asset rows they own, matching portfolio deletion. Recomputation
is self-correcting, so a total that drifted for any reason is repaired by
the next asset change.
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
    Asset,
    CreateAssetInput,
    Portfolio,
    UpdateAssetInput,
)
from src.domain.services.normalization import normalize_symbol
from src.infrastructure.logging.logger import get_app_logger


MAX_LOCK_ATTEMPTS = 3


def lock_portfolios(
    session: LedgerSessionPort,
    portfolio_ids: Iterable[int],
) -> dict[int, Portfolio | None]:
    """Lock portfolio rows in ascending id order."""
    return {
        portfolio_id: session.get_portfolio(portfolio_id, lock=True)
        for portfolio_id in sorted(set(portfolio_ids))
    }


def lock_asset(
    session: LedgerSessionPort,
    asset_id: int,
    extra_portfolio_ids: Iterable[int] = (),
) -> tuple[Asset | None, dict[int, Portfolio | None]]:
    """Lock an asset after the portfolios it touches.

    The owning portfolio is learned from an unlocked read and locked with
    ``extra_portfolio_ids`` before the asset is re-read under lock; the
    sequence is retried if the asset moved in between.

    Raises:
        LedgerError: If the asset kept moving while locking.
    """
    for _ in range(MAX_LOCK_ATTEMPTS):
        observed = session.get_asset(asset_id)
        if observed is None:
            return None, {}
        locked = lock_portfolios(
            session,
            (observed.portfolio_id, *extra_portfolio_ids),
        )
        current = session.get_asset(asset_id, lock=True)
        if current is None or current.portfolio_id == observed.portfolio_id:
            return current, locked
    raise LedgerError(f"Asset {asset_id} changed portfolio while being locked")


class CreateAssetUseCase:
    """Add an asset to a portfolio and refresh the portfolio total."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreateAssetInput) -> Asset:
        """Create the asset.

        Args:
            data: Validated asset input.

        Returns:
            Asset: The stored asset.

        Raises:
            ValidationPreconditionError: If the portfolio does not exist.
        """
        with log_storage_failure(self._logger, "Asset creation"):
            with self._unit_of_work.begin() as session:
                portfolio = session.get_portfolio(data.portfolio_id, lock=True)
                if portfolio is None:
                    raise ValidationPreconditionError(
                        f"Portfolio with ID {data.portfolio_id} not found"
                    )
                now = utc_now()
                asset = session.insert_asset(
                    {
                        "portfolio_id": portfolio.id,
                        "symbol": normalize_symbol(data.symbol),
                        "name": data.name,
                        "asset_type": data.asset_type,
                        "quantity": data.quantity,
                        "unit_price": data.unit_price,
                        "market_value": data.market_value,
                        "cost_basis": data.cost_basis,
                        "purchase_date": data.purchase_date,
                        "created_at": now,
                        "updated_at": now,
                    }
                )
                total = session.recompute_portfolio_total(portfolio.id, now)

        self._logger.info(
            f"Added asset {asset.id} ({asset.symbol}) to portfolio "
            f"{portfolio.id}; total value {total}"
        )
        return asset


class UpdateAssetUseCase:
    """Amend an asset, refreshing every portfolio whose total it affects."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdateAssetInput) -> Asset | None:
        """Apply the provided changes to an asset.

        The old portfolio is recomputed when the asset moves away; the new
        portfolio is recomputed whenever the market value or the portfolio
        changed.

        Args:
            data: Partial update; None fields are left unchanged.

        Returns:
            Asset | None: Updated asset, or None when it does not exist.

        Raises:
            ValidationPreconditionError: If the target portfolio does not exist.
        """
        changes = data.provided_fields()
        if "symbol" in changes:
            changes["symbol"] = normalize_symbol(changes["symbol"])
        target_ids = (
            (changes["portfolio_id"],) if "portfolio_id" in changes else ()
        )

        with log_storage_failure(self._logger, "Asset update"):
            with self._unit_of_work.begin() as session:
                current, locked = lock_asset(
                    session, data.id, extra_portfolio_ids=target_ids
                )
                if current is None:
                    return None

                new_portfolio_id = changes.get(
                    "portfolio_id", current.portfolio_id
                )
                if locked[new_portfolio_id] is None:
                    raise ValidationPreconditionError(
                        f"Portfolio with ID {new_portfolio_id} not found"
                    )
                moved = new_portfolio_id != current.portfolio_id
                revalued = (
                    changes.get("market_value", current.market_value)
                    != current.market_value
                )
                affected = []
                if moved:
                    affected.append(current.portfolio_id)
                if moved or revalued:
                    affected.append(new_portfolio_id)

                now = utc_now()
                changes["updated_at"] = now
                updated = session.update_asset(current.id, changes)
                totals = {
                    portfolio_id: session.recompute_portfolio_total(
                        portfolio_id, now
                    )
                    for portfolio_id in sorted(set(affected))
                    if locked[portfolio_id] is not None
                }

        if totals:
            self._logger.info(
                f"Updated asset {updated.id}; recomputed portfolio totals "
                f"{totals}"
            )
        else:
            self._logger.info(f"Updated details of asset {updated.id}")
        return updated


class DeleteAssetUseCase:
    """Remove an asset and refresh its former portfolio's total."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, asset_id: int) -> bool:
        """Delete the asset.

        Args:
            asset_id: Identifier of the asset to remove.

        Returns:
            bool: True when removed, False when it did not exist.
        """
        with log_storage_failure(self._logger, "Asset deletion"):
            with self._unit_of_work.begin() as session:
                asset, _locked = lock_asset(session, asset_id)
                if asset is None:
                    return False
                if session.delete_asset(asset.id) != 1:
                    return False
                total = session.recompute_portfolio_total(
                    asset.portfolio_id, utc_now()
                )

        self._logger.info(
            f"Deleted asset {asset_id} from portfolio {asset.portfolio_id}; "
            f"total value {total}"
        )
        return True


__all__ = [
    "lock_portfolios",
    "lock_asset",
    "CreateAssetUseCase",
    "UpdateAssetUseCase",
    "DeleteAssetUseCase",
]
