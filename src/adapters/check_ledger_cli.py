"""CLI adapter running the ledger invariant check.

Exits with status 1 when any account balance or portfolio total differs
from the value derived from its child records.
"""

import sys

from src.application.use_cases.check_ledger_invariants import (
    CheckLedgerInvariantsUseCase,
)
from src.infrastructure.container import build_unit_of_work
from src.infrastructure.logging.logger import get_app_logger


def main() -> int:
    """Run the invariant check and print a summary.

    Returns:
        int: Process exit status.
    """
    logger = get_app_logger()
    use_case = CheckLedgerInvariantsUseCase(build_unit_of_work(), logger=logger)

    report = use_case.execute()

    print(
        f"Checked {report.accounts_checked} accounts and "
        f"{report.portfolios_checked} portfolios."
    )
    for drift in report.account_drifts:
        print(
            f"account {drift.account_id}: stored={drift.stored_balance} "
            f"expected={drift.expected_balance} diff={drift.difference}"
        )
    for drift in report.portfolio_drifts:
        print(
            f"portfolio {drift.portfolio_id}: stored={drift.stored_total} "
            f"expected={drift.expected_total} diff={drift.difference}"
        )
    if report.is_consistent:
        print("Ledger is consistent.")
        return 0
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
