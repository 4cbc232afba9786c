"""Use case for credit card installment plans.

A plan's unpaid remainder is part of the linked credit account's debt.
Creating, editing, repaying and deleting a plan keep that debt in step and
recompute the owner's totals.
"""

from decimal import Decimal

from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.domain.errors import OwnershipError, ValidationError
from ledger_engine.domain.models import CreditAccount, FeeStrategy, InstallmentPlan
from ledger_engine.infrastructure.logging.logger import get_app_logger


class InstallmentPlanService:
    """Create, edit, repay and delete installment plans."""

    def __init__(
        self,
        repository: LedgerRepositoryPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Optional store receiving created plans.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def create_plan(
        self,
        account: CreditAccount,
        total_amount,
        total_periods: int,
        fee_rate=Decimal("0"),
        fee_strategy: FeeStrategy = FeeStrategy.EVENLY_SPLIT,
        paid_periods: int = 0,
    ) -> InstallmentPlan:
        """Attach a new plan to ``account`` and book its remainder as debt."""
        self._require_credit_account(account)
        plan = InstallmentPlan(
            total_amount,
            total_periods,
            fee_rate=fee_rate,
            fee_strategy=fee_strategy,
            paid_periods=paid_periods,
        )
        account.add_installment_plan(plan)
        self._recompute(account)
        if self._repository is not None:
            self._repository.add(plan)
        self._logger.info(
            f"Created installment plan of {plan.total_amount} over "
            f"{plan.total_periods} periods on '{account.name}'"
        )
        return plan

    def edit_plan(
        self,
        plan: InstallmentPlan,
        total_amount=None,
        total_periods: int | None = None,
        fee_rate=None,
        fee_strategy: FeeStrategy | None = None,
        paid_periods: int | None = None,
        account: CreditAccount | None = None,
    ) -> InstallmentPlan:
        """Change plan terms and optionally move it to another card.

        The old remainder leaves the old account's debt and the new
        remainder joins the target account's debt.
        """
        source = plan.linked_account
        target = account or source
        self._require_credit_account(target)
        if source is not None and target.owner is not source.owner:
            raise OwnershipError("Installment plans cannot move between owners")

        # Validate the new terms before touching either account.
        InstallmentPlan(
            total_amount if total_amount is not None else plan.total_amount,
            total_periods if total_periods is not None else plan.total_periods,
            fee_rate=fee_rate if fee_rate is not None else plan.fee_rate,
            fee_strategy=fee_strategy or plan.fee_strategy,
            paid_periods=paid_periods if paid_periods is not None else plan.paid_periods,
        )

        if source is not None:
            source.remove_installment_plan(plan)
        plan.update_terms(
            total_amount=total_amount,
            total_periods=total_periods,
            fee_rate=fee_rate,
            fee_strategy=fee_strategy,
            paid_periods=paid_periods,
        )
        target.add_installment_plan(plan)
        self._recompute(target)
        self._logger.info(
            f"Edited installment plan id={plan.id}: "
            f"remaining={plan.remaining_amount} on '{target.name}'"
        )
        return plan

    def repay_plan(self, plan: InstallmentPlan) -> Decimal:
        """Pay the next period and return the amount paid."""
        account = self._linked_account(plan)
        paid = account.repay_installment_plan(plan)
        self._recompute(account)
        self._logger.info(
            f"Repaid {paid} on installment plan id={plan.id} "
            f"({plan.paid_periods}/{plan.total_periods})"
        )
        return paid

    def delete_plan(self, plan: InstallmentPlan) -> None:
        """Detach ``plan`` and release its remainder from the debt."""
        account = self._linked_account(plan)
        account.remove_installment_plan(plan)
        self._recompute(account)
        if self._repository is not None:
            self._repository.remove(plan)
        self._logger.info(f"Deleted installment plan id={plan.id}")

    @staticmethod
    def _require_credit_account(account) -> None:
        if not isinstance(account, CreditAccount):
            raise ValidationError("Installment plans need a credit account")

    @staticmethod
    def _linked_account(plan: InstallmentPlan) -> CreditAccount:
        if plan.linked_account is None:
            raise ValidationError("Installment plan is not linked to an account")
        return plan.linked_account

    @staticmethod
    def _recompute(account: CreditAccount) -> None:
        if account.owner is not None:
            account.owner.recompute_totals()


__all__ = ["InstallmentPlanService"]
