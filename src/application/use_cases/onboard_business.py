"""Use case creating the business of a new owner."""

from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.results import OperationResult
from src.domain.errors import AuthorizationError, LedgerError, ValidationError
from src.domain.models.ledger import Business
from src.domain.services.validation import parse_business_type, require_name
from src.infrastructure.logging.logger import get_app_logger


class OnboardBusinessUseCase:
    """Create a business with zero balances for an owner identity."""

    def __init__(
        self,
        business_repository: BusinessRepositoryPort,
        logger=None,
    ) -> None:
        self._business_repository = business_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        owner_id: str | None,
        name: str,
        business_type,
    ) -> OperationResult[Business]:
        """Create the owner's business.

        Args:
            owner_id: Identity supplied by the session provider.
            name: Display name of the business.
            business_type: HOTEL or RESTAURANT.

        Returns:
            OperationResult[Business]: Created business or the failure. An
            owner that already has a business gets a ValidationError.
        """
        try:
            if not owner_id:
                raise AuthorizationError("User not authenticated")
            clean_name = require_name(name)
            resolved_type = parse_business_type(business_type)
            if self._business_repository.fetch_by_owner(owner_id) is not None:
                raise ValidationError(
                    "owner_id", "a business already exists for this owner"
                )
            business = self._business_repository.insert_business(
                owner_id,
                clean_name,
                resolved_type,
            )
        except LedgerError as exc:
            self._logger.error(f"Onboarding failed for owner={owner_id}: {exc}")
            return OperationResult.fail(exc)
        self._logger.info(
            f"Business {business.id} created for owner={owner_id}"
        )
        return OperationResult.ok(business)


__all__ = ["OnboardBusinessUseCase"]
