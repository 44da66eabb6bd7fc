"""Use case resolving the business owned by the current identity."""

from src.application.context import BusinessContext
from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.results import OperationResult
from src.domain.errors import AuthorizationError, LedgerError
from src.domain.models.ledger import Business
from src.infrastructure.logging.logger import get_app_logger


class GetBusinessUseCase:
    """Look up the business of an owner identity."""

    def __init__(
        self,
        business_repository: BusinessRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            business_repository: Port providing business rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._business_repository = business_repository
        self._logger = logger or get_app_logger()

    def execute(self, owner_id: str | None) -> OperationResult[Business | None]:
        """Return the owner's business; the value is None before onboarding."""
        if not owner_id:
            return OperationResult.ok(None)
        try:
            return OperationResult.ok(
                self._business_repository.fetch_by_owner(owner_id)
            )
        except LedgerError as exc:
            self._logger.error(
                f"Failed to load business of owner={owner_id}: {exc}"
            )
            return OperationResult.fail(exc)

    def resolve_context(
        self,
        owner_id: str | None,
    ) -> OperationResult[BusinessContext]:
        """Return the business context of an owner.

        Fails with ``AuthorizationError`` when the owner has no business yet.
        """
        result = self.execute(owner_id)
        if result.failed:
            return OperationResult.fail(result.error)
        business = result.value
        if business is None:
            self._logger.warning(f"No business resolved for owner={owner_id}")
            return OperationResult.fail(
                AuthorizationError(
                    "No business is set up for the current identity"
                )
            )
        return OperationResult.ok(
            BusinessContext(business_id=business.id, owner_id=business.owner_id)
        )


__all__ = ["GetBusinessUseCase"]
