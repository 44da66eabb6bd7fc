"""Use case updating the name and type of a business."""

from src.application.context import BusinessContext
from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.results import OperationResult
from src.domain.errors import LedgerError, NotFoundError
from src.domain.models.ledger import Business
from src.domain.services.validation import parse_business_type, require_name
from src.infrastructure.logging.logger import get_app_logger


class UpdateBusinessSettingsUseCase:
    """Edit the profile of the scoped business; balances are untouched."""

    def __init__(
        self,
        context: BusinessContext,
        business_repository: BusinessRepositoryPort,
        logger=None,
    ) -> None:
        self._context = context
        self._business_repository = business_repository
        self._logger = logger or get_app_logger()

    def execute(self, name: str, business_type) -> OperationResult[Business]:
        try:
            clean_name = require_name(name)
            resolved_type = parse_business_type(business_type)
            business = self._business_repository.update_profile(
                self._context.business_id,
                clean_name,
                resolved_type,
            )
            if business is None:
                raise NotFoundError("business", self._context.business_id)
        except LedgerError as exc:
            self._logger.error(
                f"Failed to update settings for business="
                f"{self._context.business_id}: {exc}"
            )
            return OperationResult.fail(exc)
        return OperationResult.ok(business)


__all__ = ["UpdateBusinessSettingsUseCase"]
