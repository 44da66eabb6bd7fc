"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.errors import ValidationError
from src.domain.services.periods import RangePreset, parse_range_preset
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the bookkeeping dashboard.

    Attributes:
        owner_id: Identity whose business is shown, supplied by the
            session provider.
        dashboard_days: Number of days in the dashboard series.
        default_range: Report range preselected on the reports page.
        currency_symbol: Symbol used when formatting amounts.
    """

    owner_id: str | None = None
    dashboard_days: int = 7
    default_range: RangePreset = RangePreset.THIS_MONTH
    currency_symbol: str = "$"

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        owner_id = (os.getenv("LEDGER_OWNER_ID") or "").strip() or None
        return cls(
            owner_id=owner_id,
            dashboard_days=cls._parse_days(
                os.getenv("LEDGER_DASHBOARD_DAYS"),
                logger=logger,
            ),
            default_range=cls._parse_range(
                os.getenv("LEDGER_DEFAULT_RANGE"),
                logger=logger,
            ),
            currency_symbol=os.getenv("LEDGER_CURRENCY_SYMBOL", "$").strip()
            or "$",
        )

    @staticmethod
    def _parse_days(raw_value: str | None, logger) -> int:
        """Parse the dashboard day count, falling back to 7.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Positive day count.
        """
        if not raw_value:
            return 7
        try:
            days = int(raw_value)
        except ValueError:
            days = 0
        if days < 1:
            logger.warning(
                f"Invalid LEDGER_DASHBOARD_DAYS '{raw_value}'; using 7"
            )
            return 7
        return days

    @staticmethod
    def _parse_range(raw_value: str | None, logger) -> RangePreset:
        if not raw_value:
            return RangePreset.THIS_MONTH
        try:
            preset = parse_range_preset(raw_value)
        except ValidationError:
            preset = RangePreset.CUSTOM
        if preset is RangePreset.CUSTOM:
            logger.warning(
                f"Unsupported LEDGER_DEFAULT_RANGE '{raw_value}'; using month"
            )
            return RangePreset.THIS_MONTH
        return preset


__all__ = ["LedgerSettings"]
