from typing import Optional

from ltp_engine.logger import get_logger

logger = get_logger(__name__)

MAX_IDENTIFIER_LENGTH = 20


class DBValidator:
    @staticmethod
    def validate_symbol(symbol: str) -> Optional[str]:
        if not isinstance(symbol, str) or not symbol.strip():
            logger.error("DB_VALIDATION: symbol must be a non-empty string")
            return None

        normalized = symbol.strip().upper()

        if len(normalized) > MAX_IDENTIFIER_LENGTH:
            logger.error(f"DB_VALIDATION: symbol must be {MAX_IDENTIFIER_LENGTH} characters or fewer")
            return None

        # Share classes such as BRK.B are allowed
        if not normalized.replace(".", "").isalnum():
            logger.error(f"DB_VALIDATION: symbol {symbol!r} must be alphanumeric")
            return None

        return normalized

    @staticmethod
    def validate_timeframe(timeframe: str) -> Optional[str]:
        if not isinstance(timeframe, str) or not timeframe.strip():
            logger.error("DB_VALIDATION: timeframe must be a non-empty string")
            return None

        normalized = timeframe.strip().lower()

        if len(normalized) > MAX_IDENTIFIER_LENGTH:
            logger.error(f"DB_VALIDATION: timeframe must be {MAX_IDENTIFIER_LENGTH} characters or fewer")
            return None

        if not normalized.isalnum():
            logger.error(f"DB_VALIDATION: timeframe {timeframe!r} must be alphanumeric")
            return None

        return normalized

    @staticmethod
    def validate_nullable_float(value: Optional[float], field: str) -> bool:
        if value is None:
            return True
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.error(f"DB_VALIDATION: {field} must be a number or None")
            return False
        return True

    @staticmethod
    def validate_positive_float(value: Optional[float], field: str) -> bool:
        if value is None:
            logger.error(f"DB_VALIDATION: {field} is required")
            return False
        if not DBValidator.validate_nullable_float(value, field):
            return False
        if value <= 0:
            logger.error(f"DB_VALIDATION: {field} must be positive")
            return False
        return True
