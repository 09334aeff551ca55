"""Shared helpers for the service layer."""

from functools import wraps
from typing import Any, Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from recruitflow.utils.exceptions import RecruitFlowError, StoreFailureError, ValidationError
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])
S = TypeVar("S", bound=BaseModel)


def parse_schema(schema_cls: type[S], data: Any, context: str) -> S:
    """
    Validate raw input into a create/update schema.

    Raises:
        ValidationError: With one entry per offending field.
    """
    if isinstance(data, schema_cls):
        return data
    try:
        return schema_cls.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, context) from e


def logs_domain_errors(func: F) -> F:
    """Log domain errors raised by a service operation before they propagate."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except StoreFailureError as e:
            logger.error(f"{func.__qualname__} failed: {e.message}")
            raise
        except RecruitFlowError as e:
            logger.warning(f"{func.__qualname__} rejected: {e.message}")
            raise

    return wrapper  # type: ignore[return-value]
