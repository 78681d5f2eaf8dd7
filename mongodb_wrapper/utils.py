"""
MongoDB Wrapper Utilities

Small helpers shared by the connection manager and the collection accessor:
- Filter normalization (bare uuid shorthand)
- Update document building from a strategy and a field mapping
- Subfield uuid extraction for duplicate-checked pushes
- Awaiting driver calls that may or may not be coroutines
"""

import inspect
from typing import Any, Dict, Mapping, Tuple, Union

from .exceptions import ValidationError
from .models import UUID_FIELD, Filter, UpdateStrategy


# =============================================================================
# Query Building
# =============================================================================

def normalize_filter(filters: Filter) -> Dict[str, Any]:
    """Turn a filter argument into a MongoDB query document.

    Mappings are copied as they are. Any other value is treated as a uuid, so
    ``normalize_filter("aaa")`` gives ``{"uuid": "aaa"}``. ``None`` is
    rejected; pass ``{}`` to select every document.

    Args:
        filters: Query mapping or bare uuid value

    Returns:
        Query document for the driver

    Raises:
        ValidationError: If filters is None

    Examples:
        >>> normalize_filter({"status": "open"})
        {'status': 'open'}
        >>> normalize_filter("aaa")
        {'uuid': 'aaa'}
    """
    if filters is None:
        raise ValidationError(
            "Filter is required; use {} to match every document",
            {'filters': "must be a mapping or a uuid value"}
        )
    if isinstance(filters, Mapping):
        return dict(filters)
    return {UUID_FIELD: filters}


def build_update(fields: Mapping[str, Any], strategy: Union[str, UpdateStrategy] = UpdateStrategy.SET) -> Dict[str, Any]:
    """Wrap a field mapping in an update operator.

    Args:
        fields: Fields handed to the operator
        strategy: Update operator, e.g. "$set" or UpdateStrategy.PUSH

    Returns:
        Update document such as {"$set": {...}}

    Raises:
        ValidationError: If the strategy is not an update operator
    """
    operator = strategy.value if isinstance(strategy, UpdateStrategy) else strategy
    if not isinstance(operator, str) or not operator.startswith("$"):
        raise ValidationError(
            f"Invalid update strategy: {strategy!r}",
            {'strategy': "must be a MongoDB update operator such as '$set'"}
        )
    return {operator: dict(fields or {})}


def extract_subfield_uuid(fields: Mapping[str, Any]) -> Tuple[str, Any]:
    """Get the field name and uuid of a single subdocument to push.

    Args:
        fields: Mapping of exactly one field to a subdocument carrying a uuid,
            e.g. {"members": {"uuid": "bbb", "name": "bar"}}

    Returns:
        Tuple of (field name, uuid value)

    Raises:
        ValidationError: If the mapping does not have that shape
    """
    if not isinstance(fields, Mapping) or len(fields) != 1:
        raise ValidationError(
            "Subfield insertion expects exactly one field",
            {'fields': f"got {len(fields) if isinstance(fields, Mapping) else type(fields).__name__}"}
        )

    field_name, subdocument = next(iter(fields.items()))
    if not isinstance(subdocument, Mapping) or UUID_FIELD not in subdocument:
        raise ValidationError(
            f"Subfield '{field_name}' must carry a '{UUID_FIELD}'",
            {field_name: f"missing {UUID_FIELD}"}
        )

    return field_name, subdocument[UUID_FIELD]


# =============================================================================
# Driver Call Helpers
# =============================================================================

async def resolve(value: Any) -> Any:
    """Await ``value`` when the driver handed back an awaitable.

    Motor returns handles and closes clients synchronously, while pymongo's
    async client and injected test doubles may return coroutines.
    """
    if inspect.isawaitable(value):
        return await value
    return value
