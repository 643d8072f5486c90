"""
TV Schedule Utilities

Expression building and serialization helpers shared by the read/write APIs
and the Lambda adapters.

Key Features:
- Partial-update expression building (SET clause with placeholders)
- Filter expression building for channel lookups
- JSON body parsing and response serialization with Decimal support
"""

import json
import logging
from decimal import Decimal, DecimalException
from typing import Any, Dict, Optional, Tuple

from boto3.dynamodb.types import DYNAMODB_CONTEXT
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Expression Building
# =============================================================================

def build_update_expression(fields: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Build the UpdateExpression and placeholder maps for a partial update.

    Every field is referenced through a ``#name`` placeholder and its value
    through a ``:name`` placeholder, so reserved words such as ``name``,
    ``time`` or ``duration`` are safe to update. Clause order follows the
    iteration order of ``fields``, which makes the output deterministic for a
    given dict.

    Args:
        fields: Field names mapped to their new values. Must not contain the
            record key.

    Returns:
        Tuple of (UpdateExpression, ExpressionAttributeNames,
        ExpressionAttributeValues)

    Raises:
        ValidationError: If ``fields`` is empty

    Example:
        >>> build_update_expression({'title': 'Newsnight', 'time': '22:30'})
        ('SET #title = :title, #time = :time',
         {'#title': 'title', '#time': 'time'},
         {':title': 'Newsnight', ':time': '22:30'})

    Note:
        Field names are used verbatim inside placeholders. A name containing
        characters outside ``[A-Za-z0-9_]`` yields an expression DynamoDB will
        reject; validate names before calling (ProgrammeUpdate does).
    """
    if not fields:
        raise ValidationError("Update fields cannot be empty")

    update_parts = []
    expression_names = {}
    expression_values = {}

    for key, value in fields.items():
        attr_name = f"#{key}"
        attr_value = f":{key}"
        update_parts.append(f"{attr_name} = {attr_value}")
        expression_names[attr_name] = key
        expression_values[attr_value] = value

    update_expression = "SET " + ", ".join(update_parts)
    return update_expression, expression_names, expression_values


def build_filter_expression(filters: Dict[str, Any]):
    """Build FilterExpression for DynamoDB scan operations.

    Args:
        filters: Dictionary of attribute names to values

    Returns:
        FilterExpression for boto3, or None if no filters

    Example:
        >>> build_filter_expression({'channel': 'BBC1'})
        # Returns: Attr('channel').eq('BBC1')
    """
    from boto3.dynamodb.conditions import Attr

    if not filters:
        return None

    conditions = []
    for attr_name, value in filters.items():
        conditions.append(Attr(attr_name).eq(value))

    filter_expr = conditions[0]
    for condition in conditions[1:]:
        filter_expr = filter_expr & condition

    return filter_expr


# =============================================================================
# Serialization
# =============================================================================

def _reject_constant(name: str):
    raise ValidationError(f"Request body contains an unsupported number: {name}")


def _check_numbers(value: Any, path: str = '') -> None:
    """Raise ValidationError for any number DynamoDB cannot store exactly."""
    if isinstance(value, dict):
        for key, item in value.items():
            _check_numbers(item, f"{path}.{key}" if path else str(key))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_numbers(item, f"{path}[{index}]")
    elif isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        try:
            DYNAMODB_CONTEXT.create_decimal(value)
        except DecimalException as e:
            raise ValidationError(
                f"Number in field '{path}' cannot be stored: "
                "more than 38 significant digits or out of range",
                errors={path: 'unsupported number'},
                original_error=e
            ) from e


def parse_json_body(body: Optional[str]) -> Dict[str, Any]:
    """Parse a request body into a dict.

    Floats are parsed as Decimal because boto3 refuses Python floats.
    NaN and Infinity are rejected, as is any number outside DynamoDB's
    38-digit precision and exponent range.
    A missing or blank body parses as an empty dict.

    Raises:
        ValidationError: If the body is not a JSON object or holds a number
            DynamoDB cannot store
    """
    if body is None or not body.strip():
        return {}

    try:
        parsed = json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Request body is not valid JSON: {e.msg}", original_error=e) from e

    if not isinstance(parsed, dict):
        raise ValidationError("Request body must be a JSON object")
    _check_numbers(parsed)
    return parsed


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        # DynamoDB returns every number as Decimal
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, set):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(data: Any) -> str:
    """Serialize a response payload, converting DynamoDB Decimals to numbers."""
    return json.dumps(data, default=_json_default)


def field_errors(error: PydanticValidationError) -> Dict[str, str]:
    """Flatten a pydantic ValidationError into ``{"field.path": "message"}``."""
    return {
        ".".join(str(part) for part in err['loc']) or '__root__': err['msg']
        for err in error.errors()
    }
