"""
Schedule Write API

Write operations against the schedule table. Every write is conditional:
- create: attribute_not_exists(id), so a caller-supplied id never overwrites
- update/delete: attribute_exists(id), so a missing record is reported as
  ItemNotFoundError instead of being silently created or ignored
"""

import logging
from typing import Any, Dict

from boto3.dynamodb.conditions import Attr
from pydantic import ValidationError as PydanticValidationError

from ...config import ScheduleConfig
from ...core import create_table_gateway
from ...exceptions import ConflictError, ItemNotFoundError, ValidationError
from ...models import KEY_FIELD, REQUIRED_CREATE_FIELDS, Programme, ProgrammeCreate, ProgrammeUpdate
from ...utils import build_update_expression, field_errors

logger = logging.getLogger(__name__)

CONDITION_FAILED = 'ConditionalCheckFailedException'


class ScheduleWriteApi:
    """Write-only API for TV schedule mutations."""

    def __init__(self, config: ScheduleConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config)

    def create_programme(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a programme from a request body.

        DynamoDB Operation: PutItem with attribute_not_exists(id)

        Args:
            data: Raw request body; must contain title, channel and time

        Returns:
            The stored item, including its generated id

        Raises:
            ValidationError: Required fields missing or empty
            ConflictError: A programme with the supplied id already exists
        """
        try:
            request = ProgrammeCreate(**data)
        except PydanticValidationError as e:
            errors = field_errors(e)
            if any(field in errors for field in REQUIRED_CREATE_FIELDS):
                message = f"Missing required fields: {', '.join(REQUIRED_CREATE_FIELDS)}"
            else:
                message = "Invalid programme data"
            raise ValidationError(message, errors=errors, original_error=e) from e

        payload = request.model_dump(exclude_none=True)
        programme = Programme(**payload)
        item = programme.to_item()

        self.gateway.put_item(item, condition_expression=Attr(KEY_FIELD).not_exists())
        logger.info(f"Created programme {programme.id}: {programme.title} on {programme.channel}")
        return item

    def update_programme(self, update: ProgrammeUpdate) -> Dict[str, Any]:
        """
        Apply a partial update to one programme.

        DynamoDB Operation: UpdateItem with attribute_exists(id)

        Only the fields named in ``update.fields`` are written; every other
        attribute of the record keeps its value.

        Returns:
            All attributes of the record after the update

        Raises:
            ItemNotFoundError: No programme has this id
        """
        update_expression, names, values = build_update_expression(update.fields)
        key = {KEY_FIELD: update.id}

        try:
            attributes = self.gateway.update_item(
                key=key,
                update_expression=update_expression,
                expression_attribute_values=values,
                expression_attribute_names=names,
                condition_expression=Attr(KEY_FIELD).exists(),
                return_values='ALL_NEW'
            )
        except ConflictError as e:
            if e.aws_error_code != CONDITION_FAILED:
                raise
            raise ItemNotFoundError(self.gateway.table_name, key, original_error=e) from e

        logger.info(f"Updated programme {update.id}: {list(update.fields.keys())}")
        return attributes

    def delete_programme(self, programme_id: str) -> Dict[str, Any]:
        """
        Delete one programme.

        DynamoDB Operation: DeleteItem with attribute_exists(id)

        Returns:
            The attributes of the deleted record

        Raises:
            ItemNotFoundError: No programme has this id
        """
        key = {KEY_FIELD: programme_id}

        try:
            attributes = self.gateway.delete_item(
                key=key,
                condition_expression=Attr(KEY_FIELD).exists(),
                return_values='ALL_OLD'
            )
        except ConflictError as e:
            if e.aws_error_code != CONDITION_FAILED:
                raise
            raise ItemNotFoundError(self.gateway.table_name, key, original_error=e) from e

        logger.info(f"Deleted programme {programme_id}")
        return attributes
