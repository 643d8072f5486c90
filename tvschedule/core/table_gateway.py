"""
Thin DynamoDB Table Gateway

This module provides a lightweight wrapper around the boto3 Table resource
for the schedule table. It exposes exactly the operations the request
adapters need (scan, get, put, update, delete) and nothing more.

The gateway focuses on:
- Creating the boto3 Table handle once and reusing it
- Passing keyword arguments through to boto3 unchanged
- Mapping botocore ClientErrors to domain exceptions

Read/write APIs compose these calls; they never touch boto3 directly.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import ScheduleConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    ItemNotFoundError,
    ValidationError,
    RetryableError
)

logger = logging.getLogger(__name__)


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to domain-specific exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "UpdateItem")
        table_name: The DynamoDB table name
        resource_id: Optional programme id for context

    Returns:
        Appropriate domain exception
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error']['Message']

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        # Raised for a missing table, never for a missing item
        return ConnectionError(f"Table not found - {full_message}", original_error=error)

    elif error_code == 'ValidationException':
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code == 'TransactionConflictException':
        return ConflictError(f"Transaction conflict - {full_message}", resource_id, original_error=error)

    elif error_code == 'ItemCollectionSizeLimitExceededException':
        return ValidationError(f"Item collection size limit exceeded - {full_message}", original_error=error)

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
        'ThrottlingException', 'TooManyRequestsException'
    ]:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in [
        'InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException',
        'RequestTimeoutException'
    ]:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in [
        'UnrecognizedClientException', 'AccessDeniedException',
        'ExpiredTokenException', 'InvalidSignatureException'
    ]:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    # Default to ConnectionError for unknown errors
    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


class TableGateway:
    """
    Thin gateway for the schedule table.

    The boto3 resource is created lazily on first use and kept for the
    lifetime of the gateway, so a gateway built at process start is shared
    by every invocation that process serves.
    """

    def __init__(self, config: ScheduleConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Schedule configuration
            table_name: Full name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """Get boto3 DynamoDB Table resource."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Scan operation.

        The schedule table is small and has no index on channel, so listing
        is a scan with an optional FilterExpression.

        Args:
            **kwargs: All boto3 scan parameters

        Returns:
            Raw DynamoDB response
        """
        try:
            if 'Limit' not in kwargs:
                logger.debug(f"Scan on {self.table_name} without Limit")
            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e

    def get_item(self, key: Dict[str, Any], consistent_read: bool = False) -> Optional[Dict[str, Any]]:
        """
        Fetch a single item by primary key.

        Returns:
            The item, or None when no item has that key
        """
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
            return response.get('Item')
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, key.get('id')) from e

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> None:
        """
        Put item into DynamoDB table.

        Args:
            item: Item to store
            condition_expression: Optional condition for put operation

        Example:
            gateway.put_item(
                item={'id': '9f1c...', 'title': 'Newsnight'},
                condition_expression=Attr('id').not_exists()
            )
        """
        try:
            put_kwargs = {'Item': item}
            if condition_expression is not None:
                put_kwargs['ConditionExpression'] = condition_expression

            self.table.put_item(**put_kwargs)
            logger.info(f"Put item in {self.table_name}: {item.get('id')}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, item.get('id')) from e

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Update item in DynamoDB table.

        Args:
            key: Primary key of item to update
            update_expression: UPDATE expression
            expression_attribute_values: Values for update expression
            expression_attribute_names: Names for update expression
            condition_expression: Optional condition for update
            return_values: What to return after update

        Returns:
            Updated attributes if return_values != 'NONE'
        """
        try:
            update_kwargs = {
                'Key': key,
                'UpdateExpression': update_expression,
                'ReturnValues': return_values
            }

            if expression_attribute_values:
                update_kwargs['ExpressionAttributeValues'] = expression_attribute_values
            if expression_attribute_names:
                update_kwargs['ExpressionAttributeNames'] = expression_attribute_names
            if condition_expression is not None:
                update_kwargs['ConditionExpression'] = condition_expression

            response = self.table.update_item(**update_kwargs)
            logger.info(f"Updated item in {self.table_name}: {key}")

            return response.get('Attributes') if return_values != 'NONE' else None

        except ClientError as e:
            raise map_dynamodb_error(e, "UpdateItem", self.table_name, key.get('id')) from e

    def delete_item(
        self,
        key: Dict[str, Any],
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Delete item from DynamoDB table.

        Args:
            key: Primary key of item to delete
            condition_expression: Optional condition for delete
            return_values: What to return after delete

        Returns:
            Deleted attributes if return_values != 'NONE'
        """
        try:
            delete_kwargs = {
                'Key': key,
                'ReturnValues': return_values
            }

            if condition_expression is not None:
                delete_kwargs['ConditionExpression'] = condition_expression

            response = self.table.delete_item(**delete_kwargs)
            logger.info(f"Deleted item from {self.table_name}: {key}")

            return response.get('Attributes') if return_values != 'NONE' else None

        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, key.get('id')) from e


def create_table_gateway(config: ScheduleConfig) -> TableGateway:
    """
    Factory function to create a TableGateway for the schedule table.

    Args:
        config: Schedule configuration

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config, config.get_table_name())
