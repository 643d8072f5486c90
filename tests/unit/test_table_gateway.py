"""
Tests for TableGateway (core/table_gateway.py)

These tests verify the thin boto3 wrapper: lazy resource creation, kwargs
pass-through and error mapping.
"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from tvschedule.core.table_gateway import TableGateway, create_table_gateway
from tvschedule.exceptions import ConnectionError, ConflictError, RetryableError


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.scan.return_value = {'Items': []}
    table.get_item.return_value = {}
    table.put_item.return_value = None
    table.update_item.return_value = {'Attributes': {}}
    table.delete_item.return_value = {'Attributes': {}}
    return table


@pytest.fixture
def gateway(schedule_config, mock_table):
    gateway = TableGateway(schedule_config, "test_TVSchedule")
    gateway._table = mock_table
    return gateway


def client_error(code: str) -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': 'boom'}}, 'TestOperation')


class TestTableGatewayConnection:

    def test_initialization(self, schedule_config):
        gateway = TableGateway(schedule_config, "test_TVSchedule")

        assert gateway.config == schedule_config
        assert gateway.table_name == "test_TVSchedule"
        assert gateway._dynamodb is None
        assert gateway._table is None

    def test_dynamodb_property_reuses_instance(self, schedule_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_dynamodb = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = mock_dynamodb

            gateway = TableGateway(schedule_config, "test_TVSchedule")

            assert gateway.dynamodb is mock_dynamodb
            assert gateway.dynamodb is mock_dynamodb
            mock_session_class.assert_called_once()
            mock_session.resource.assert_called_once()

    def test_endpoint_url_passed_through(self, schedule_config):
        schedule_config.endpoint_url = "http://localhost:8000"
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session

            _ = TableGateway(schedule_config, "test_TVSchedule").dynamodb

            _, kwargs = mock_session.resource.call_args
            assert kwargs['endpoint_url'] == "http://localhost:8000"
            assert kwargs['region_name'] == "us-east-1"

    def test_dynamodb_connection_error(self, schedule_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session_class.side_effect = Exception("Connection failed")

            gateway = TableGateway(schedule_config, "test_TVSchedule")

            with pytest.raises(ConnectionError, match="Failed to connect to DynamoDB"):
                _ = gateway.dynamodb

    def test_table_property_uses_table_name(self, schedule_config):
        with patch('boto3.Session') as mock_session_class:
            mock_dynamodb = Mock()
            mock_session_class.return_value.resource.return_value = mock_dynamodb

            gateway = TableGateway(schedule_config, "test_TVSchedule")
            _ = gateway.table
            _ = gateway.table

            mock_dynamodb.Table.assert_called_once_with("test_TVSchedule")

    def test_create_table_gateway_uses_config_table_name(self, schedule_config):
        gateway = create_table_gateway(schedule_config)

        assert isinstance(gateway, TableGateway)
        assert gateway.table_name == "test_TVSchedule"


class TestTableGatewayOperations:

    def test_scan_passes_kwargs(self, gateway, mock_table):
        result = gateway.scan(FilterExpression='expr', Limit=10)

        assert result == {'Items': []}
        mock_table.scan.assert_called_once_with(FilterExpression='expr', Limit=10)

    def test_scan_error_mapped(self, gateway, mock_table):
        mock_table.scan.side_effect = client_error('ThrottlingException')

        with pytest.raises(RetryableError):
            gateway.scan()

    def test_get_item_found(self, gateway, mock_table):
        mock_table.get_item.return_value = {'Item': {'id': 'prog-1'}}

        assert gateway.get_item({'id': 'prog-1'}) == {'id': 'prog-1'}
        mock_table.get_item.assert_called_once_with(Key={'id': 'prog-1'}, ConsistentRead=False)

    def test_get_item_missing(self, gateway):
        assert gateway.get_item({'id': 'nope'}) is None

    def test_put_item_with_condition(self, gateway, mock_table):
        gateway.put_item({'id': 'prog-1'}, condition_expression='cond')

        mock_table.put_item.assert_called_once_with(Item={'id': 'prog-1'}, ConditionExpression='cond')

    def test_put_item_conditional_failure(self, gateway, mock_table):
        mock_table.put_item.side_effect = client_error('ConditionalCheckFailedException')

        with pytest.raises(ConflictError) as exc_info:
            gateway.put_item({'id': 'prog-1'}, condition_expression='cond')

        assert exc_info.value.resource_id == 'prog-1'

    def test_update_item_builds_kwargs(self, gateway, mock_table):
        mock_table.update_item.return_value = {'Attributes': {'id': 'prog-1', 'title': 'New'}}

        result = gateway.update_item(
            key={'id': 'prog-1'},
            update_expression='SET #title = :title',
            expression_attribute_values={':title': 'New'},
            expression_attribute_names={'#title': 'title'},
            return_values='ALL_NEW'
        )

        assert result == {'id': 'prog-1', 'title': 'New'}
        mock_table.update_item.assert_called_once_with(
            Key={'id': 'prog-1'},
            UpdateExpression='SET #title = :title',
            ReturnValues='ALL_NEW',
            ExpressionAttributeValues={':title': 'New'},
            ExpressionAttributeNames={'#title': 'title'},
        )

    def test_update_item_returns_none_by_default(self, gateway):
        assert gateway.update_item(key={'id': 'prog-1'}, update_expression='SET #a = :a') is None

    def test_delete_item_error_mapped(self, gateway, mock_table):
        mock_table.delete_item.side_effect = client_error('AccessDeniedException')

        with pytest.raises(ConnectionError):
            gateway.delete_item({'id': 'prog-1'})
