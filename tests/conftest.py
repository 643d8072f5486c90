"""
Test configuration and fixtures for the TV schedule service.

Provides a moto-backed schedule table, the read/write APIs wired to it, and a
builder for API Gateway proxy events.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add parent directory to path so we can import tvschedule
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from tvschedule import ScheduleConfig, ScheduleReadApi, ScheduleWriteApi
from tvschedule.app import ScheduleApis


@pytest.fixture
def schedule_config():
    """Schedule configuration for unit tests that never touch AWS."""
    return ScheduleConfig(
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret",
        region_name="us-east-1",
        endpoint_url=None,
        environment="test",
        table_prefix="",
        table_name="TVSchedule"
    )


@pytest.fixture
def mock_schedule_config():
    """Schedule configuration for mocked testing."""
    return ScheduleConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="",
        table_name="TVSchedule"
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource(
            'dynamodb',
            region_name='us-east-1',
            aws_access_key_id='test_key',
            aws_secret_access_key='test_secret'
        )


@pytest.fixture
def schedule_table(mock_dynamodb_resource):
    """Create the schedule table for testing."""
    table = mock_dynamodb_resource.create_table(
        TableName='test_TVSchedule',
        KeySchema=[
            {'AttributeName': 'id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def schedule_read_api(mock_schedule_config, schedule_table):
    """Schedule read API with mocked DynamoDB."""
    return ScheduleReadApi(mock_schedule_config)


@pytest.fixture
def schedule_write_api(mock_schedule_config, schedule_table):
    """Schedule write API with mocked DynamoDB."""
    return ScheduleWriteApi(mock_schedule_config)


@pytest.fixture
def schedule_apis(schedule_read_api, schedule_write_api):
    """Both APIs bundled the way the Lambda entry point passes them."""
    return ScheduleApis(read=schedule_read_api, write=schedule_write_api)


# Sample Data Fixtures

@pytest.fixture
def sample_programmes():
    """A small evening schedule across two channels."""
    return [
        {'id': 'prog-1', 'title': 'The One Show', 'channel': 'BBC1', 'time': '19:00'},
        {'id': 'prog-2', 'title': 'EastEnders', 'channel': 'BBC1', 'time': '19:30'},
        {'id': 'prog-3', 'title': 'Newsnight', 'channel': 'BBC2', 'time': '22:20'},
    ]


@pytest.fixture
def seeded_table(schedule_table, sample_programmes):
    """Schedule table pre-loaded with sample_programmes."""
    for item in sample_programmes:
        schedule_table.put_item(Item=item)
    return schedule_table


@pytest.fixture
def make_event():
    """Build a minimal API Gateway proxy event."""
    def _make_event(
        method: str,
        body: Optional[str] = None,
        query: Optional[Dict[str, str]] = None,
        path_params: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return {
            'httpMethod': method,
            'body': body,
            'headers': {},
            'isBase64Encoded': False,
            'path': '/',
            'pathParameters': path_params,
            'queryStringParameters': query,
            'requestContext': {
                'httpMethod': method,
                'path': '/',
                'stage': 'test',
                'requestId': 'c6af9ac6-7b61-11e6-9a41-93e8deadbeef',
            },
            'resource': '/',
        }
    return _make_event
