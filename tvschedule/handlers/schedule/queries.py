"""
Schedule Read API

Read operations against the schedule table:
- list_programmes: full scan, optionally narrowed to one channel
- get_programme: single GetItem by id

Scans follow LastEvaluatedKey until the table is exhausted so a listing is
never silently truncated at DynamoDB's 1 MB page size.
"""

import logging
from typing import Any, Dict, List, Optional

from ...config import ScheduleConfig
from ...core import create_table_gateway
from ...exceptions import ItemNotFoundError
from ...models import KEY_FIELD, ChannelFilter
from ...utils import build_filter_expression

logger = logging.getLogger(__name__)


class ScheduleReadApi:
    """Read-only API for the TV schedule."""

    def __init__(self, config: ScheduleConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config)

    def list_programmes(self, channel: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List scheduled programmes.

        DynamoDB Operation: Scan with optional FilterExpression

        Args:
            channel: Only return programmes on this channel

        Returns:
            List of programme items (empty if none match)
        """
        criterion = ChannelFilter(channel=channel)
        scan_kwargs = {}

        filter_expression = build_filter_expression(criterion.to_filters())
        if filter_expression is not None:
            scan_kwargs['FilterExpression'] = filter_expression

        items: List[Dict[str, Any]] = []
        while True:
            response = self.gateway.scan(**scan_kwargs)
            items.extend(response.get('Items', []))

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_key

        logger.debug(f"Listed {len(items)} programmes (channel={criterion.channel})")
        return items

    def get_programme(self, programme_id: str) -> Dict[str, Any]:
        """
        Fetch one programme by id.

        DynamoDB Operation: GetItem

        Raises:
            ItemNotFoundError: No programme has this id
        """
        key = {KEY_FIELD: programme_id}
        item = self.gateway.get_item(key)
        if item is None:
            raise ItemNotFoundError(self.gateway.table_name, key)
        return item
