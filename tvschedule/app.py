"""
Lambda entry point for the TV schedule API.

API Gateway proxy events are routed on ``httpMethod``:

    GET     list programmes (``?channel=`` filter) or fetch one (``?id=``)
    POST    create a programme
    PUT     partial update of a programme (PATCH is accepted too)
    DELETE  delete a programme

Each method handler receives the process-wide ``ScheduleApis`` explicitly.
Failures are classified once, in ``route_request``: each domain exception
carries the status it is answered with, and anything unexpected is a 500.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional

from pydantic import ValidationError as PydanticValidationError

from .config import ScheduleConfig
from .exceptions import ConflictError, ItemNotFoundError, TVScheduleError, ValidationError
from .handlers import ScheduleReadApi, ScheduleWriteApi
from .models import KEY_FIELD, ProgrammeUpdate
from .utils import field_errors, parse_json_body, to_json

logger = logging.getLogger(__name__)


class ScheduleApis(NamedTuple):
    read: ScheduleReadApi
    write: ScheduleWriteApi


_apis: Optional[ScheduleApis] = None


def configure_logging(config: ScheduleConfig) -> None:
    """Set the package log level; the Lambda runtime owns the handlers."""
    level = logging.DEBUG if config.enable_debug_logging else logging.INFO
    logging.getLogger("tvschedule").setLevel(level)


def create_apis(config: ScheduleConfig) -> ScheduleApis:
    return ScheduleApis(read=ScheduleReadApi(config), write=ScheduleWriteApi(config))


def get_apis() -> ScheduleApis:
    """Return the APIs for this process, building them on first use.

    Warm Lambda invocations reuse the same gateways and boto3 resource.
    """
    global _apis
    if _apis is None:
        config = ScheduleConfig.from_env()
        configure_logging(config)
        _apis = create_apis(config)
        logger.info(f"Schedule APIs initialised for table {_apis.read.gateway.table_name}")
    return _apis


def response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': to_json(body),
    }


def _param(event: Dict[str, Any], name: str) -> Optional[str]:
    """Look a parameter up in the path parameters, then the query string."""
    for source in ('pathParameters', 'queryStringParameters'):
        value = (event.get(source) or {}).get(name)
        if value:
            return value
    return None


# =============================================================================
# Method Handlers
# =============================================================================

def handle_get_request(event: Dict[str, Any], apis: ScheduleApis) -> Dict[str, Any]:
    programme_id = _param(event, KEY_FIELD)
    if programme_id:
        return response(200, apis.read.get_programme(programme_id))

    channel = (event.get('queryStringParameters') or {}).get('channel')
    return response(200, apis.read.list_programmes(channel=channel))


def handle_post_request(event: Dict[str, Any], apis: ScheduleApis) -> Dict[str, Any]:
    body = parse_json_body(event.get('body'))
    item = apis.write.create_programme(body)
    return response(201, {'message': 'Item created successfully', 'item': item})


def handle_put_request(event: Dict[str, Any], apis: ScheduleApis) -> Dict[str, Any]:
    body = parse_json_body(event.get('body'))
    if not body.get(KEY_FIELD):
        path_id = (event.get('pathParameters') or {}).get(KEY_FIELD)
        if not path_id:
            raise ValidationError(f"Missing required field: {KEY_FIELD}")
        body[KEY_FIELD] = path_id

    if not any(field != KEY_FIELD for field in body):
        raise ValidationError("No fields to update")

    try:
        update = ProgrammeUpdate.from_body(body)
    except PydanticValidationError as e:
        raise ValidationError("Invalid update request", errors=field_errors(e), original_error=e) from e

    item = apis.write.update_programme(update)
    return response(200, {'message': 'Item updated successfully', 'item': item})


def handle_delete_request(event: Dict[str, Any], apis: ScheduleApis) -> Dict[str, Any]:
    body = parse_json_body(event.get('body'))
    programme_id = body.get(KEY_FIELD) or _param(event, KEY_FIELD)
    if not programme_id:
        raise ValidationError(f"Missing required field: {KEY_FIELD}")

    apis.write.delete_programme(programme_id)
    return response(200, {'message': 'Item deleted successfully'})


METHOD_HANDLERS = {
    'GET': handle_get_request,
    'POST': handle_post_request,
    'PUT': handle_put_request,
    'PATCH': handle_put_request,
    'DELETE': handle_delete_request,
}


def route_request(event: Dict[str, Any], apis: ScheduleApis) -> Dict[str, Any]:
    """Dispatch an API Gateway proxy event and classify any failure."""
    method = (event.get('httpMethod') or '').upper()
    handler = METHOD_HANDLERS.get(method)
    if handler is None:
        return response(405, {'message': 'Method Not Allowed'})

    try:
        return handler(event, apis)
    except ValidationError as e:
        logger.info(f"Rejected {method} request: {e}")
        body = {'message': e.message}
        if e.errors:
            body['errors'] = e.errors
        return response(e.status_code, body)
    except ItemNotFoundError as e:
        logger.info(f"{method} request for missing item: {e.key}")
        return response(e.status_code, {'message': 'Item not found', 'key': e.key})
    except ConflictError as e:
        logger.warning(f"Conflicting {method} request: {e}")
        message = 'Item already exists' if method == 'POST' else 'Conflicting write, retry the request'
        return response(e.status_code, {'message': message, 'error': e.message})
    except TVScheduleError as e:
        logger.error(f"Error occurred while processing {method} request: {e}")
        return response(500, {
            'message': f'Error occurred while processing {method} request',
            'error': e.message,
        })
    except Exception as e:
        logger.exception(f"Unexpected error while processing {method} request")
        return response(500, {
            'message': f'Error occurred while processing {method} request',
            'error': str(e),
        })


def lambda_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """AWS Lambda entry point."""
    return route_request(event, get_apis())
