#!/usr/bin/env python3
"""
Basic usage of the TV schedule APIs against DynamoDB Local.

Start DynamoDB Local first:

    docker run -p 8000:8000 amazon/dynamodb-local

This example walks through:
1. Setting up configuration
2. Creating the schedule table if it does not exist
3. Creating programmes through the write API
4. Listing and filtering through the read API
5. A partial update and a delete
"""

from botocore.exceptions import ClientError

from tvschedule import ProgrammeUpdate, ScheduleConfig, ScheduleReadApi, ScheduleWriteApi


def ensure_table(read_api: ScheduleReadApi) -> None:
    """Create the schedule table keyed on ``id`` unless it already exists."""
    gateway = read_api.gateway
    try:
        gateway.dynamodb.create_table(
            TableName=gateway.table_name,
            KeySchema=[{'AttributeName': 'id', 'KeyType': 'HASH'}],
            AttributeDefinitions=[{'AttributeName': 'id', 'AttributeType': 'S'}],
            BillingMode='PAY_PER_REQUEST'
        ).wait_until_exists()
        print(f"   Created table {gateway.table_name}")
    except ClientError as e:
        if e.response['Error']['Code'] != 'ResourceInUseException':
            raise
        print(f"   Table {gateway.table_name} already exists")


def main():
    # 1. Configure DynamoDB connection
    print("1. Setting up configuration...")
    config = ScheduleConfig.for_local_development()

    read_api = ScheduleReadApi(config)
    write_api = ScheduleWriteApi(config)

    # 2. Table
    print("2. Ensuring schedule table exists...")
    ensure_table(read_api)

    # 3. Create programmes
    print("3. Creating programmes...")
    created = [
        write_api.create_programme({'title': 'The One Show', 'channel': 'BBC1', 'time': '19:00'}),
        write_api.create_programme({'title': 'EastEnders', 'channel': 'BBC1', 'time': '19:30'}),
        write_api.create_programme({'title': 'Newsnight', 'channel': 'BBC2', 'time': '22:20'}),
    ]
    for item in created:
        print(f"   {item['id']}: {item['title']} ({item['channel']} {item['time']})")

    # 4. List and filter
    print("4. Listing programmes...")
    print(f"   All: {len(read_api.list_programmes())}")
    print(f"   BBC1: {[p['title'] for p in read_api.list_programmes(channel='BBC1')]}")

    # 5. Partial update, then delete
    print("5. Updating and deleting...")
    newsnight = created[2]
    updated = write_api.update_programme(
        ProgrammeUpdate(id=newsnight['id'], fields={'time': '22:45', 'duration': 50})
    )
    print(f"   Updated: {updated}")

    for item in created:
        write_api.delete_programme(item['id'])
    print(f"   Remaining: {len(read_api.list_programmes())}")


if __name__ == "__main__":
    main()
