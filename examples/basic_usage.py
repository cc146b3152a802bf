#!/usr/bin/env python3
"""
Basic usage examples for the data point API.

This example walks through:
1. Setting up configuration
2. Creating data points through the gated create pipeline
3. Paging through a partition with a range filter
4. Calling the field resolver with AppSync-style events
"""

from datapoint_api import (
    AuthorizationGate,
    DataPointConfig,
    DataPointResolver,
    DataPointsReadApi,
    DataPointsWriteApi,
    PipelineContext,
    PipelineExecutor,
    StaticPolicy,
    build_create_pipeline,
)


def main():
    """Demonstrate basic usage of the data point API."""

    # 1. Configure DynamoDB connection
    print("1. Setting up configuration...")
    config = DataPointConfig.for_local_development()

    # Against AWS, read everything (TABLE, ALLOW, ...) from the environment:
    # config = DataPointConfig.from_env()
    config.configure_logging()

    read_api = DataPointsReadApi(config)
    write_api = DataPointsWriteApi(config)

    # 2. Create a few data points; the gate runs before every write
    print("2. Creating data points...")
    pipeline = build_create_pipeline(AuthorizationGate(StaticPolicy(True)), write_api)
    executor = PipelineExecutor()

    for day, reading in [("01", 20.5), ("02", 21.0), ("15", 19.75), ("31", 22.25)]:
        outcome = executor.run(pipeline, PipelineContext(arguments={
            "owner": "sensor-7",
            "name": "temperature",
            "createdAt": f"2024-01-{day}T12:00:00Z",
            "value": reading,
            "unit": "C",
        }))
        if outcome.completed:
            print(f"Created {outcome.result.partition_key} at {outcome.result.sort_key}")
        else:
            print(f"Create {outcome.status.value}: {outcome.error}")

    # 3. Page through January, two records at a time
    print("3. Querying with pagination...")
    next_token = None
    while True:
        page = read_api.list_by_partition(
            "sensor-7",
            "temperature",
            {"between": ["2024-01-01", "2024-01-31T23:59:59"]},
            limit=2,
            next_token=next_token
        )
        if page is None:
            print("Query failed (see log)")
            break

        for item in page.items:
            print(f"  {item.sort_key}: {item.model_extra.get('value')}")
        if not page.has_more:
            break
        next_token = page.next_token

    # 4. The same operations through the field resolver
    print("4. Resolving GraphQL fields...")
    resolver = DataPointResolver(config, policy=StaticPolicy(True))
    latest = resolver.resolve({
        "info": {"fieldName": "listDataPoints"},
        "arguments": {"owner": "sensor-7", "name": "temperature", "limit": 1, "sortDirection": "DESC"},
    })
    print(f"Latest reading: {latest['items']}")


if __name__ == "__main__":
    main()
