#!/usr/bin/env python3
"""
Example: Using the cloud client for secrets, queues and uploads.

Requirements:
- AWS credentials available to boto3 (env vars, profile, or instance role)
- Or LocalStack: export CLOUDWRAP_ENDPOINT_URL=http://localhost:4566

Usage:
    python examples/client_operations.py <secret-name> <queue-name> <bucket> <file>
"""

import logging
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from cloudwrap_lib import CloudWrapError
from cloudwrap_lib.cal import create_cloud_client


def main() -> int:
    """Fetch a secret, announce an upload on a queue, upload the file."""
    logging.basicConfig(level=logging.DEBUG)

    if len(sys.argv) != 5:
        print(__doc__)
        return 2

    secret_name, queue_name, bucket, file_name = sys.argv[1:]
    local_file = Path(file_name)

    try:
        with create_cloud_client() as client:
            bundle = client.secrets_for_environment(secret_name)
            print(f"Secret '{secret_name}' has keys: {', '.join(sorted(bundle))}")

            client.upload_object(local_file, bucket, local_file.name, "application/octet-stream")
            print(f"Uploaded {local_file} to {bucket}/{local_file.name}")

            queue_url = client.resolve_queue_url(queue_name)
            message_id = client.enqueue_message_with_attributes(
                local_file.name,
                queue_url,
                {"bucket": bucket, "size": local_file.stat().st_size},
            )
            print(f"Announced upload as message {message_id}")
    except (CloudWrapError, ClientError, BotoCoreError, OSError) as e:
        print(f"Failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
