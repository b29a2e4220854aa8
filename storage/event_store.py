"""DynamoDB-backed read access to the festival event store."""
import logging
from decimal import Decimal
from typing import Any, Dict, List

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class DynamoDBEventStore:
    """Reads raw event records from a DynamoDB table."""

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB client and table reference.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized DynamoDBEventStore for table: {table_name}")

    def get_all_records(self) -> List[Dict[str, Any]]:
        """
        Retrieve all event records using a paginated Scan.

        Returns:
            Records in the store's shape ({id, college, eventName, dates, ...})
            with DynamoDB numbers converted to int/float

        Raises:
            ClientError: If the scan fails
        """
        logger.info(f"Scanning DynamoDB table {self.table_name} for event records")

        try:
            response = self.table.scan()
            items = response.get('Items', [])

            while 'LastEvaluatedKey' in response:
                response = self.table.scan(
                    ExclusiveStartKey=response['LastEvaluatedKey']
                )
                items.extend(response.get('Items', []))

        except ClientError as e:
            logger.error(f"Error scanning DynamoDB table: {e}")
            raise

        records = [self._from_dynamodb(item) for item in items]
        logger.info(f"Retrieved {len(records)} event records from DynamoDB")
        return records

    def _from_dynamodb(self, value: Any) -> Any:
        """
        Convert a DynamoDB item (or nested value) to plain Python types.

        Args:
            value: Item, list or attribute value returned by boto3

        Returns:
            Same structure with Decimal numbers replaced by int or float
        """
        if isinstance(value, Decimal):
            return int(value) if value == value.to_integral_value() else float(value)
        if isinstance(value, dict):
            return {key: self._from_dynamodb(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._from_dynamodb(item) for item in value]
        return value
