import os

from botocore.config import Config

# DynamoDB client config.
# Retries inside botocore are kept low, throttling is retried in utils.db.exp_db_backoff.
aws_config_ddb = Config(retries={'max_attempts': 3}, region_name=os.environ.get('AWS_REGION', 'eu-central-1'))
