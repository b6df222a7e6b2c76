"""
JSON rendering of storage records: camelCase keys, ISO-8601 timestamps.
"""

from datetime import datetime

from pydantic.alias_generators import to_camel

from academy.services.accounts import public_account


def serialize(record):
    body = {}
    for key, value in record.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        body[to_camel(key)] = value
    return body


def serialize_many(records):
    return [serialize(r) for r in records]


def serialize_account(record):
    """Account without its password hash."""
    return serialize(public_account(record))
