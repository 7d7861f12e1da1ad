"""
Shared column types.
JSON blobs use JSONB on PostgreSQL and plain JSON elsewhere (tests run on SQLite).
"""
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONType = JSON().with_variant(JSONB(), "postgresql")
