#!/usr/bin/env python3
"""
Print the PostgreSQL DDL for the waitlist signups table.

Paste the output into the Supabase SQL editor when provisioning a new
project. The unique constraint on `email` is what turns a repeated signup
into an "already on the waitlist" response.

Usage:
    python scripts/waitlist_ddl.py [--table waitlist_signups]
"""

import argparse

from sqlalchemy import MetaData
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from app.features.waitlist.models.waitlist import WaitlistSignup


def build_ddl(table_name: str | None = None) -> str:
    table = WaitlistSignup.__table__
    if table_name and table_name != table.name:
        table = table.to_metadata(MetaData(), name=table_name)
    return str(CreateTable(table).compile(dialect=postgresql.dialect())).strip() + ";"


def main():
    parser = argparse.ArgumentParser(description="Print the waitlist table DDL")
    parser.add_argument("--table", default=None, help="Override the table name")
    args = parser.parse_args()
    print(build_ddl(args.table))


if __name__ == "__main__":
    main()
