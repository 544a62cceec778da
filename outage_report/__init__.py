"""Outage spreadsheet ingest: normalize incident workbooks into grouped, narrated records."""

__version__ = "0.1.0"
