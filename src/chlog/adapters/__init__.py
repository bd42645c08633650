"""Adapters connecting the core to ClickHouse and the logging module."""
