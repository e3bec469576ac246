"""Telemetry and environment settings."""
