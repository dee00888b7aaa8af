"""Tabular analysis of simulator telemetry."""
