"""
Prefect flows for the data pipeline.

Flows:
- fetch: resolve the location, fetch station/current/daily/hourly concurrently,
  join them into a WeatherReport

Usage (local):
    python -m balmy.flows.fetch

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m balmy.flows.fetch
"""
