"""
Prefect flows for the exporter.

Flows:
- poll: run a single poll cycle (resolve locations, fetch, publish)

Usage (local):
    python -m weather_exporter.flows.poll

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'poll-weather/default'

The long-running exporter (``weather-exporter run``) does not go through
Prefect: its gauges live in-process and are scraped from the same process.
"""
