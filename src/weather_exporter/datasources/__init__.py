"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py / source.py  # Fetching, API URLs, constants
    └── models.py         # Result types (optional)

Sources:
  - weather/    Open-Meteo current weather, one fetch per location
  - locations/  The set of locations to poll (settings or PostgreSQL catalog)
"""
