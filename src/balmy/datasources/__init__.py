"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs
    ├── models.py         # Dataclasses for derived records
    └── {feature}.py      # Fetch + transform functions (one per resource)

Fetch functions validate the raw payload against ``balmy.schemas`` right
after the request, then hand typed data to pure ``build_*`` transforms that
can be tested without the network.
"""
