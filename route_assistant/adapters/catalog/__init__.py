"""Route catalog adapters - Implementations of the RouteLookupPort.

Available implementations:
- CSVRouteCatalog: Loads routes and schedules from CSV files
"""

from .csv_catalog import CSVRouteCatalog

__all__ = ["CSVRouteCatalog"]
