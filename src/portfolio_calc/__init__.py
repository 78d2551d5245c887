"""Portfolio calculation engine: aggregation, valuation, XIRR and reconciliation."""

__version__ = "0.1.0"
