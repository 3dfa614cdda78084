"""
Data Ingestion Module

Reads and normalizes the dashboard's pre-built JSON artifacts:
- Daily return series
- Global wave peak/trough summaries
- Monthly factor ranking matrix
- Factor manifest and holdings snapshots
"""

__version__ = "0.1.0"
