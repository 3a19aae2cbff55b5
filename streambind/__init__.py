"""
Stream Binding Client

Client-side routing and collection reconciliation for real-time data-binding streams.
"""

__version__ = "0.1.0"
