"""
streambind CLI - developer tooling for stream binding message logs

Commands:
- streambind replay - Replay a captured message log into a collection
- streambind classify - Count messages per stream
- streambind encode create/update/delete - Print outbound wire messages
"""

__version__ = "0.1.0"
