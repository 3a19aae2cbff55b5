"""
Test suite for stream binding.

Focus areas:
- Envelope decode/encode and the wire contract
- Stream routing fallbacks
- Reducer purity and ordering
- Decode failures never escaping as exceptions
"""
