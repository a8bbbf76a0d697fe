"""Wire models for the engine protocol (envelopes, payloads, signals).

Field names on the wire are a stable contract: camelCase aliases inside
``{"v": "1.0", "data": ...}`` envelopes.
"""

__all__ = ["envelope", "events"]
