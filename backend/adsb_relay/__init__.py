"""ADS-B Exchange Relay - forwards aircraft-list queries to a fixed upstream API.

Invariants:
    - Package root holds only the version (no import side-effects)
"""

__version__ = "1.0.0"
