"""Book library REST service.

Readers and books are exposed over a small CRUD API. Incoming payloads pass
through a declarative validation layer before they reach the store, and store
failures are translated into a stable error vocabulary.
"""

__version__ = "0.1.0"
