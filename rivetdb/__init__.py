"""Cache storage backends, HTTP API error and model types, and column-to-JSON encoding."""

__version__ = "0.1.0"