"""docrag — ingest local documents into a vector index and answer questions over them."""

__version__ = "0.1.0"
