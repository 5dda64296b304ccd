"""tagsmith: audit and repair audio tags with a locally hosted language model."""

__version__ = "0.1.0"
