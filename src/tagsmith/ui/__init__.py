"""User interfaces for tagsmith."""
