"""Application layer orchestrating feature use cases for the UIs."""
