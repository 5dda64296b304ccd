"""Feature packages: suggestions, tag I/O, and safe apply."""
