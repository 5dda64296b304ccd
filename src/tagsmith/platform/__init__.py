"""Platform adapters: logging, filesystem helpers, and model gateways."""
