"""Cross-cutting infrastructure: configuration, logging, database, errors and security."""
