"""Configuration, security, persistence, errors and logging."""
