"""Cross-cutting concerns: configuration, logging, errors, security, wiring."""
