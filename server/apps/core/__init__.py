"""Cross-app plumbing: error taxonomy, service wiring and view base classes."""
