"""Versioned curated scoring tables, one YAML file per document domain."""
