"""mediacompat - media library compatibility scoring and reconciliation."""

__version__ = "0.1.0"
