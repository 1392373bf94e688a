"""Core building blocks: domain model, errors, logging, cancellation, streaming."""
