"""Core engine: hashing, severity, drift comparison, aggregation, assembly."""
