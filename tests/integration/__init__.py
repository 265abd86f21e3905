"""Integration tests: the full bootstrap pipeline and the process-wide defaults it writes."""
