"""Unit tests: single modules in isolation, no network and no real log directory."""
