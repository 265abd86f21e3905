"""Bootstrap (composition root) for MICROBOOT.

Turns parsed flags into concrete components: looks up each requested kind in
the command's factory tables, builds the instances in dependency order, and
publishes them as the process-wide defaults.

Import rules:
- `microboot.cmd` imports *this* package.
- This package may import `microboot.adapters`, `microboot.interfaces`,
  `microboot.defaults`, `microboot.logging` and `microboot.config`.

Public surface:
- `bootstrap()` and its result types, plus the flag-value helpers.
"""

from .bootstrap import (
    Components,
    Resolution,
    bootstrap,
    parse_metadata,
    resolve,
    split_addresses,
    unknown_kinds,
)

__all__ = [
    "Components",
    "Resolution",
    "bootstrap",
    "parse_metadata",
    "resolve",
    "split_addresses",
    "unknown_kinds",
]
