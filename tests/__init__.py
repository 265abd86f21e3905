"""MICROBOOT test suite.

Folder taxonomy
- unit/         : One module/class/function at a time.
- integration/  : The bootstrap pipeline run end to end against recording factories.
- functional/   : The command-line shell as a user drives it (flags, env vars, exit codes).
- helpers/      : Shared utilities (no tests here).

Every test starts with empty process defaults and a private log directory
(see `tests/conftest.py`). Hypothesis properties live with the layer they
exercise and use @pytest.mark.property.
"""
