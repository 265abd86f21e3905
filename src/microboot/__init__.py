"""MICROBOOT

The bootstrap layer of a microservice framework. It turns command-line flags
and environment variables into one process-wide broker, registry, selector,
transport, server and client, built in a fixed order before the application's
own action runs.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
