"""User identity core: accounts, credentials, ranked search and profile icons."""

__version__ = "0.1.0"
