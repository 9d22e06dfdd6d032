"""Exception types raised by btcli."""


class BtcliError(Exception):
    """Base class for btcli errors."""


class ArgumentError(BtcliError):
    """A command argument could not be parsed or is out of range."""


class StoreError(BtcliError):
    """The row store failed to answer a request."""


class ConfigError(BtcliError):
    """The shell configuration is incomplete or invalid."""
