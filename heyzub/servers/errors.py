"""Errors raised by the server registry."""


class RegistryError(Exception):
    """Base class for every server registry failure."""


class ValidationError(RegistryError):
    """A server record failed validation. Registry state is untouched."""


class NotFoundError(RegistryError):
    """No server is registered under the requested id."""


class StorageReadError(RegistryError):
    """The snapshot file exists but could not be read or parsed."""


class StorageWriteError(RegistryError):
    """The snapshot file could not be written."""


class ConfigDirError(RegistryError):
    """The per-user configuration directory could not be resolved or created."""
