"""Exception hierarchy for depscopes.

Every error raised while wiring a build model is fatal to the current
configuration pass. Nothing here is retried: callers either fix the build
model or the naming convention, and run again.
"""


class ConfigurationError(Exception):
    """Base class for errors raised during a configuration pass."""
    pass


class DuplicateConfigurationError(ConfigurationError):
    """A configuration with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot add configuration '{name}' as one with that name already exists.")
        self.name = name


class DuplicateBucketError(DuplicateConfigurationError):
    """A dependency bucket was registered twice for the same component."""

    def __init__(self, name: str, component: object) -> None:
        ConfigurationError.__init__(
            self, f"Dependency bucket '{name}' is already registered for {component}."
        )
        self.name = name
        self.component = component


class UnknownConfigurationError(ConfigurationError):
    """A configuration looked up by name does not exist."""

    def __init__(self, name: str, project: str = "") -> None:
        where = f" in project '{project}'" if project else ""
        super().__init__(f"Configuration with name '{name}' not found{where}.")
        self.name = name
        self.project = project


class MalformedBinaryNameError(ConfigurationError):
    """A binary name does not follow <component><variant>[Executable]."""
    pass


class NamingConventionError(ConfigurationError):
    """A host-generated configuration name lacks the expected token."""
    pass


class NotResolvableError(ConfigurationError):
    """Resolution was requested on a configuration that cannot be resolved."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resolving dependency configuration '{name}' is not allowed.")
        self.name = name


class ModelLoadError(ConfigurationError):
    """A build model description could not be loaded or validated."""
    pass


__all__ = [
    "ConfigurationError",
    "DuplicateBucketError",
    "DuplicateConfigurationError",
    "MalformedBinaryNameError",
    "ModelLoadError",
    "NamingConventionError",
    "NotResolvableError",
    "UnknownConfigurationError",
]
