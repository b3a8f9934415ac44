"""Simulator errors."""


class InvalidConfigurationError(ValueError):
    """Generation parameters are out of their valid range."""

    pass


class UnrecognizedNoiseKindError(ValueError):
    """The requested noise kind is not supported."""

    def __init__(self, noise_kind, supported):
        """Initialize the exception.

        Args:
            noise_kind: The noise kind that was requested.
            supported: The noise kinds that can be used.
        """
        self.noise_kind = noise_kind
        self.supported = list(supported)
        self.message = (
            f"Unrecognized noise kind {noise_kind!r}. "
            f"Expected one of: {', '.join(self.supported)}."
        )
        super().__init__(self.message)


class UnexpectedSettingsVersion(Exception):
    """Loaded settings version is different than the expected version."""

    def __init__(self, current_version, expected_version):
        """Initialize the exception.

        Args:
            current_version: The loaded settings version.
            expected_version: The expected settings version.
        """
        self.current_version = current_version
        self.expected_version = expected_version
        self.message = (
            f"Loaded settings version {current_version} is "
            f"different than the expected version {expected_version}."
        )
        super().__init__(self.message)
