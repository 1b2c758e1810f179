"""Custom exceptions for oaimeta."""


class OaiMetaError(Exception):
    """Base exception for all oaimeta errors."""

    pass


class ConfigError(OaiMetaError):
    """Configuration is missing or invalid."""

    pass


class TemplateError(OaiMetaError):
    """Template operation failed."""

    pass


class TemplateNotFoundError(TemplateError):
    """No metadata template matches a resource."""

    def __init__(self, resource: str, candidates: list[str] | None = None):
        """Initialize exception with the resource and the paths tried.

        Args:
            resource: URI of the resource being rendered.
            candidates: Template paths that were checked and did not exist.
        """
        self.resource = resource
        self.candidates = candidates or []
        super().__init__(f"No metadata template matched for {resource}")


class TemplateParseError(TemplateError):
    """Template file is not well-formed XML."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse template {path}: {reason}")


class StructuredLiteralError(OaiMetaError):
    """A literal value could not be read as a key-value mapping."""

    def __init__(self, value: str, key: str, reason: str):
        self.value = value
        self.key = key
        self.reason = reason
        super().__init__(f"Cannot look up {key!r} in literal {value!r}: {reason}")


class PropertyGraphError(OaiMetaError):
    """Property graph query failed."""

    def __init__(self, query: str, reason: str):
        self.query = query
        self.reason = reason
        super().__init__(f"Property graph query failed: {reason}")


class UnknownProducerError(OaiMetaError):
    """No metadata producer is registered for a kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown metadata producer: {kind!r}")
