"""Domain-layer error definitions."""

# Exceptions that are never contained. Every broad catch site in the core
# re-raises these before handling anything else.
PROCESS_FATAL: tuple[type[BaseException], ...] = (
    MemoryError,
    SystemExit,
    KeyboardInterrupt,
)

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class DevError(DomainError):
    """Raised when the code itself is used incorrectly (a programming error)."""


class UnretrievedStateError(DevError):
    """Raised when a property's actual state is read before `retrieve` ran."""

    def __init__(self, resource_ref: str, property_name: str) -> None:
        super().__init__(
            f"{resource_ref}: '{property_name}' has not been retrieved this cycle"
        )
        self.resource_ref = resource_ref
        self.property_name = property_name


# ============================================================================
#                         Property reconciliation errors
# ============================================================================


class PropertyError(DomainError):
    """Base class for failures contained to a single property."""

    def __init__(self, resource_ref: str, property_name: str, message: str) -> None:
        super().__init__(message)
        self.resource_ref = resource_ref
        self.property_name = property_name


class ValidationError(PropertyError):
    """Raised when a desired value cannot be parsed or is structurally invalid."""

    def __init__(
        self, resource_ref: str, property_name: str, value: object, reason: str
    ) -> None:
        super().__init__(
            resource_ref,
            property_name,
            f"{resource_ref}: invalid {property_name} {value!r}: {reason}",
        )
        self.value = value
        self.reason = reason


class ApplyError(PropertyError):
    """Raised when the platform operation that converges a property fails.

    The underlying platform error is kept as ``__cause__`` and ``cause``.
    """

    def __init__(
        self, resource_ref: str, property_name: str, action: str, cause: BaseException
    ) -> None:
        super().__init__(
            resource_ref, property_name, f"{resource_ref}: failed to {action}: {cause}"
        )
        self.action = action
        self.cause = cause


# ============================================================================
#                           Resource and catalog errors
# ============================================================================


class ResourceError(DomainError):
    """Base class for errors building resources from catalog data."""


class UnknownResourceTypeError(ResourceError):
    """Raised when the catalog names a resource type attune cannot manage."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown resource type '{type_name}'")
        self.type_name = type_name


class UnknownAttributeError(ResourceError):
    """Raised when a resource is given a parameter its type does not define."""

    def __init__(self, resource_ref: str, attribute: str) -> None:
        super().__init__(f"{resource_ref}: unknown attribute '{attribute}'")
        self.resource_ref = resource_ref
        self.attribute = attribute


class DuplicateResourceError(ResourceError):
    """Raised when a catalog declares the same resource twice."""

    def __init__(self, resource_ref: str) -> None:
        super().__init__(f"Duplicate declaration: {resource_ref} is already declared")
        self.resource_ref = resource_ref
