"""Domain errors for formctrl."""


class DomainError(Exception):
    """Base exception for all domain errors."""
    
    def __init__(self, message: str) -> None:
        """
        Initialize domain error.
        
        Args:
            message: Error message (must not echo field values)
        """
        super().__init__(message)
        self.message = message


class MissingControlNameError(DomainError):
    """Raised when a control is built from props without a `name`."""
    
    def __init__(self) -> None:
        super().__init__("You must provide at least a `name` attribute to a `Ctrl` instance.")


class InvalidBlueprintError(DomainError):
    """Raised when blueprint data does not match the blueprint schema."""
    
    def __init__(self, field: str, message: str) -> None:
        """
        Initialize invalid blueprint error.
        
        Args:
            field: Location of the offending entry (e.g. "controls.2.type")
            message: Validation message
        """
        super().__init__(f"{field}: {message}")
        self.field = field
        self.validation_message = message
