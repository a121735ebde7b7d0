class AontasError(Exception):
    """Base exception for all export and grading errors."""
    pass

class UnsupportedFormatError(AontasError):
    pass

class ExportFailedError(AontasError):
    pass

class ExercisePayloadError(AontasError):
    """Raised when an upstream exercise payload cannot be parsed."""
    pass
