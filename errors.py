class EngineStateError(RuntimeError):
    """Raised when the maze engine is used before it is ready (no ball bound, map not built, ...)."""
