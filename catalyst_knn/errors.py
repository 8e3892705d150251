class InitializationError(Exception):
    """The reference dataset could not be fetched or parsed.

    Raised by ``CsvSource.load()`` and re-raised by
    ``KNNPredictor.initialize()``. The predictor is left in
    ``PredictorState.FAILED_INIT``; retrying is up to the caller.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load reference data from {source}: {reason}")
