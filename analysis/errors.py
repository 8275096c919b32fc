"""Exceptions raised inside the drawing analysis pipeline."""


class StageDegraded(Exception):
    """
    A heuristic stage failed internally and its default result was used.

    Never propagates out of the analyzer; it is built so the failure can be
    logged with the stage name and the original cause.
    """

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"Stage '{stage}' degraded to its default result: {cause}")
        self.stage = stage
        self.cause = cause
