"""Tutorials exceptions."""


class TutorialNotFoundError(Exception):
    """Raised when an operation targets a tutorial ID that does not exist."""

    def __init__(self, tutorial_id: int) -> None:
        self.tutorial_id = tutorial_id
        super().__init__(f"Tutorial not found: {tutorial_id}")
