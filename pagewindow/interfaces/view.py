# pagewindow/interfaces/view.py

from .state import DatasetState

class DatasetView:
    """Interface for consumers that render dataset snapshots."""

    def initialize(self) -> None:
        """Initialize the view."""
        raise NotImplementedError("Subclasses must implement this method")

    def update(self, state: DatasetState) -> None:
        """
        Render a new snapshot.

        Args:
            state: The latest dataset snapshot
        """
        raise NotImplementedError("Subclasses must implement this method")

    def finalize(self) -> None:
        """Tear the view down and print a final summary."""
        raise NotImplementedError("Subclasses must implement this method")
