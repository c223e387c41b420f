"""Interface shared by long-running spectrum processing methods."""

from typing import Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class MSMethod(Protocol[T]):
    """A method that runs once and exposes its progress and result.

    Implementations are not required to inherit from this class; any object
    with these four methods qualifies.
    """

    def execute(self) -> T:
        """Run the method to completion and return the result."""
        ...

    def get_finished_percentage(self) -> Optional[float]:
        """Completion fraction between 0.0 and 1.0."""
        ...

    def get_result(self) -> Optional[T]:
        """Result of the last successful execute(), None before."""
        ...

    def cancel(self) -> None:
        ...
