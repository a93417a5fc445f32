"""
Seeder module interface.

SeederService runs any number of seeders in dependency order; each one
owns the tables it populates.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISeeder(Protocol):
    """Contract for a single table-group seeder."""

    name: str

    def seed(self) -> int:
        """
        Populate the seeder's tables if they are empty.

        Returns:
            Number of top-level records created (0 when skipped)
        """
        ...

    def clear(self) -> int:
        """
        Hard-delete every row the seeder owns.

        Returns:
            Number of rows removed (0 when already empty)
        """
        ...
