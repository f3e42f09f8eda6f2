"""Label service - Business logic for label operations."""

from __future__ import annotations

from taskhub.models import Label, LabelCreate
from taskhub.repositories import LabelRepository


class LabelService:
    """Service for the label catalogue.

    Tasks only ever reference labels; creating them happens here.
    """

    def __init__(self, label_repository: LabelRepository):
        """Initialize the label service.

        Args:
            label_repository: LabelRepository implementation for data access
        """
        self.repository = label_repository

    async def list_labels(self) -> list[Label]:
        """List all labels."""
        return await self.repository.list_all()

    async def get_label(self, label_id: str) -> Label:
        """Get a specific label by ID.

        Raises:
            LabelNotFoundError: If the label does not exist
        """
        return await self.repository.get(label_id)

    async def create_label(self, name: str, *, color: str | None = None) -> Label:
        """Create a new label.

        Args:
            name: Label name (required, e.g., "Bug", "@home")
            color: Optional color, hex code or name

        Returns:
            Created Label object

        Raises:
            DuplicateLabelError: If the name is already taken
        """
        label_data = LabelCreate(name=name, color=color)
        return await self.repository.create(label_data)


def get_label_service() -> LabelService:
    """Factory function to get a LabelService instance."""
    from taskhub.adapters.sqlite import SqliteLabelRepository
    from taskhub.services.config_service import get_config_service

    return LabelService(SqliteLabelRepository(db_path=get_config_service().config.db_path))
