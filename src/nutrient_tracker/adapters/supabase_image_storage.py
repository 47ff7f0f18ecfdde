"""Supabase Storage adapter for captured photos."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrient_tracker.services.capture import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores photos in a Supabase Storage bucket under the owner's folder."""

    client: Client
    bucket: str = "uploaded-images"

    def upload_image(
        self, owner_id: UUID, image_id: UUID, content: bytes, content_type: str
    ) -> str:
        """Upload image bytes and return the object path."""
        path = image_path(owner_id, image_id)
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={"content-type": content_type},
        )
        return path

    def delete_image(self, owner_id: UUID, image_id: UUID) -> None:
        """Remove an image from the bucket."""
        self.client.storage.from_(self.bucket).remove([image_path(owner_id, image_id)])


def image_path(owner_id: UUID, image_id: UUID) -> str:
    """Return the object path for an owner's image."""
    return f"{owner_id}/{image_id}.jpg"
