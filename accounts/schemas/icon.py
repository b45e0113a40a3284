"""Icon upload payload handed to the profile updater."""

from pydantic import BaseModel


class IconUpload(BaseModel):
    content: bytes
    content_type: str
    filename: str

    @property
    def byte_size(self) -> int:
        return len(self.content)
