from accounts.storage.blob_store import (
    BlobStore,
    LocalBlobStore,
    RemoteBlobStore,
    get_blob_store,
)

__all__ = ["BlobStore", "LocalBlobStore", "RemoteBlobStore", "get_blob_store"]
