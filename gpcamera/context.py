"""
GPContext ownership.

A Context carries libgphoto2's per-session state (progress and error
callbacks). One is created per camera session or per discovery call and is
released exactly once.
"""

from typing import Optional

from .backend import GPhotoBackend, get_default_backend
from .errors import GP_ERROR_NO_MEMORY, ContextInitError
from .resources import NativeResource


class Context(NativeResource):
    """Owned GPContext handle."""

    def __init__(self, backend: Optional[GPhotoBackend] = None):
        """
        Allocate a native context.

        Raises:
            ContextInitError: if libgphoto2 cannot allocate the context
        """
        self.backend = backend or get_default_backend()
        handle = self.backend.context_new()
        if handle is None:
            raise ContextInitError("Cannot initialize context", GP_ERROR_NO_MEMORY)
        super().__init__(handle, self.backend.context_unref, "GPContext")

    def free(self):
        """Release the native context. Calling this twice raises ResourceReleasedError."""
        self.release()
