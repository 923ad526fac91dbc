import hashlib
from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    """What the page shows. Exactly one status is active at a time."""

    status: Status = Status.IDLE
    prediction: str | None = None
    explanation: str | None = None
    error: str | None = None
    error_kind: str | None = None

    @classmethod
    def idle(cls):
        return cls(Status.IDLE)

    @classmethod
    def loading(cls):
        return cls(Status.LOADING)

    @classmethod
    def success(cls, prediction, explanation=None):
        return cls(Status.SUCCESS, prediction=prediction, explanation=explanation)

    @classmethod
    def failed(cls, message, kind=None):
        return cls(Status.ERROR, error=message, error_kind=kind)


@dataclass(frozen=True)
class UploadedImage:
    name: str
    data: bytes
    mime_type: str = "image/jpeg"

    @classmethod
    def from_upload(cls, uploaded_file):
        """Build from a Streamlit UploadedFile (or any file-like with a name)."""
        uploaded_file.seek(0)
        data = uploaded_file.read()
        uploaded_file.seek(0)
        return cls(
            name=getattr(uploaded_file, "name", "upload.jpg"),
            data=data,
            mime_type=getattr(uploaded_file, "type", None) or "image/jpeg",
        )

    @property
    def digest(self):
        return hashlib.md5(self.data).hexdigest()

    @property
    def url(self):
        # session-local reference, analogous to a browser object URL
        return f"upload://{self.digest}/{self.name}"
