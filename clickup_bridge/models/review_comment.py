"""Line-level or file-level comment attached to a pull request review."""

from pydantic import BaseModel


class ReviewComment(BaseModel):
    """Comment left as part of a single review."""

    body: str
    path: str
    position: int | None = None
