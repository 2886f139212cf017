"""Strongly typed identifiers for comment engine entities.

Posts and users are owned by other parts of the platform; their ids are
opaque foreign keys here.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
LikeId = NewType("LikeId", UUID)
ReportId = NewType("ReportId", UUID)
