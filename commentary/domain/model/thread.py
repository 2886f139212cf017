"""Public thread views.

Read models for the post page: a top-level comment with its replies,
each annotated with whether the viewer likes it.
"""

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel


class CommentView(DomainModel):
    """A comment as seen by one viewer."""

    comment: Comment
    is_liked: bool = False


class CommentThread(CommentView):
    """A top-level comment and its replies, oldest reply first."""

    replies: list[CommentView] = []
