"""GitHub integration — run context and pull request comments."""

from tfreport.github.comments import GhCommentStore
from tfreport.github.context import GitHubContext, load_context

__all__ = ["GhCommentStore", "GitHubContext", "load_context"]
