"""Comment sentiment through the history of a repository."""
