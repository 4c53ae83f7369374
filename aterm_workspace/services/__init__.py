"""Services for aterm-workspace."""
