"""GitLab tool modules; every `async def gitlab_*(client, ...)` here is registered."""
