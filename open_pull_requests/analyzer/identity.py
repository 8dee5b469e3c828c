"""Resolution of the user the token belongs to."""

import logging

from ..api_client import GitHubAPIClient


async def resolve_identity(client: GitHubAPIClient) -> str:
    """Return the login of the authenticated user.

    Raises:
        AuthError: If the token is invalid or the lookup fails
    """
    user = await client.get_authenticated_user()
    login = user['login']
    logging.info(f"Authenticated as {login}")
    return login
