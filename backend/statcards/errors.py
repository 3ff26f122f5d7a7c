class CardServiceError(RuntimeError):
    """Base class for failures raised while building an aggregate."""

    status_code = 500


class RemoteFetchError(CardServiceError):
    """Transport failure or non-success status from the GitHub API."""

    status_code = 502


class GraphProtocolError(RemoteFetchError):
    """GitHub answered with a GraphQL ``errors`` array."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(f"GraphQL errors: {', '.join(messages)}")


class UserNotFoundError(CardServiceError):
    status_code = 404

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"GitHub user not found: {username}")


class MissingStatsError(CardServiceError):
    """Contributions summary missing from an otherwise successful fetch."""

    status_code = 502


class MissingUsernameError(CardServiceError):
    """No username in the request and no GITHUB_USERNAME configured."""

    status_code = 400
