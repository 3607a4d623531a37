"""
Third-party OAuth authorization messages.

OAuth messages use the synthetic ``OAUTH`` method. A connector opens the
authorization URL and waits for the completion notice on its OAuth channel.
"""

from orestes.message.message import Message

OAUTH = "OAUTH"

_OAUTH_QUERY = ("client_id", "scope", "state")


def _redirect_to(provider: str):
    def add_redirect_origin(self, base_uri: str) -> Message:
        """Append the redirect URI the provider sends the user back to."""
        return self.add_query_string({"redirect_uri": f"{base_uri}/db/User/OAuth/{provider}"})

    return add_redirect_origin


def _twitter_redirect(self, base_uri: str) -> Message:
    self.request.path = f"{base_uri}/db/User/OAuth1/twitter"
    return self


GoogleOAuth = Message.create_external(
    method=OAUTH,
    path="https://accounts.google.com/o/oauth2/auth?response_type=code&access_type=online",
    query=_OAUTH_QUERY,
    status=[200],
    members={"add_redirect_origin": _redirect_to("google")},
    name="GoogleOAuth",
)

FacebookOAuth = Message.create_external(
    method=OAUTH,
    path="https://www.facebook.com/v7.0/dialog/oauth?response_type=code",
    query=_OAUTH_QUERY,
    status=[200],
    members={"add_redirect_origin": _redirect_to("facebook")},
    name="FacebookOAuth",
)

GitHubOAuth = Message.create_external(
    method=OAUTH,
    path="https://github.com/login/oauth/authorize?response_type=code&access_type=online",
    query=_OAUTH_QUERY,
    status=[200],
    members={"add_redirect_origin": _redirect_to("github")},
    name="GitHubOAuth",
)

LinkedInOAuth = Message.create_external(
    method=OAUTH,
    path="https://www.linkedin.com/oauth/v2/authorization?response_type=code",
    query=_OAUTH_QUERY,
    status=[200],
    members={"add_redirect_origin": _redirect_to("linkedin")},
    name="LinkedInOAuth",
)

# Twitter uses OAuth 1; the server starts the flow itself.
TwitterOAuth = Message.create_external(
    method=OAUTH,
    path="",
    query=(),
    status=[200],
    members={"add_redirect_origin": _twitter_redirect},
    name="TwitterOAuth",
)

# Salesforce hosts one authorization endpoint per org; callers set it via set_path.
SalesforceOAuth = Message.create_external(
    method=OAUTH,
    path="",
    query=_OAUTH_QUERY,
    status=[200],
    members={"add_redirect_origin": _redirect_to("salesforce")},
    name="SalesforceOAuth",
)