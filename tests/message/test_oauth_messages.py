"""
Tests for the OAuth and connect messages.
"""

import pytest

from orestes.message import (
    OAUTH,
    Connect,
    FacebookOAuth,
    GitHubOAuth,
    GoogleOAuth,
    LinkedInOAuth,
    SalesforceOAuth,
    StatusCode,
    TwitterOAuth,
)


class TestOAuthMessages:
    """Tests for the OAuth provider messages."""

    def test_google(self):
        """The provider URL is completed with the client parameters."""
        message = GoogleOAuth("cid", "email profile", "st")

        assert message.request.method == OAUTH
        assert message.get_path() == (
            "https://accounts.google.com/o/oauth2/auth?response_type=code&access_type=online"
            "&client_id=cid&scope=email%20profile&state=st"
        )

    def test_missing_parameters_are_skipped(self):
        """Unset client parameters are left out."""
        message = FacebookOAuth("cid", None, None)

        assert message.get_path() == (
            "https://www.facebook.com/v7.0/dialog/oauth?response_type=code&client_id=cid"
        )

    @pytest.mark.parametrize(
        "message_class, provider",
        [
            (GoogleOAuth, "google"),
            (FacebookOAuth, "facebook"),
            (GitHubOAuth, "github"),
            (LinkedInOAuth, "linkedin"),
        ],
    )
    def test_redirect_origin(self, message_class, provider):
        """The redirect URI points at the provider callback of the app."""
        message = message_class("cid", None, None).add_redirect_origin("https://app.example.com/v1")

        assert message.get_path().endswith(
            "&redirect_uri=https%3A%2F%2Fapp.example.com%2Fv1%2Fdb%2FUser%2FOAuth%2F" + provider
        )

    def test_twitter_redirect(self):
        """Twitter starts its flow at the server."""
        message = TwitterOAuth().add_redirect_origin("https://app.example.com/v1")

        assert message.get_path() == "https://app.example.com/v1/db/User/OAuth1/twitter"

    def test_salesforce_endpoint(self):
        """The Salesforce endpoint is set per org and keeps the client parameters."""
        message = SalesforceOAuth("cid", None, None)
        message.set_path("https://org.my.salesforce.com/services/oauth2/authorize")

        assert message.get_path() == (
            "https://org.my.salesforce.com/services/oauth2/authorize?client_id=cid"
        )

    def test_oauth_messages_accept_ok_only(self):
        """OAuth messages only accept a successful completion."""
        assert GoogleOAuth.spec.status == frozenset({200})


class TestConnect:
    """Tests for the connect message."""

    def test_connect(self):
        """The connect message targets the handshake path."""
        message = Connect()

        assert message.request.method == "GET"
        assert message.get_path() == "/connect"
        assert Connect.spec.status == frozenset({200, 304})


class TestStatusCode:
    """Tests for StatusCode."""

    @pytest.mark.parametrize(
        "code, value",
        [
            (StatusCode.NOT_MODIFIED, 304),
            (StatusCode.OBJECT_NOT_FOUND, 404),
            (StatusCode.OBJECT_OUT_OF_DATE, 412),
            (StatusCode.BAD_CREDENTIALS, 460),
            (StatusCode.SCRIPT_ABORTION, 475),
        ],
    )
    def test_values(self, code, value):
        """Status codes compare equal to their integer values."""
        assert code == value
