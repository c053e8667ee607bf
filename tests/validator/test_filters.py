"""Unit tests for LDAP filter syntax checks."""

from authconf.sink import ErrorSink
from authconf.validator import check_filter, check_groups_filter, check_users_filter

USERNAME_ATTRIBUTE_MISSING = (
    "Unable to detect {username_attribute} placeholder in users_filter, "
    "your configuration is broken. Please review configuration options listed at "
    "https://docs.authelia.com/configuration/authentication/ldap.html"
)
INPUT_MISSING = (
    "Unable to detect {input} placeholder in users_filter, "
    "your configuration might be broken. Please review configuration options listed at "
    "https://docs.authelia.com/configuration/authentication/ldap.html"
)


class TestFilterChecks:
    """Test search filter checks."""

    def setup_method(self) -> None:
        """Setup test fixtures."""
        self.sink = ErrorSink()

    def test_valid_users_filter(self) -> None:
        """Test a well formed users filter passes."""
        check_users_filter("(&({username_attribute}={input})(objectClass=person))", self.sink)
        assert self.sink.count() == 0

    def test_users_filter_missing_both_placeholders(self) -> None:
        """Test both missing placeholders are reported independently."""
        check_users_filter("(objectClass=person)", self.sink)
        assert self.sink.errors == [USERNAME_ATTRIBUTE_MISSING, INPUT_MISSING]

    def test_users_filter_missing_everything(self) -> None:
        """Test parenthesis and placeholder problems are all reported."""
        check_users_filter("uid=john", self.sink)
        assert self.sink.errors == [
            "The users filter should contain enclosing parenthesis. "
            "For instance uid=john should be (uid=john)",
            USERNAME_ATTRIBUTE_MISSING,
            INPUT_MISSING,
        ]

    def test_groups_filter_needs_no_placeholder(self) -> None:
        """Test a groups filter only needs enclosing parenthesis."""
        check_groups_filter("(objectClass=group)", self.sink)
        assert self.sink.count() == 0

    def test_only_closing_parenthesis(self) -> None:
        """Test a filter needs both the opening and the closing parenthesis."""
        check_groups_filter("(cn={input}", self.sink)
        check_groups_filter("cn={input})", self.sink)
        assert self.sink.count() == 2

    def test_custom_placeholders(self) -> None:
        """Test arbitrary placeholders can be required."""
        check_filter("(member={dn})", "groups", self.sink, [("{dn}", "no dn"), ("{input}", "no input")])
        assert self.sink.errors == ["no input"]

    def test_filter_is_not_modified(self) -> None:
        """Test the checker leaves the filter value alone."""
        value = "cn={input}"
        check_groups_filter(value, self.sink)
        assert value == "cn={input}"
