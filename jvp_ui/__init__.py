"""Command-line front-end for jira-version-param."""
