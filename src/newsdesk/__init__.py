"""Newsdesk — editorial workflow for drafting, staging and publishing stories."""
