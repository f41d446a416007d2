"""Clients for the chat platform and the email campaign service."""

from newsdesk.integrations.campaigns import CampaignClient, CampaignServiceError
from newsdesk.integrations.slack import SlackAPIError, SlackClient

__all__ = ["CampaignClient", "CampaignServiceError", "SlackAPIError", "SlackClient"]
