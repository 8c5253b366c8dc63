"""Bitbucket Server pull-request events to Microsoft Teams notifications."""

__version__ = "1.0.0"
