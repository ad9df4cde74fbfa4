"""
Remote feed sources.

- models.py: FeedItem, one GitLab To-Do as returned by the API
- client.py: httpx client for the GitLab To-Do API and a JSON-dump source
"""
