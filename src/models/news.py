# src/models/news.py

"""News article model for the decorative headlines section."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NewsArticle:
    """A single headline returned by the news provider."""

    title: str
    url: str
    source: str
    published_at: str
    description: str = ""
    image: str = ""
    author: str = ""
