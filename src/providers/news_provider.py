# src/providers/news_provider.py

"""NewsAPI provider for the headlines section."""

from typing import Any

from src.errors import InvalidQueryError
from src.models.news import NewsArticle
from src.providers.base_provider import BaseProvider


class NewsProvider(BaseProvider):
    """Fetch top headlines or search articles."""

    def __init__(self) -> None:
        super().__init__("news")

    def health_url(self) -> str:
        return "https://newsapi.org"

    def top_headlines(
        self,
        category: str | None = None,
        country: str | None = None,
        page_size: int | None = None,
    ) -> list[NewsArticle]:
        """Return the latest headlines for a category and country."""
        payload = self._fetch_json(
            self.settings.NEWS_HEADLINES_URL,
            params={
                "apiKey": self.settings.NEWS_API_KEY,
                "category": category or self.settings.NEWS_CATEGORY,
                "country": country or self.settings.NEWS_COUNTRY,
                "pageSize": page_size or self.settings.NEWS_PAGE_SIZE,
            },
            context="top-headlines",
        )
        articles = self._parse(payload)
        self.logger.info("News fetched: %d articles", len(articles))
        return articles

    def search(
        self,
        query: str,
        language: str = "en",
        page_size: int = 10,
    ) -> list[NewsArticle]:
        """Search all articles for ``query``, newest first."""
        if not query.strip():
            raise InvalidQueryError("Search query is required")
        payload = self._fetch_json(
            self.settings.NEWS_SEARCH_URL,
            params={
                "apiKey": self.settings.NEWS_API_KEY,
                "q": query.strip(),
                "language": language,
                "pageSize": page_size,
                "sortBy": "publishedAt",
            },
            context="everything",
        )
        articles = self._parse(payload)
        self.logger.info(
            "News search '%s' returned %d articles", query, len(articles)
        )
        return articles

    def _parse(self, payload: dict[str, Any]) -> list[NewsArticle]:
        """Convert NewsAPI articles, skipping entries without a title or URL."""
        raw_articles = self._require(payload, "articles", list)
        articles: list[NewsArticle] = []
        for raw in raw_articles:
            if not isinstance(raw, dict):
                continue
            title = raw.get("title")
            url = raw.get("url")
            if not isinstance(title, str) or not isinstance(url, str):
                self.logger.debug("Skipped malformed article: %s", raw)
                continue
            source = raw.get("source")
            source_name = (
                source.get("name") if isinstance(source, dict) else None
            )
            articles.append(
                NewsArticle(
                    title=title,
                    url=url,
                    source=source_name or "",
                    published_at=raw.get("publishedAt") or "",
                    description=raw.get("description") or "",
                    image=raw.get("urlToImage") or "",
                    author=raw.get("author") or "",
                )
            )
        return articles
