"""API wrapper for the YouTrack knowledge-base REST API.

This module wraps a requests session and provides error translation from
HTTP failures to our typed exception hierarchy. It integrates with the
retry logic for handling rate limits. Only read and update operations are
exposed: the sync tool never creates or deletes articles.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from .auth import KnowledgeBaseConfig, auth_headers
from .errors import (
    APIUnreachableError,
    ArticleNotFoundError,
    InvalidCredentialsError,
    ServiceError,
)
from .models import KnowledgeBase, RemoteArticle
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)


class APIWrapper:
    """Thin wrapper over the YouTrack REST API with error translation.

    This class:
    1. Authenticates every request with the configured bearer token
    2. Translates HTTP errors to typed exceptions
    3. Retries 429 rate limits with backoff
    4. Converts article JSON into RemoteArticle snapshots

    Example:
        >>> config = KnowledgeBaseConfig(url="https://yt.example.com", token="perm:...", kb_key="KB")
        >>> api = APIWrapper(config)
        >>> articles = api.list_articles()
    """

    ARTICLE_FIELDS = (
        "id,idReadable,summary,content,ordinal,"
        "parentArticle(id),project(id,name,shortName)"
    )
    PROJECT_FIELDS = "project(id,name,shortName)"

    # Articles fetched per request; a shorter page marks the last one
    PAGE_SIZE = 500

    TIMEOUT = 30

    ARTICLE_ID_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')

    def __init__(
        self,
        config: KnowledgeBaseConfig,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the API wrapper.

        Args:
            config: YouTrack URL, token and knowledge-base key
            session: Optional pre-built session (tests inject a mock)
        """
        self._config = config
        self._session = session

    @property
    def base_url(self) -> str:
        return self._config.url.rstrip('/')

    def _get_session(self) -> requests.Session:
        """Get or lazily create the authenticated session."""
        if self._session is None:
            session = requests.Session()
            session.headers.update(auth_headers(self._config))
            self._session = session
        return self._session

    def _validate_article_id(self, article_id: str) -> None:
        """Reject IDs that could alter the request path."""
        if not article_id or not str(article_id).strip():
            raise ValueError("article_id cannot be empty")
        if not self.ARTICLE_ID_PATTERN.match(str(article_id)):
            raise ValueError(
                f"Invalid article_id format: '{article_id}'. "
                f"Article IDs may only contain letters, digits, '.', '_' and '-'."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens and token values in error text."""
        if not text:
            return text
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(api_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized.replace(self._config.token, '***REDACTED***') if self._config.token else sanitized

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            APIUnreachableError: On connection failures and timeouts
            InvalidCredentialsError: On 401/403
            ServiceError: On any other non-success status
            APIAccessError: If rate limiting persists after retries
        """
        url = f"{self.base_url}{path}"

        def _send() -> Any:
            try:
                response = self._get_session().request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    timeout=self.TIMEOUT,
                )
            except (Timeout, ConnectionError) as e:
                raise APIUnreachableError(
                    self.base_url, self._sanitize_credentials(str(e))
                ) from e
            except RequestException as e:
                raise APIUnreachableError(
                    self.base_url, self._sanitize_credentials(str(e))
                ) from e

            if response.status_code in (401, 403):
                raise InvalidCredentialsError(url, status_code=response.status_code)

            if not response.ok:
                message = self._sanitize_credentials((response.text or "").strip())
                logger.error(f"API operation failed: {method} {path} - {response.status_code} {message}")
                raise ServiceError(response.status_code, message, endpoint=url)

            try:
                return response.json()
            except ValueError as e:
                raise ServiceError(
                    response.status_code,
                    "Response body is not valid JSON",
                    endpoint=url,
                ) from e

        return retry_on_rate_limit(_send)

    def list_articles(self) -> List[RemoteArticle]:
        """Fetch every article of the configured knowledge base.

        Pages through /api/articles and filters client-side on the
        knowledge-base key, which may be a project ID, short name or name.

        Returns:
            Flat list of RemoteArticle in server order

        Raises:
            APIUnreachableError, ServiceError, APIAccessError
        """
        articles: List[RemoteArticle] = []
        skip = 0

        while True:
            logger.info(f"YouTrack API: GET /api/articles ($skip={skip}, $top={self.PAGE_SIZE})")
            page = self._request(
                "GET",
                "/api/articles",
                params={
                    "fields": self.ARTICLE_FIELDS,
                    "$top": self.PAGE_SIZE,
                    "$skip": skip,
                },
            )
            if not isinstance(page, list):
                raise ServiceError(200, "Unexpected response for article list")

            for item in page:
                if not self._matches_knowledge_base(item):
                    continue
                article = self._to_remote_article(item)
                if article is not None:
                    articles.append(article)

            if len(page) < self.PAGE_SIZE:
                break
            skip += self.PAGE_SIZE

        logger.debug(f"Fetched {len(articles)} article(s) for knowledge base '{self._config.kb_key}'")
        return articles

    def update_article(self, article_id: str, title: str, content: str) -> RemoteArticle:
        """Overwrite an existing article's title and content.

        Args:
            article_id: ID of the article to update
            title: New title
            content: New markdown body

        Returns:
            The updated RemoteArticle as returned by the server

        Raises:
            ValueError: If article_id is malformed
            ArticleNotFoundError: If the article does not exist
            APIUnreachableError, ServiceError, APIAccessError
        """
        self._validate_article_id(article_id)
        logger.info(f"YouTrack API: POST /api/articles/{article_id}")

        try:
            data = self._request(
                "POST",
                f"/api/articles/{article_id}",
                params={"fields": self.ARTICLE_FIELDS},
                payload={"summary": title, "content": content},
            )
        except ServiceError as e:
            if e.status_code == 404:
                raise ArticleNotFoundError(article_id, endpoint=e.endpoint) from e
            raise

        article = self._to_remote_article(data if isinstance(data, dict) else {})
        if article is None:
            # Server acknowledged without echoing the article
            article = RemoteArticle(
                article_id=article_id,
                title=title,
                content=content,
                url=f"{self.base_url}/articles/{article_id}",
            )
        return article

    def list_knowledge_bases(self) -> List[KnowledgeBase]:
        """List the knowledge bases the token can read.

        Tries /api/knowledgeBases first; servers without that endpoint fall
        back to the distinct projects of all readable articles.
        """
        try:
            data = self._request("GET", "/api/knowledgeBases")
            if isinstance(data, list):
                bases = [
                    KnowledgeBase(key=str(item.get("key", "")), name=str(item.get("name", "")))
                    for item in data
                    if isinstance(item, dict) and item.get("key")
                ]
                return bases
        except InvalidCredentialsError:
            raise
        except ServiceError as e:
            logger.debug(f"knowledgeBases endpoint unavailable ({e.status_code}), falling back to projects")

        data = self._request(
            "GET",
            "/api/articles",
            params={"fields": self.PROJECT_FIELDS, "$top": 1000},
        )
        projects: Dict[str, str] = {}
        for item in data if isinstance(data, list) else []:
            project = item.get("project") or {}
            key = project.get("shortName") or project.get("id")
            if key and project.get("name"):
                projects[str(key)] = str(project["name"])

        return sorted(
            (KnowledgeBase(key=key, name=name) for key, name in projects.items()),
            key=lambda kb: kb.name.lower(),
        )

    def _matches_knowledge_base(self, item: Dict[str, Any]) -> bool:
        kb_key = self._config.kb_key
        if not kb_key:
            return True
        project = item.get("project") or {}
        return kb_key in (project.get("id"), project.get("shortName"), project.get("name"))

    def _to_remote_article(self, item: Dict[str, Any]) -> Optional[RemoteArticle]:
        """Convert article JSON into a RemoteArticle (None if it has no ID)."""
        article_id = item.get("id")
        if not article_id:
            logger.warning(f"Article data missing 'id' field, skipping: {str(item)[:80]}")
            return None

        parent = item.get("parentArticle") or {}
        parent_id = parent.get("id") or None

        ordinal = item.get("ordinal")
        try:
            order = int(ordinal) if ordinal is not None else 0
        except (TypeError, ValueError):
            order = 0

        readable_id = item.get("idReadable") or article_id
        return RemoteArticle(
            article_id=str(article_id),
            title=item.get("summary") or "",
            content=item.get("content") or "",
            parent_id=str(parent_id) if parent_id else None,
            order=order,
            url=f"{self.base_url}/articles/{readable_id}",
        )
