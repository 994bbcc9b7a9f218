# agent/api_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Optional
from urllib.parse import urlencode, urljoin

from ..schemas import Agent, AgentRoster, RosterError


class APIError(Exception):
    """Raised when API requests fail."""
    pass


class APIClient:
    """HTTP client for reading the agent roster from the control plane."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the API (e.g., "https://api.example.com")
            timeout: Socket timeout in seconds
        """
        # Ensure base_url doesn't end with /
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        headers: Optional[dict] = None,
    ) -> dict:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., "/agents")
            headers: Optional additional headers

        Returns:
            Parsed JSON response as dictionary

        Raises:
            APIError: If the request fails
        """
        url = urljoin(self.base_url + "/", path.lstrip("/"))

        req_headers = {
            "Accept": "application/json",
        }
        if headers:
            req_headers.update(headers)

        req = urllib.request.Request(url, headers=req_headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                response_data = response.read().decode("utf-8")
                if response_data:
                    return json.loads(response_data)
                return {}
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8") if e.fp else ""
            raise APIError(f"API request failed: {e.code} {e.reason}. {error_body}")
        except urllib.error.URLError as e:
            raise APIError(f"Network error: {e.reason}")
        except json.JSONDecodeError as e:
            raise APIError(f"Invalid JSON response: {e}")

    def list_agents(self, repo: Optional[str] = None) -> list[Agent]:
        """
        Fetch the agents registered for a repository.

        Args:
            repo: Optional repository name to scope the roster to

        Returns:
            Agents as reported by the API, available or not
        """
        path = "/agents"
        if repo:
            path += "?" + urlencode({"repo": repo})
        response = self._request("GET", path)
        if not isinstance(response, dict):
            raise APIError("Invalid roster response: expected a JSON object")
        try:
            return AgentRoster.from_data(response, source=self.base_url + path).agents
        except RosterError as e:
            raise APIError(str(e)) from e
