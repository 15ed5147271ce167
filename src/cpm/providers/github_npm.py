"""
GitHub Packages npm 레지스트리 프로바이더 (@builtin/cpm-github-npm)

GitHub의 npm 레지스트리(https://npm.pkg.github.com) 전용입니다.
Maven, NuGet 등 다른 생태계는 별도 프로바이더로 만들어야 합니다.

설정: token, publish, releases
저장소 조회: repo_registry에 "github-npm"으로 등록
"""

from typing import Any, Dict, Optional

import httpx

from ..infrastructure.providers.repo_registry import repo_registry
from ._common import GatedSetting, TokenGatedProvider, fetch_json

GITHUB_NPM_REGISTRY_URL = "https://npm.pkg.github.com"
GITHUB_API_URL = "https://api.github.com"


class GitHubNpmProvider(TokenGatedProvider):
    """GitHub Packages (npm) 프로바이더"""

    name = "GitHub npm"
    registry_url = GITHUB_NPM_REGISTRY_URL
    gated_settings = (
        GatedSetting("publish", "Publish", True, "A token is required to enable publishing."),
        GatedSetting("releases", "Releases", False, "A token is required to enable releases."),
    )


async def fetch_repo_info(
    repo: str,
    token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    GitHub API로 저장소 공개 여부 조회

    Args:
        repo: "owner/repo" 형식 (owner 앞의 '@'는 무시)
        token: GitHub 토큰 (선택, 실패 시 비인증 재시도)
        client: httpx 클라이언트 (선택)

    Returns:
        {"is_public": bool | None, "repo": str, "data"?: dict, "error"?: str}
    """
    if not repo or not isinstance(repo, str) or "/" not in repo:
        return {"is_public": False, "repo": repo, "error": "Invalid repo format. Use 'owner/repo'."}

    owner, rest = repo.split("/", 1)
    url = f"{GITHUB_API_URL}/repos/{owner.lstrip('@')}/{rest}"

    try:
        response, data = await fetch_json(url, token=token, client=client)
    except httpx.HTTPError as e:
        return {"is_public": False, "repo": repo, "error": str(e)}

    if not response.is_success:
        if response.status_code == 404:
            error = "Repository not found or is not public."
        else:
            error = f"GitHub API error: {response.status_code}"
        return {"is_public": False, "repo": repo, "error": error, "data": data}

    private = data.get("private") if isinstance(data, dict) else None
    is_public = (not private) if isinstance(private, bool) else None
    return {"is_public": is_public, "repo": repo, "data": data}


provider = GitHubNpmProvider()
repo_registry.register("github-npm", fetch_repo_info)
