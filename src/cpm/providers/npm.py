"""
npm 프로바이더 (@builtin/cpm-npm)

설정: token, publish, allowPrivate
저장소 조회: repo_registry에 "npm"으로 등록
"""

from typing import Any, Dict, Optional

import httpx

from ..infrastructure.providers.repo_registry import repo_registry
from ._common import GatedSetting, TokenGatedProvider, fetch_json

NPM_REGISTRY_URL = "https://registry.npmjs.org"


class NpmProvider(TokenGatedProvider):
    """npm 공개 레지스트리 프로바이더"""

    name = "npm"
    registry_url = NPM_REGISTRY_URL
    gated_settings = (
        GatedSetting("publish", "Publish", True, "A token is required to enable publishing."),
        GatedSetting("allowPrivate", "Allow Private", False, "A token is required to allow private packages."),
    )


async def fetch_package_info(
    package: str,
    token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    npm 레지스트리에서 패키지 존재 여부 조회

    Args:
        package: 패키지 이름 (예: "left-pad", "@scope/name")
        token: npm 토큰 (선택)
        client: httpx 클라이언트 (선택)

    Returns:
        {"exists": bool, "package": str, "data"?: dict, "error"?: str}
    """
    try:
        response, data = await fetch_json(f"{NPM_REGISTRY_URL}/{package}", token=token, client=client)
    except httpx.HTTPError as e:
        return {"exists": False, "package": package, "error": str(e)}

    if response.is_success and isinstance(data, dict) and data.get("name"):
        return {"exists": True, "package": package, "data": data}
    return {"exists": False, "package": package, "error": "Package not found.", "data": data}


provider = NpmProvider()
repo_registry.register("npm", fetch_package_info)
